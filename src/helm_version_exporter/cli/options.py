"""Shared CLI options."""

from __future__ import annotations

from typing import Optional

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Namespace holding Argo CD Applications (default: $NAMESPACE or argocd)")
ContextOption = typer.Option(None, "--context", help="Kubernetes context name")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging (also LOGLEVEL=debug)")
WorkersOption = typer.Option(None, "--workers", help="Parallel repository index fetches per cycle")
