"""helm-version-exporter check - One reconciliation cycle printed to the console."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from helm_version_exporter.cli.options import ContextOption, NamespaceOption, OutputOption, VerboseOption, WorkersOption
from helm_version_exporter.config.settings import settings
from helm_version_exporter.core.index_resolver import ChartIndexResolver
from helm_version_exporter.core.k8s_client import K8sClient
from helm_version_exporter.core.reconciler import Reconciler
from helm_version_exporter.exceptions import ClusterAccessError, DiscoveryError
from helm_version_exporter.output.formatters import output_samples
from helm_version_exporter.utils.log_setup import configure_logging

app = typer.Typer()
console = Console(stderr=True)


@app.callback(invoke_without_command=True)
def check(
    output: str = OutputOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    verbose: bool = VerboseOption,
    workers: Optional[int] = WorkersOption,
) -> None:
    """Compare every Helm application against its repository once."""
    configure_logging(verbose or settings.verbose)
    ns = namespace or settings.namespace

    with console.status("[bold cyan]Connecting to cluster…") as status:
        k8s = K8sClient(context=context or settings.kube_context)
        try:
            k8s.connect()
            status.update(f"[bold cyan]Listing applications in {ns}…")
            applications = k8s.list_applications(ns)
        except (ClusterAccessError, DiscoveryError) as err:
            console.print(f"[red]{err}[/red]")
            raise typer.Exit(code=1)

        if not applications:
            console.print("[dim]No applications found.[/dim]")
            return

        status.update(f"[bold cyan]Checking {len(applications)} application(s)…")
        reconciler = Reconciler(
            ChartIndexResolver(timeout=settings.request_timeout),
            max_workers=workers if workers is not None else settings.resolver_workers,
        )
        samples = reconciler.run_once(applications)

    output_samples(samples, output)
