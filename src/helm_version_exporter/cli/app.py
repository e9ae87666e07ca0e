"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="helm-version-exporter",
    help="Export whether Argo CD Helm applications run the latest chart version.",
    no_args_is_help=True,
)


def _register_commands() -> None:
    from helm_version_exporter.cli.commands.serve_cmd import app as serve_app
    from helm_version_exporter.cli.commands.check_cmd import app as check_app

    app.add_typer(serve_app, name="serve", help="Serve chart version metrics")
    app.add_typer(check_app, name="check", help="Run a single reconciliation cycle")


_register_commands()


def main() -> None:
    app()
