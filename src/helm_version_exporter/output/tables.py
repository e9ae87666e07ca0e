"""Rich table builders."""

from __future__ import annotations

from rich.table import Table

from helm_version_exporter.models.status import StatusSample


def status_table(samples: list[StatusSample]) -> Table:
    table = Table(title="Helm Chart Versions", expand=True)
    table.add_column("Application", style="cyan", no_wrap=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Repository", style="dim", max_width=40)
    table.add_column("Current", style="dim")
    table.add_column("Latest", style="bold")
    table.add_column("Up-to-date", no_wrap=True)

    for s in samples:
        status = "[green]yes[/green]" if s.is_current else "[yellow]no[/yellow]"
        table.add_row(
            s.application,
            s.chart_name,
            s.repo_url,
            s.current_version,
            s.latest_version,
            status,
        )
    return table
