"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json

import yaml
from rich.console import Console

from helm_version_exporter.models.status import StatusSample

console = Console()


def output_samples(samples: list[StatusSample], fmt: str) -> None:
    data = [s.to_dict() for s in samples]
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        from helm_version_exporter.output.tables import status_table
        console.print(status_table(samples))

        outdated = [s for s in samples if not s.is_current]
        if outdated:
            console.print(f"\n[yellow]{len(outdated)} chart(s) not on the latest version[/yellow]")
        elif samples:
            console.print("\n[green]All charts are up to date[/green]")
