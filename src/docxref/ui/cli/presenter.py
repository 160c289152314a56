"""Rich presenters for registry summaries and sidebar listings."""

from __future__ import annotations

from collections.abc import Sequence
import json
from pathlib import Path

from rich import box
from rich.table import Table
from rich.text import Text
import typer

from docxref.core.consumers import FragmentCollector
from docxref.core.loader import FragmentSource
from docxref.core.models import SidebarIndex

from .state import CLIState


def _build_table(*, title: str | None, columns: Sequence[str]) -> Table:
    """Create a Rich table with the house style."""
    table = Table(
        title=title or None,
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    for column in columns:
        table.add_column(column)
    return table


def _display_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def present_collection(
    state: CLIState,
    collector: FragmentCollector,
    sources: Sequence[FragmentSource],
) -> None:
    """Print one row per collected namespace with the file that supplied it."""
    origin: dict[str, Path] = {}
    for source in sources:
        for namespace in source.fragments:
            origin[namespace] = source.path

    table = _build_table(title="Registered fragments", columns=("Namespace", "Records", "Source"))
    table.columns[1].justify = "right"
    for namespace in collector.namespaces():
        source_path = origin.get(namespace)
        table.add_row(
            Text(namespace),
            str(len(collector.index[namespace])),
            Text(_display_path(source_path) if source_path else "-"),
        )
    state.console.print(table)
    state.console.print(
        f"{len(collector.index)} namespaces, {collector.total_records()} records, "
        f"{len(collector.deliveries)} deliveries"
    )


def present_collection_json(collector: FragmentCollector) -> None:
    """Emit the collected index as a JSON document on stdout."""
    payload = {
        "namespaces": collector.index,
        "deliveries": len(collector.deliveries),
        "records": collector.total_records(),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def present_sidebar(state: CLIState, index: SidebarIndex, *, title: str | None = None) -> None:
    table = _build_table(title=title, columns=("Kind", "Name", "Summary"))
    for kind, entries in index.by_kind().items():
        for entry in entries:
            table.add_row(Text(kind), Text(entry.name), Text(entry.summary or "-"))
    state.console.print(table)


__all__ = ["present_collection", "present_collection_json", "present_sidebar"]
