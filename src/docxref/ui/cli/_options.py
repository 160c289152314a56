"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from docxref.core.config import AttachMode


INPUTS_PANEL = "Input Handling"
REGISTRY_PANEL = "Registry"
OUTPUT_PANEL = "Output"

SourcePathArgument = Annotated[
    list[Path] | None,
    typer.Argument(
        metavar="PATH...",
        help="Fragment files (.js, .json) or directories scanned recursively.",
        exists=True,
        file_okay=True,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file providing sources and defaults.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

PatternOption = Annotated[
    str | None,
    typer.Option(
        "--pattern",
        help="Glob used to select fragment scripts inside directories (default: *.js).",
        rich_help_panel=INPUTS_PANEL,
    ),
]

ValidateOption = Annotated[
    bool | None,
    typer.Option(
        "--validate/--no-validate",
        help="Validate implementor records before registering them.",
        show_default=False,
        rich_help_panel=REGISTRY_PANEL,
    ),
]

AttachOption = Annotated[
    AttachMode | None,
    typer.Option(
        "--attach",
        help="Attach the consumer before (early) or after (late) the producers register.",
        case_sensitive=False,
        show_default=False,
        rich_help_panel=REGISTRY_PANEL,
    ),
]

NamespaceOption = Annotated[
    list[str] | None,
    typer.Option(
        "--namespace",
        "-n",
        help="Only register fragments for this namespace. Repeat to allow several.",
        rich_help_panel=REGISTRY_PANEL,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print the collected index as JSON instead of a table.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

SidebarPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="SIDEBAR",
        help="A sidebar-items.js script.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]
