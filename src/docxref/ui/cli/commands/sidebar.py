"""Print the entries of a module sidebar fragment."""

from __future__ import annotations

import typer

from docxref.core.exceptions import DocxrefError
from docxref.core.loader import read_sidebar_index, sidebar_namespace

from .._options import SidebarPathArgument
from ..presenter import present_sidebar
from ..state import emit_error, get_cli_state


def sidebar(path: SidebarPathArgument) -> None:
    """List the functions, types and modules declared in a sidebar script."""
    try:
        index = read_sidebar_index(path)
    except DocxrefError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    present_sidebar(get_cli_state(), index, title=sidebar_namespace(path))


__all__ = ["sidebar"]
