from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from docxref.core.registry import FragmentRegistry, registry_context
from docxref.ui.cli.state import reset_cli_state


OCTAL_IMPLEMENTORS = """\
(function() {var implementors = {};
implementors["cairo"] = [{"text":"impl Octal for PdfOutline","synthetic":false,"types":["cairo::enums::PdfOutline"]}];
implementors["gdk"] = [{"text":"impl Octal for DragAction","synthetic":false,"types":["gdk::auto::flags::DragAction"]},{"text":"impl Octal for EventMask","synthetic":false,"types":["gdk::auto::flags::EventMask"]}];
implementors["pango"] = [{"text":"impl Octal for FontMask","synthetic":false,"types":["pango::auto::flags::FontMask"]}];
if (window.register_implementors) {window.register_implementors(implementors);} else {window.pending_implementors = implementors;}})()
"""

ACCOUNT_SIDEBAR = (
    'initSidebarItems({"fn":[["get_user_information","Get the user information"]],'
    '"struct":[["AccountProxy","The interface lets sandboxed applications query basic '
    'information about the user."],["UserInfo","The response of a '
    '`get_user_information` request."]]});'
)


@pytest.fixture(autouse=True)
def _isolated_state() -> Iterator[None]:
    reset_cli_state()
    with registry_context():
        yield
    reset_cli_state()


@pytest.fixture
def registry() -> FragmentRegistry:
    return FragmentRegistry()


@pytest.fixture
def fragment_tree(tmp_path: Path) -> Path:
    """Write a small documentation output tree containing every fragment layout."""
    root = tmp_path / "doc"
    implementors = root / "implementors" / "core" / "fmt"
    implementors.mkdir(parents=True)
    (implementors / "trait.Octal.js").write_text(OCTAL_IMPLEMENTORS, encoding="utf-8")

    account = root / "ashpd" / "desktop" / "account"
    account.mkdir(parents=True)
    (account / "sidebar-items.js").write_text(ACCOUNT_SIDEBAR, encoding="utf-8")

    (root / "extra.json").write_text(
        '{"zbus": [{"text": "impl Octal for Flags", "synthetic": true, "types": ["zbus::Flags"]}]}',
        encoding="utf-8",
    )
    return root
