from __future__ import annotations

from pydantic import ValidationError
import pytest

from docxref.core.models import ImplementorDescriptor, SidebarEntry, SidebarIndex


def test_implementor_descriptor_type_names() -> None:
    descriptor = ImplementorDescriptor.model_validate(
        {
            "text": "impl Octal for DragAction",
            "synthetic": False,
            "types": ["gdk::auto::flags::DragAction", "Plain"],
        }
    )
    assert descriptor.type_names() == ["DragAction", "Plain"]


def test_implementor_descriptor_keeps_unknown_fields() -> None:
    descriptor = ImplementorDescriptor.model_validate({"text": "impl X", "kind": "blanket"})
    assert descriptor.synthetic is False
    assert descriptor.types == []
    assert descriptor.model_extra == {"kind": "blanket"}


def test_implementor_descriptor_requires_text() -> None:
    with pytest.raises(ValidationError):
        ImplementorDescriptor.model_validate({"synthetic": True})


def test_sidebar_index_from_payload_preserves_order() -> None:
    index = SidebarIndex.from_payload(
        {
            "enum": [["SandboxFlags", "A bitmask."], ["SpawnFlags"]],
            "mod": [["update_monitor", "Monitor updates."]],
        }
    )
    assert index.to_records() == [
        ["enum", "SandboxFlags", "A bitmask."],
        ["enum", "SpawnFlags", ""],
        ["mod", "update_monitor", "Monitor updates."],
    ]
    assert list(index.by_kind()) == ["enum", "mod"]


def test_sidebar_index_round_trips_records() -> None:
    records = [["fn", "get_user_information", "Get the user information"]]
    index = SidebarIndex.from_records(records)
    assert index.entries == [
        SidebarEntry(kind="fn", name="get_user_information", summary="Get the user information")
    ]
    assert index.to_records() == records
