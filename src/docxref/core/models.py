"""Typed views over the records carried by index fragments.

The registry treats fragments as opaque. These models are only used by the
loader when validation is requested and by the CLI when presenting sidebars.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImplementorDescriptor(BaseModel):
    """One trait implementor entry as emitted in ``implementors`` fragments."""

    model_config = ConfigDict(extra="allow", frozen=True)

    text: str
    synthetic: bool = False
    types: list[str] = Field(default_factory=list)

    def type_names(self) -> list[str]:
        """Return the last path segment of every type the entry is filed under."""
        return [path.rsplit("::", 1)[-1] for path in self.types]


class SidebarEntry(BaseModel):
    """Item listed in a module sidebar (function, struct, enum, module...)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: str
    name: str
    summary: str = ""

    def to_record(self) -> list[str]:
        return [self.kind, self.name, self.summary]


class SidebarIndex(BaseModel):
    """Sidebar entries of one module, kept in emission order."""

    model_config = ConfigDict(extra="forbid")

    entries: list[SidebarEntry] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Iterable[Sequence[Any]]]) -> SidebarIndex:
        """Build the index from the ``{"kind": [[name, summary], ...]}`` layout."""
        entries: list[SidebarEntry] = []
        for kind, items in payload.items():
            for item in items:
                name, *rest = item
                summary = rest[0] if rest else ""
                entries.append(
                    SidebarEntry(kind=str(kind), name=str(name), summary=summary or "")
                )
        return cls(entries=entries)

    @classmethod
    def from_records(cls, records: Iterable[Sequence[Any]]) -> SidebarIndex:
        """Build the index from flat ``[kind, name, summary]`` records."""
        entries = [
            SidebarEntry(kind=kind, name=name, summary=summary)
            for kind, name, summary in records
        ]
        return cls(entries=entries)

    def to_records(self) -> list[list[str]]:
        return [entry.to_record() for entry in self.entries]

    def by_kind(self) -> dict[str, list[SidebarEntry]]:
        grouped: dict[str, list[SidebarEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.kind, []).append(entry)
        return grouped


__all__ = ["ImplementorDescriptor", "SidebarEntry", "SidebarIndex"]
