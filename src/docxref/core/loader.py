"""Load generated index fragment files and hand them to a registry.

Three layouts are recognised:

``implementors``
    Per-trait scripts (``implementors/core/fmt/trait.Octal.js``) declaring
    ``var implementors`` and then one ``implementors["crate"] = [...];``
    statement per crate. Every statement contributes one namespace keyed
    ``<trait path>/<crate>`` (``core::fmt::Octal/cairo``) so that crates
    implementing several traits keep one fragment per trait.

``sidebar``
    Scripts wrapping a single ``initSidebarItems({...});`` call. The whole file
    is one fragment made of ``[kind, name, summary]`` records, keyed by the
    module path derived from the file location.

``json``
    Plain JSON objects mapping namespace keys to lists of records.

Each loaded file behaves as one producer: :func:`register_sources` issues one
``register`` call per file. Files found while expanding a directory that match
none of these layouts are skipped with a warning.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
import re
from typing import Any, Literal

from pydantic import ValidationError

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import FragmentLoadError, UnrecognisedFragmentError
from .models import ImplementorDescriptor, SidebarIndex
from .registry import Fragment, FragmentRegistry


__all__ = [
    "DEFAULT_PATTERN",
    "FragmentKind",
    "FragmentSource",
    "implementor_namespace",
    "iter_fragment_files",
    "load_fragment_file",
    "parse_implementors",
    "parse_json",
    "parse_sidebar",
    "read_sidebar_index",
    "register_sources",
    "sidebar_namespace",
]

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.js"

FragmentKind = Literal["implementors", "sidebar", "json"]

_IMPLEMENTOR_RE = re.compile(
    r'^\s*implementors\[(?P<key>"(?:[^"\\]|\\.)*")\]\s*=\s*(?P<body>\[.*\]);?\s*$',
    re.MULTILINE,
)
_SIDEBAR_RE = re.compile(r"initSidebarItems\((?P<body>\{.*\})\);?\s*$", re.DOTALL)
_IMPLEMENTOR_BOOTSTRAP_RE = re.compile(
    r"\b(?:var|let|const)\s+implementors\s*=|^\s*implementors\[", re.MULTILINE
)


@dataclass(slots=True)
class FragmentSource:
    """Fragments decoded from a single file."""

    path: Path
    kind: FragmentKind
    fragments: dict[str, Fragment] = field(default_factory=dict)

    @property
    def namespaces(self) -> list[str]:
        return sorted(self.fragments)

    def record_count(self) -> int:
        return sum(len(fragment) for fragment in self.fragments.values())


def _decode(payload: str, what: str) -> Any:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise FragmentLoadError(f"Invalid {what} payload: {exc.msg} (line {exc.lineno})") from exc


def parse_implementors(text: str) -> dict[str, list[Any]]:
    """Return the ``implementors`` assignments found in a script, in source order."""
    fragments: dict[str, list[Any]] = {}
    for match in _IMPLEMENTOR_RE.finditer(text):
        key = _decode(match.group("key"), "namespace key")
        body = _decode(match.group("body"), f"implementors[{key!r}]")
        if not isinstance(body, list):
            raise FragmentLoadError(f"Fragment for {key!r} is not a list.")
        fragments[key] = body
    if not fragments and _IMPLEMENTOR_BOOTSTRAP_RE.search(text) is None:
        raise FragmentLoadError("No implementors assignment found.")
    return fragments


def parse_sidebar(text: str) -> list[list[str]]:
    """Return the ``[kind, name, summary]`` records of an ``initSidebarItems`` script."""
    match = _SIDEBAR_RE.search(text.strip())
    if match is None:
        raise FragmentLoadError("No initSidebarItems call found.")
    payload = _decode(match.group("body"), "sidebar")
    if not isinstance(payload, dict):
        raise FragmentLoadError("Sidebar payload must be an object.")
    try:
        index = SidebarIndex.from_payload(payload)
    except (ValidationError, ValueError, TypeError) as exc:
        raise FragmentLoadError(f"Malformed sidebar entries: {exc}") from exc
    return index.to_records()


def parse_json(text: str) -> dict[str, list[Any]]:
    """Return the namespace mapping stored in a JSON fragment document."""
    payload = _decode(text, "JSON")
    if not isinstance(payload, dict):
        raise FragmentLoadError("JSON fragment document must be an object.")
    fragments: dict[str, list[Any]] = {}
    for key, value in payload.items():
        if not isinstance(value, list):
            raise FragmentLoadError(f"Fragment for {key!r} is not a list.")
        fragments[str(key)] = value
    return fragments


def sidebar_namespace(path: Path, namespace_root: Path | None = None) -> str:
    """Return the module path (``crate::module``) a sidebar file documents."""
    parent = path.parent
    if namespace_root is not None:
        try:
            parts = parent.resolve().relative_to(namespace_root.resolve()).parts
        except ValueError:
            parts = ()
        if parts:
            return "::".join(parts)
    return parent.name or parent.resolve().name


def implementor_namespace(path: Path, crate: str, namespace_root: Path | None = None) -> str:
    """Return the ``<trait path>/<crate>`` key for one crate of a trait script.

    The trait path comes from the directories below ``implementors`` (the
    rustdoc layout) or, failing that, below ``namespace_root``.
    """
    trait = path.stem.removeprefix("trait.")
    parts = path.parent.parts
    if "implementors" in parts:
        anchor = len(parts) - 1 - parts[::-1].index("implementors")
        module = parts[anchor + 1 :]
    elif namespace_root is not None:
        try:
            module = path.parent.resolve().relative_to(namespace_root.resolve()).parts
        except ValueError:
            module = ()
    else:
        module = ()
    return f"{'::'.join((*module, trait))}/{crate}"


def _detect_kind(path: Path, text: str) -> FragmentKind:
    if path.suffix.lower() == ".json":
        return "json"
    if "initSidebarItems(" in text:
        return "sidebar"
    if _IMPLEMENTOR_BOOTSTRAP_RE.search(text) is not None:
        return "implementors"
    raise UnrecognisedFragmentError("Unrecognised fragment format.", path=path)


def _validate_implementors(path: Path, fragments: dict[str, list[Any]]) -> None:
    for namespace, records in fragments.items():
        for position, record in enumerate(records):
            try:
                ImplementorDescriptor.model_validate(record)
            except ValidationError as exc:
                raise FragmentLoadError(
                    f"Invalid implementor #{position} in {namespace!r}: {exc}", path=path
                ) from exc


def load_fragment_file(
    path: Path,
    *,
    validate: bool = False,
    namespace_root: Path | None = None,
) -> FragmentSource:
    """Read and decode a single fragment file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        message = f"Unable to read fragment: {exc.strerror or exc}"
        raise FragmentLoadError(message, path=path) from exc

    kind = _detect_kind(path, text)
    try:
        if kind == "sidebar":
            namespace = sidebar_namespace(path, namespace_root)
            fragments: dict[str, Fragment] = {namespace: parse_sidebar(text)}
        elif kind == "implementors":
            fragments = {
                implementor_namespace(path, crate, namespace_root): records
                for crate, records in parse_implementors(text).items()
            }
        else:
            fragments = dict(parse_json(text))
    except FragmentLoadError as exc:
        if exc.path is not None:
            raise
        raise FragmentLoadError(str(exc), path=path) from exc

    if validate and kind != "sidebar":
        _validate_implementors(path, fragments)

    logger.debug("Loaded %s fragment %s (%d namespaces)", kind, path, len(fragments))
    return FragmentSource(path=path, kind=kind, fragments=fragments)


def iter_fragment_files(
    paths: Iterable[Path], pattern: str = DEFAULT_PATTERN
) -> Iterator[tuple[Path, Path | None]]:
    """Yield ``(file, namespace_root)`` pairs, expanding directories recursively."""
    for path in paths:
        if path.is_dir():
            matches = set(path.rglob(pattern)) | set(path.rglob("*.json"))
            for candidate in sorted(matches):
                if candidate.is_file():
                    yield candidate, path
        elif path.is_file():
            yield path, None
        else:
            raise FragmentLoadError("Fragment source not found.", path=path)


def register_sources(
    registry: FragmentRegistry,
    paths: Sequence[Path],
    *,
    pattern: str = DEFAULT_PATTERN,
    validate: bool = False,
    namespaces: Iterable[str] | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> list[FragmentSource]:
    """Load every fragment file under ``paths`` and register it with ``registry``.

    ``namespaces`` restricts registration to the listed keys; an implementor
    key also matches on its crate alone (``cairo`` selects
    ``core::fmt::Octal/cairo``). Files left without any fragment after
    filtering are skipped, as are unrecognised files found inside a directory.
    """
    emitter = emitter or LoggingEmitter(logger_obj=logger)
    allowed = set(namespaces) if namespaces else None
    sources: list[FragmentSource] = []
    for file_path, root in iter_fragment_files(paths, pattern):
        try:
            source = load_fragment_file(file_path, validate=validate, namespace_root=root)
        except UnrecognisedFragmentError:
            if root is None:
                raise
            emitter.warning(f"Skipping {file_path}: not an index fragment.")
            continue
        if allowed is not None:
            source.fragments = {
                key: value
                for key, value in source.fragments.items()
                if key in allowed or key.rsplit("/", 1)[-1] in allowed
            }
            if not source.fragments:
                logger.debug("Skipping %s: no allowed namespaces", file_path)
                continue
        emitter.event(
            "fragment_loaded",
            {"path": str(file_path), "kind": source.kind, "namespaces": source.namespaces},
        )
        registry.register(source.fragments)
        sources.append(source)
    return sources


def read_sidebar_index(path: Path) -> SidebarIndex:
    """Return the typed sidebar entries stored in ``path``."""
    source = load_fragment_file(path)
    if source.kind != "sidebar":
        raise FragmentLoadError("Not a sidebar fragment.", path=path)
    (records,) = source.fragments.values()
    return SidebarIndex.from_records(records)
