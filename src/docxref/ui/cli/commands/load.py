"""Load fragment files into a fresh registry and summarise what the consumer received."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError
import typer

from docxref.core.config import AttachMode, RegistryConfig, load_config
from docxref.core.consumers import FragmentCollector
from docxref.core.exceptions import ConfigError, DocxrefError
from docxref.core.loader import register_sources
from docxref.core.registry import FragmentRegistry

from .._options import (
    AttachOption,
    ConfigOption,
    JsonOption,
    NamespaceOption,
    PatternOption,
    SourcePathArgument,
    ValidateOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_collection, present_collection_json
from ..state import emit_error, get_cli_state


logger = logging.getLogger(__name__)


def resolve_settings(
    *,
    paths: list[Path] | None,
    config: RegistryConfig | None,
    pattern: str | None,
    validate: bool | None,
    attach: AttachMode | None,
    namespaces: list[str] | None,
) -> RegistryConfig:
    """Overlay command line options on top of the configuration file."""
    settings = config or RegistryConfig()
    updates: dict[str, object] = {}
    if paths:
        updates["sources"] = [*settings.sources, *paths]
    if pattern is not None:
        updates["pattern"] = pattern
    if validate is not None:
        updates["validate_descriptors"] = validate
    if attach is not None:
        updates["attach"] = attach
    if namespaces:
        updates["namespaces"] = list(namespaces)
    if not updates:
        return settings
    try:
        return RegistryConfig.model_validate({**settings.model_dump(), **updates})
    except ValidationError as exc:
        raise ConfigError(f"Invalid command line options: {exc}") from exc


def load(
    paths: SourcePathArgument = None,
    config: ConfigOption = None,
    pattern: PatternOption = None,
    validate: ValidateOption = None,
    attach: AttachOption = None,
    namespace: NamespaceOption = None,
    as_json: JsonOption = False,
) -> None:
    """Register fragment files and report the index delivered to the consumer."""
    state = get_cli_state()
    try:
        file_config = load_config(config) if config is not None else None
        settings = resolve_settings(
            paths=paths,
            config=file_config,
            pattern=pattern,
            validate=validate,
            attach=attach,
            namespaces=namespace,
        )
    except DocxrefError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if not settings.sources:
        emit_error("No fragment sources supplied; pass paths or a configuration file.")
        raise typer.Exit(code=1)

    registry = FragmentRegistry(emitter=CliEmitter(state))
    collector = FragmentCollector()
    if settings.attach is AttachMode.EARLY:
        registry.attach(collector)

    try:
        sources = register_sources(
            registry,
            settings.sources,
            pattern=settings.pattern,
            validate=settings.validate_descriptors,
            namespaces=settings.namespaces,
            emitter=CliEmitter(state),
        )
    except DocxrefError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if settings.attach is AttachMode.LATE:
        registry.attach(collector)

    logger.debug("Collected %d namespaces from %d files", len(collector.index), len(sources))
    if as_json:
        present_collection_json(collector)
    else:
        present_collection(state, collector, sources)


__all__ = ["load", "resolve_settings"]
