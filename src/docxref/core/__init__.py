"""Core registry, loading, and configuration primitives."""

from __future__ import annotations

from .config import AttachMode, RegistryConfig, load_config
from .consumers import FragmentCollector
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import ConfigError, DocxrefError, FragmentLoadError, UnrecognisedFragmentError
from .loader import FragmentSource, load_fragment_file, read_sidebar_index, register_sources
from .models import ImplementorDescriptor, SidebarEntry, SidebarIndex
from .registry import (
    Attached,
    FragmentRegistry,
    Unattached,
    attach,
    get_registry,
    register,
    registry_context,
    reset_registry,
    set_registry,
)


__all__ = [
    "AttachMode",
    "Attached",
    "ConfigError",
    "DiagnosticEmitter",
    "DocxrefError",
    "FragmentCollector",
    "FragmentLoadError",
    "FragmentRegistry",
    "FragmentSource",
    "ImplementorDescriptor",
    "LoggingEmitter",
    "NullEmitter",
    "RegistryConfig",
    "SidebarEntry",
    "SidebarIndex",
    "Unattached",
    "UnrecognisedFragmentError",
    "attach",
    "get_registry",
    "load_config",
    "load_fragment_file",
    "read_sidebar_index",
    "register",
    "register_sources",
    "registry_context",
    "reset_registry",
    "set_registry",
]
