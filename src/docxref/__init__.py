"""Primary public API for docxref."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from docxref.core import (
    AttachMode,
    Attached,
    ConfigError,
    DocxrefError,
    FragmentCollector,
    FragmentLoadError,
    FragmentRegistry,
    FragmentSource,
    ImplementorDescriptor,
    RegistryConfig,
    SidebarEntry,
    SidebarIndex,
    Unattached,
    attach,
    get_registry,
    load_config,
    load_fragment_file,
    register,
    register_sources,
    registry_context,
    reset_registry,
    set_registry,
)


try:
    __version__ = _pkg_version("docxref")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AttachMode",
    "Attached",
    "ConfigError",
    "DocxrefError",
    "FragmentCollector",
    "FragmentLoadError",
    "FragmentRegistry",
    "FragmentSource",
    "ImplementorDescriptor",
    "RegistryConfig",
    "SidebarEntry",
    "SidebarIndex",
    "Unattached",
    "__version__",
    "attach",
    "get_registry",
    "load_config",
    "load_fragment_file",
    "register",
    "register_sources",
    "registry_context",
    "reset_registry",
    "set_registry",
]
