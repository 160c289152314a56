"""CLI command implementations."""

from __future__ import annotations

from .load import load
from .sidebar import sidebar


__all__ = ["load", "sidebar"]
