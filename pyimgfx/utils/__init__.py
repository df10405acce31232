"""Utility helpers for pyimgfx."""

from __future__ import annotations

from .optional_deps import optional_import, require

__all__ = [
    "optional_import",
    "require",
]
