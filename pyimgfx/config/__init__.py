from __future__ import annotations

from .io import load_config
from .schema import DEFAULT_OUTPUT, DEFAULT_SOURCE_URL, LimitsConfig, ToolConfig

__all__ = [
    "DEFAULT_OUTPUT",
    "DEFAULT_SOURCE_URL",
    "LimitsConfig",
    "ToolConfig",
    "load_config",
]
