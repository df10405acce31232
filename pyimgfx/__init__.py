"""pyimgfx - PNG decode, per-pixel colour transforms and PNG encode.

Keep top-level imports lightweight: exports are lazy-loaded on demand so that
`import pyimgfx` stays cheap and `requests` is only imported when a URL is
actually fetched.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "io",
    "transforms",
    "utils",
    # Core types
    "Rgb",
    "PixelBuffer",
    "Limits",
    "ImageFormat",
    # Errors
    "DecodeError",
    "UnsupportedFormatError",
    "CorruptedImageError",
    "LimitsExceededError",
    "EncodeError",
    # Codec
    "decode",
    "encode",
    "guess_format",
    "load_image",
    "save_png",
]


_LAZY_SUBMODULES = {
    "config",
    "io",
    "transforms",
    "utils",
}

_LAZY_EXPORTS = {
    "Rgb": ("pixel", "Rgb"),
    "PixelBuffer": ("buffer", "PixelBuffer"),
    "Limits": ("limits", "Limits"),
    "ImageFormat": ("formats", "ImageFormat"),
    "guess_format": ("formats", "guess_format"),
    "DecodeError": ("errors", "DecodeError"),
    "UnsupportedFormatError": ("errors", "UnsupportedFormatError"),
    "CorruptedImageError": ("errors", "CorruptedImageError"),
    "LimitsExceededError": ("errors", "LimitsExceededError"),
    "EncodeError": ("errors", "EncodeError"),
    "decode": ("io.decoder", "decode"),
    "encode": ("io.encoder", "encode"),
    "save_png": ("io.encoder", "save_png"),
    "load_image": ("io.sources", "load_image"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
