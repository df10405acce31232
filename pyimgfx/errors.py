"""Exceptions raised at the decode and encode boundaries.

Decode failures share the ``DecodeError`` base so callers can catch them as a
group, while each kind stays distinguishable:

- ``UnsupportedFormatError``: unknown signature, or a known container that is
  not implemented (JPEG, GIF, WebP)
- ``CorruptedImageError``: the PNG stream does not parse
- ``LimitsExceededError``: the allocation budget or a dimension ceiling would
  be exceeded
"""

from __future__ import annotations

from typing import Any


class DecodeError(ValueError):
    """Base class for all decode failures."""


class UnsupportedFormatError(DecodeError):
    def __init__(self, message: str, *, image_format: Any = None) -> None:
        super().__init__(message)
        self.image_format = image_format


class CorruptedImageError(DecodeError):
    pass


class LimitsExceededError(DecodeError):
    pass


class EncodeError(RuntimeError):
    """The PNG writer rejected the header or the pixel rows."""
