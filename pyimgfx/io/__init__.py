"""PNG decoding/encoding and the byte sources that feed them."""

from __future__ import annotations

from .decoder import decode
from .encoder import encode, save_png, write_png
from .sources import is_url, load_image, read_source

__all__ = [
    "decode",
    "encode",
    "is_url",
    "load_image",
    "read_source",
    "save_png",
    "write_png",
]
