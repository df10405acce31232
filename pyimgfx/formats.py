from __future__ import annotations

from enum import Enum

from pyimgfx.errors import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Container formats recognised by their magic bytes."""

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"


# Checked in order. RIFF alone is accepted as WebP without looking for the
# "WEBP" tag at offset 8.
MAGIC_BYTES: tuple[tuple[bytes, ImageFormat], ...] = (
    (b"\x89PNG\r\n\x1a\n", ImageFormat.PNG),
    (b"\xff\xd8\xff", ImageFormat.JPEG),
    (b"GIF87a", ImageFormat.GIF),
    (b"GIF89a", ImageFormat.GIF),
    (b"RIFF", ImageFormat.WEBP),
)


def sniff_format(data: bytes) -> ImageFormat | None:
    """Return the format whose signature prefixes ``data``, or ``None``."""

    head = bytes(data[: max(len(sig) for sig, _ in MAGIC_BYTES)])
    for signature, fmt in MAGIC_BYTES:
        if head.startswith(signature):
            return fmt
    return None


def guess_format(data: bytes) -> ImageFormat:
    fmt = sniff_format(data)
    if fmt is None:
        raise UnsupportedFormatError("Unrecognized image signature", image_format=None)
    return fmt
