from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

import png

from pyimgfx.buffer import PixelBuffer
from pyimgfx.errors import EncodeError

logger = logging.getLogger(__name__)


def write_png(buffer: PixelBuffer, sink: BinaryIO) -> None:
    """Write ``buffer`` to ``sink`` as an 8-bit RGB PNG (no alpha, no palette).

    Channels are rounded half away from zero and clamped to [0, 255].
    """

    try:
        writer = png.Writer(
            width=buffer.width,
            height=buffer.height,
            greyscale=False,
            alpha=False,
            bitdepth=8,
        )
    except (png.Error, ValueError) as exc:
        raise EncodeError(f"PNG writer rejected {buffer.width}x{buffer.height} header: {exc}") from exc

    rows = buffer.to_u8().reshape(buffer.height, buffer.width * 3)
    try:
        writer.write(sink, (row.tobytes() for row in rows))
    except png.Error as exc:
        raise EncodeError(f"Failed to encode PNG rows: {exc}") from exc


def encode(buffer: PixelBuffer) -> bytes:
    sink = io.BytesIO()
    write_png(buffer, sink)
    return sink.getvalue()


def save_png(buffer: PixelBuffer, path: str | Path) -> Path:
    out_path = Path(path)
    with out_path.open("wb") as f:
        write_png(buffer, f)
    logger.info("Image written to %s (%sx%s)", out_path, buffer.width, buffer.height)
    return out_path
