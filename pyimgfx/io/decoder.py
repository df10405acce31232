"""PNG decoding into a :class:`~pyimgfx.buffer.PixelBuffer`.

The decoder reads the IHDR header first, charges the full output size against
the caller's :class:`~pyimgfx.limits.Limits` and only then streams scanlines.
The IDAT stream is inflated in bounded steps and rejected once it grows past
the raw scanline size the header declares, so the reader never holds more
than that in memory.

Every supported colour type is normalized to 8-bit RGB: palettes are
expanded, low and high bit depths are rescaled, grayscale is replicated
across the three channels and alpha is dropped. Stored samples are used
as-is; tRNS and sBIT chunks do not change them.
"""

from __future__ import annotations

import logging
import struct
import zlib
from typing import Any, Iterator, Mapping, Sequence

import numpy as np
import png

from pyimgfx.buffer import PixelBuffer
from pyimgfx.errors import CorruptedImageError, UnsupportedFormatError
from pyimgfx.formats import ImageFormat, guess_format
from pyimgfx.limits import Limits
from pyimgfx.pixel import round_half_away_from_zero

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 3
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

_PNG_ERRORS = (png.Error, zlib.error)

# Samples per pixel by IHDR colour type.
_CHANNELS = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}

# (xstart, ystart, xstep, ystep) for each Adam7 pass.
_ADAM7_PASSES = (
    (0, 0, 8, 8),
    (4, 0, 8, 8),
    (0, 4, 4, 8),
    (2, 0, 4, 4),
    (0, 2, 2, 4),
    (1, 0, 2, 2),
    (0, 1, 1, 2),
)

_INFLATE_STEP = 64 * 1024


def decode(data: bytes, limits: Limits | None = None) -> PixelBuffer:
    """Decode an in-memory image.

    Parameters
    ----------
    data:
        Complete encoded image bytes.
    limits:
        Budget for this call. It is consumed by the decode; pass a fresh
        instance per call. Defaults to ``Limits()`` (512 MiB, no dimension
        ceilings).

    Raises
    ------
    UnsupportedFormatError
        The signature is unknown or names a format other than PNG.
    CorruptedImageError
        The PNG stream does not parse, or its IDAT data inflates past the
        raw size the header declares.
    LimitsExceededError
        The declared dimensions exceed the configured limits.
    """

    fmt = guess_format(data)
    logger.debug("format: %s", fmt.value)
    if fmt is not ImageFormat.PNG:
        raise UnsupportedFormatError(
            f"{fmt.value} images are recognized but not supported", image_format=fmt
        )

    if limits is None:
        limits = Limits()
    return _decode_png(bytes(data), limits)


def _decode_png(data: bytes, limits: Limits) -> PixelBuffer:
    reader = png.Reader(bytes=data)
    try:
        reader.preamble()
    except _PNG_ERRORS as exc:
        raise CorruptedImageError(f"Invalid PNG header: {exc}") from exc

    width, height = int(reader.width), int(reader.height)
    logger.debug(
        "dimensions: %sx%s, color_type: %s, bitdepth: %s",
        width,
        height,
        reader.color_type,
        reader.bitdepth,
    )

    limits.check_dimensions(width, height)
    total_bytes = width * height * BYTES_PER_PIXEL
    logger.debug("reserving %s bytes (remaining budget: %s)", total_bytes, limits.max_alloc)
    limits.reserve(total_bytes)

    samples = np.empty((height, width, 3), dtype=np.float32)
    rows_read = 0
    try:
        raw_size = raw_scanline_size(
            width,
            height,
            channels=_CHANNELS[int(reader.color_type)],
            bitdepth=int(reader.bitdepth),
            interlaced=bool(reader.interlace),
        )
        logger.debug("expected inflated size: %s bytes", raw_size)
        _check_inflated_size(data, raw_size)

        palette = None
        if int(reader.color_type) == 3:
            palette = np.asarray([entry[:3] for entry in reader.palette()], dtype=np.float64)

        # read() hands back stored samples; tRNS and sBIT are not applied.
        _, _, rows, info = reader.read()
        for row in rows:
            if rows_read >= height:
                raise CorruptedImageError(f"PNG stream has more than {height} rows")
            samples[rows_read] = _normalize_row(row, width=width, info=info, palette=palette)
            rows_read += 1
    except _PNG_ERRORS as exc:
        raise CorruptedImageError(f"Corrupt PNG data at row {rows_read}: {exc}") from exc

    if rows_read != height:
        raise CorruptedImageError(f"PNG stream ended after {rows_read} of {height} rows")

    return PixelBuffer(width, height, samples)


def raw_scanline_size(
    width: int, height: int, *, channels: int, bitdepth: int, interlaced: bool = False
) -> int:
    """Number of bytes the IDAT stream inflates to, filter bytes included."""

    passes = _ADAM7_PASSES if interlaced else ((0, 0, 1, 1),)
    total = 0
    for xstart, ystart, xstep, ystep in passes:
        pass_width = max(0, -(-(width - xstart) // xstep))
        pass_height = max(0, -(-(height - ystart) // ystep))
        if pass_width == 0 or pass_height == 0:
            continue
        total += pass_height * (1 + (pass_width * channels * bitdepth + 7) // 8)
    return total


def _iter_idat(data: bytes) -> Iterator[memoryview]:
    view = memoryview(data)
    offset = len(PNG_SIGNATURE)
    while offset + 8 <= len(view):
        length, tag = struct.unpack_from(">I4s", view, offset)
        start = offset + 8
        end = start + length
        if end + 4 > len(view):
            raise CorruptedImageError(
                f"{tag.decode('latin-1')!r} chunk at offset {offset} runs past the end of the stream"
            )
        if tag == b"IEND":
            return
        if tag == b"IDAT":
            yield view[start:end]
        offset = end + 4


def _check_inflated_size(data: bytes, expected: int) -> None:
    """Inflate the IDAT stream in bounded steps, rejecting more than ``expected`` bytes."""

    excess = f"IDAT stream inflates to more than the {expected} bytes its header declares"
    inflater = zlib.decompressobj()
    total = 0
    for payload in _iter_idat(data):
        pending = payload
        while pending:
            total += len(inflater.decompress(pending, _INFLATE_STEP))
            if total > expected:
                raise CorruptedImageError(excess)
            pending = inflater.unconsumed_tail
    total += len(inflater.flush())
    if total > expected:
        raise CorruptedImageError(excess)


def _normalize_row(
    row: Sequence[int],
    *,
    width: int,
    info: Mapping[str, Any],
    palette: np.ndarray | None = None,
) -> np.ndarray:
    """Turn one decoded scanline into ``(width, 3)`` unit-range samples."""

    planes = int(info["planes"])
    bitdepth = int(info["bitdepth"])

    values = np.asarray(row)
    if values.size != width * planes:
        raise CorruptedImageError(
            f"Row has {values.size} samples, expected {width * planes} ({width}x{planes})"
        )

    if palette is not None:
        indices = values.astype(np.intp)
        if indices.size and int(indices.max()) >= len(palette):
            raise CorruptedImageError(
                f"Palette index {int(indices.max())} is past the end of a "
                f"{len(palette)}-entry PLTE"
            )
        return palette[indices] / 255.0

    values = values.astype(np.float64).reshape(width, planes)
    if bitdepth != 8:
        values = round_half_away_from_zero(values * (255.0 / float(2**bitdepth - 1)))

    if info.get("greyscale", False):
        rgb = np.repeat(values[:, :1], 3, axis=1)
    else:
        rgb = values[:, :3]
    return rgb / 255.0
