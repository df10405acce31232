"""Owned rectangular grid of RGB float pixels.

Pixels are stored row-major as a flat ``(width * height, 3)`` float32 array,
so the pixel at ``(x, y)`` lives at offset ``y * width + x``. Dimensions are
fixed for the lifetime of a buffer; every transform returns a new buffer and
only :meth:`PixelBuffer.set_pixel` mutates in place.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

import numpy as np
from PIL import Image

from pyimgfx.pixel import Rgb, round_half_away_from_zero

_MAX_DIMENSION = 2**32 - 1


def _check_dimension(value: Any, *, name: str) -> int:
    try:
        out = int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be an int, got {value!r}") from exc
    if out < 0 or out > _MAX_DIMENSION:
        raise ValueError(f"{name} must fit in an unsigned 32-bit int, got {out}")
    return out


def to_u8(samples: np.ndarray) -> np.ndarray:
    """Convert unit-range float samples to bytes, clamping out-of-range values."""

    scaled = round_half_away_from_zero(np.asarray(samples, dtype=np.float64) * 255.0)
    return np.clip(scaled, 0.0, 255.0).astype(np.uint8)


class PixelBuffer:
    __slots__ = ("_width", "_height", "_data")

    def __init__(self, width: int, height: int, data: Any = None) -> None:
        self._width = _check_dimension(width, name="width")
        self._height = _check_dimension(height, name="height")
        n = self._width * self._height

        if data is None:
            self._data = np.zeros((n, 3), dtype=np.float32)
            return

        arr = np.asarray(data, dtype=np.float32)
        if arr.shape == (self._height, self._width, 3):
            arr = arr.reshape(n, 3)
        if arr.shape != (n, 3):
            raise ValueError(
                f"Expected {n} pixels for a {self._width}x{self._height} buffer, "
                f"got data of shape {arr.shape}"
            )
        self._data = np.ascontiguousarray(arr).copy()

    # ------------------------------------------------------------------
    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[Rgb]) -> "PixelBuffer":
        rows = [(p.r, p.g, p.b) for p in pixels]
        data = np.asarray(rows, dtype=np.float32).reshape(-1, 3)
        return cls(width, height, data)

    @classmethod
    def filled(cls, width: int, height: int, color: Rgb) -> "PixelBuffer":
        buf = cls(width, height)
        buf._data[:] = (color.r, color.g, color.b)
        return buf

    @classmethod
    def from_array(cls, array: Any) -> "PixelBuffer":
        """Build a buffer from an ``(H, W, 3)`` array.

        ``uint8`` input is scaled by 1/255; float input is taken as unit-range
        samples.
        """

        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected shape (H,W,3), got {arr.shape}")
        if arr.dtype == np.uint8:
            samples = arr.astype(np.float32) / 255.0
        elif np.issubdtype(arr.dtype, np.floating):
            samples = arr.astype(np.float32)
        else:
            raise ValueError(f"Expected dtype=uint8 or float, got {arr.dtype}")
        h, w = int(arr.shape[0]), int(arr.shape[1])
        return cls(w, h, samples)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "PixelBuffer":
        return cls.from_array(np.asarray(image.convert("RGB"), dtype=np.uint8))

    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self._width, self._height)

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def __iter__(self) -> Iterator[Rgb]:
        for r, g, b in self._data.tolist():
            yield Rgb(r, g, b)

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self._width}, height={self._height})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of bounds for a {self._width}x{self._height} buffer"
            )
        return y * self._width + x

    def get_pixel(self, x: int, y: int) -> Rgb:
        r, g, b = self._data[self._offset(x, y)].tolist()
        return Rgb(r, g, b)

    def set_pixel(self, x: int, y: int, color: Rgb) -> None:
        """Overwrite one pixel in place."""

        self._data[self._offset(x, y)] = (color.r, color.g, color.b)

    # ------------------------------------------------------------------
    def as_array(self) -> np.ndarray:
        """Return a float32 ``(H, W, 3)`` copy of the samples."""

        return self._data.reshape(self._height, self._width, 3).copy()

    def to_u8(self) -> np.ndarray:
        return to_u8(self._data).reshape(self._height, self._width, 3)

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.to_u8())

    def copy(self) -> "PixelBuffer":
        return self._derive(self._data.copy())

    def _derive(self, data: np.ndarray) -> "PixelBuffer":
        out = PixelBuffer.__new__(PixelBuffer)
        out._width = self._width
        out._height = self._height
        out._data = np.ascontiguousarray(data, dtype=np.float32)
        return out

    # ------------------------------------------------------------------
    def redden(self) -> "PixelBuffer":
        """Keep the red channel and zero green and blue."""

        out = np.zeros_like(self._data)
        out[:, 0] = self._data[:, 0]
        return self._derive(out)

    def mean(self) -> "PixelBuffer":
        """Replace every channel with the mean of the pixel's three channels."""

        m = self._data.astype(np.float64).mean(axis=1, keepdims=True)
        return self._derive(np.repeat(m, 3, axis=1))

    def quantize(self) -> "PixelBuffer":
        # Collapses each channel to 0 or 1 for unit-range input.
        return self._derive(round_half_away_from_zero(self._data))

    def invert(self) -> "PixelBuffer":
        return self._derive(1.0 - self._data)

    def map_pixels(self, fn: Callable[[Rgb], Rgb]) -> "PixelBuffer":
        """Apply an arbitrary per-pixel function (slow path)."""

        rows = [fn(p).as_tuple() for p in self]
        return self._derive(np.asarray(rows, dtype=np.float32).reshape(-1, 3))
