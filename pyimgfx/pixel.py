"""Single RGB colour sample with unit-range float channels."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np


def round_half_away_from_zero(value):
    """Round to the nearest integer, ties away from zero.

    Works on python floats and numpy arrays alike. Python's ``round`` and
    ``np.rint`` both round ties to even, which would map 0.5 to 0.
    """

    if isinstance(value, np.ndarray):
        return np.sign(value) * np.floor(np.abs(value) + 0.5)
    return math.copysign(math.floor(abs(value) + 0.5), value)


def channel_to_byte(value: float) -> int:
    scaled = round_half_away_from_zero(float(value) * 255.0)
    return int(min(max(scaled, 0.0), 255.0))


@dataclass(frozen=True)
class Rgb:
    """One colour sample.

    Channels are conceptually in [0, 1] but are not clamped here; clamping
    happens only when converting back to bytes.
    """

    r: float
    g: float
    b: float

    @classmethod
    def from_bytes(cls, values: Sequence[int]) -> "Rgb":
        if len(values) < 3:
            raise ValueError(f"Expected at least 3 bytes, got {len(values)}")
        return cls(values[0] / 255.0, values[1] / 255.0, values[2] / 255.0)

    def to_bytes(self) -> bytes:
        return bytes((channel_to_byte(self.r), channel_to_byte(self.g), channel_to_byte(self.b)))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    # ------------------------------------------------------------------
    def as_red(self) -> "Rgb":
        return Rgb(self.r, 0.0, 0.0)

    def mean(self) -> "Rgb":
        m = (self.r + self.g + self.b) / 3.0
        return Rgb(m, m, m)

    def quantize(self) -> "Rgb":
        return Rgb(
            float(round_half_away_from_zero(self.r)),
            float(round_half_away_from_zero(self.g)),
            float(round_half_away_from_zero(self.b)),
        )

    def invert(self) -> "Rgb":
        return Rgb(1.0 - self.r, 1.0 - self.g, 1.0 - self.b)

    # ------------------------------------------------------------------
    @classmethod
    def black(cls) -> "Rgb":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> "Rgb":
        return cls(1.0, 1.0, 1.0)

    @classmethod
    def red(cls) -> "Rgb":
        return cls(1.0, 0.0, 0.0)

    @classmethod
    def green(cls) -> "Rgb":
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def blue(cls) -> "Rgb":
        return cls(0.0, 0.0, 1.0)

    @classmethod
    def yellow(cls) -> "Rgb":
        return cls(1.0, 1.0, 0.0)

    @classmethod
    def cyan(cls) -> "Rgb":
        return cls(0.0, 1.0, 1.0)

    @classmethod
    def magenta(cls) -> "Rgb":
        return cls(1.0, 0.0, 1.0)

    @classmethod
    def gray(cls) -> "Rgb":
        return cls(0.5, 0.5, 0.5)
