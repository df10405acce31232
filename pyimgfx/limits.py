from __future__ import annotations

from dataclasses import dataclass

from pyimgfx.errors import LimitsExceededError

DEFAULT_MAX_ALLOC = 512 * 1024 * 1024


@dataclass
class Limits:
    """Decode-time resource budget.

    ``max_alloc`` is consumed by :meth:`reserve` and never restored, so a
    fresh instance is needed for every decode. Instances are not safe to
    share between threads.
    """

    max_image_width: int | None = None
    max_image_height: int | None = None
    max_alloc: int | None = DEFAULT_MAX_ALLOC

    @classmethod
    def no_limits(cls) -> "Limits":
        return cls(max_image_width=None, max_image_height=None, max_alloc=None)

    def reserve(self, amount: int) -> None:
        amount = int(amount)
        if amount < 0:
            raise ValueError(f"reserve amount must be >= 0, got {amount}")
        if self.max_alloc is None:
            return
        if self.max_alloc < amount:
            raise LimitsExceededError(
                f"Allocation of {amount} bytes exceeds the remaining budget of {self.max_alloc} bytes"
            )
        self.max_alloc -= amount

    def check_dimensions(self, width: int, height: int) -> None:
        if self.max_image_width is not None and int(width) > self.max_image_width:
            raise LimitsExceededError(
                f"Image width {width} exceeds max_image_width={self.max_image_width}"
            )
        if self.max_image_height is not None and int(height) > self.max_image_height:
            raise LimitsExceededError(
                f"Image height {height} exceeds max_image_height={self.max_image_height}"
            )
