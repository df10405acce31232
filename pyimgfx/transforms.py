"""Named per-pixel transforms, looked up by the CLI."""

from __future__ import annotations

from typing import Callable, Dict, List

from pyimgfx.buffer import PixelBuffer

Transform = Callable[[PixelBuffer], PixelBuffer]

TRANSFORMS: Dict[str, Transform] = {
    "redden": PixelBuffer.redden,
    "invert": PixelBuffer.invert,
    "quantize": PixelBuffer.quantize,
    "mean": PixelBuffer.mean,
}


def available_transforms() -> List[str]:
    return sorted(TRANSFORMS)


def get_transform(name: str) -> Transform:
    try:
        return TRANSFORMS[name]
    except KeyError as exc:
        available = ", ".join(available_transforms())
        raise KeyError(f"Transform {name!r} not found. Available transforms: {available}") from exc


def apply_transform(buffer: PixelBuffer, name: str) -> PixelBuffer:
    return get_transform(name)(buffer)
