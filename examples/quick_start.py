"""
Quick Start Example for pyimgfx.

Builds a small gradient in memory, encodes it, decodes it again under a
byte budget and writes one output per transform.
"""

from pathlib import Path

import numpy as np

from pyimgfx import Limits, PixelBuffer, decode, encode, save_png
from pyimgfx.transforms import apply_transform, available_transforms


def main():
    """Run quick start example."""
    print("=" * 60)
    print("pyimgfx Quick Start Example")
    print("=" * 60 + "\n")

    h, w = 64, 96
    ys, xs = np.mgrid[0:h, 0:w]
    gradient = np.stack([xs / (w - 1), ys / (h - 1), np.full((h, w), 0.5)], axis=-1)
    source = PixelBuffer.from_array(gradient.astype(np.float32))

    data = encode(source)
    print(f"Encoded {source.width}x{source.height} gradient into {len(data)} bytes")

    limits = Limits(max_alloc=1024 * 1024)
    image = decode(data, limits)
    print(f"Decoded back; remaining byte budget: {limits.max_alloc}\n")

    out_dir = Path("quick_start_out")
    out_dir.mkdir(exist_ok=True)
    for name in available_transforms():
        path = save_png(apply_transform(image, name), out_dir / f"{name}.png")
        print(f"  {name:<10} -> {path}")


if __name__ == "__main__":
    main()
