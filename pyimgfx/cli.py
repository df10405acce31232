from __future__ import annotations

import argparse
import dataclasses
import logging
import sys

from pyimgfx.config import ToolConfig, load_config
from pyimgfx.errors import DecodeError
from pyimgfx.io.encoder import save_png
from pyimgfx.io.sources import load_image
from pyimgfx.transforms import apply_transform
from pyimgfx.viewer import build_viewer

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimgfx",
        description="Apply a per-pixel colour transform to a PNG image.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=None,
        help="Image path or http(s) URL. Default: the sample image from the config",
    )

    transform = parser.add_mutually_exclusive_group(required=True)
    transform.add_argument(
        "-r", "--redden", dest="transform", action="store_const", const="redden",
        help="Keep only the red channel",
    )
    transform.add_argument(
        "-i", "--invert", dest="transform", action="store_const", const="invert",
        help="Invert colors",
    )
    transform.add_argument(
        "-q", "--quantize", dest="transform", action="store_const", const="quantize",
        help="Round each channel to black or white",
    )
    transform.add_argument(
        "-m", "--mean", dest="transform", action="store_const", const="mean",
        help="Replace colors with the mean of their channels (grayscale)",
    )

    parser.add_argument("-o", "--output", default=None, help="Output PNG path. Default: out.png")
    parser.add_argument("--config", default=None, help="Optional JSON/YAML tool config")
    parser.add_argument("--max-alloc", type=int, default=None, help="Decode byte budget")
    parser.add_argument("--max-width", type=int, default=None, help="Reject wider images")
    parser.add_argument("--max-height", type=int, default=None, help="Reject taller images")
    parser.add_argument(
        "--timeout", type=float, default=None, help="Network timeout in seconds for URL sources"
    )
    parser.add_argument("--viewer", default=None, help="Viewer command run on the output. Default: viu")
    parser.add_argument("--no-view", action="store_true", help="Do not open the output in a viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_config(args: argparse.Namespace) -> ToolConfig:
    cfg = ToolConfig.from_dict(load_config(args.config)) if args.config else ToolConfig()

    limits = cfg.limits
    if args.max_alloc is not None:
        limits = dataclasses.replace(limits, max_alloc=int(args.max_alloc))
    if args.max_width is not None:
        limits = dataclasses.replace(limits, max_image_width=int(args.max_width))
    if args.max_height is not None:
        limits = dataclasses.replace(limits, max_image_height=int(args.max_height))

    overrides = {"limits": limits}
    if args.source is not None:
        overrides["source"] = str(args.source)
    if args.output is not None:
        overrides["output"] = str(args.output)
    if args.timeout is not None:
        overrides["timeout"] = float(args.timeout)
    if args.no_view:
        overrides["viewer"] = None
    elif args.viewer is not None:
        overrides["viewer"] = str(args.viewer)
    return dataclasses.replace(cfg, **overrides)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="> %(message)s",
    )

    source = args.source
    try:
        cfg = _resolve_config(args)
        source = cfg.source

        image = load_image(cfg.source, limits=cfg.limits.build(), timeout=cfg.timeout)
        logger.info("Applying transform %r to %sx%s image", args.transform, image.width, image.height)
        result = apply_transform(image, args.transform)
        out_path = save_png(result, cfg.output)
    except DecodeError as exc:
        print(f"error: {type(exc).__name__}: {exc}", file=sys.stderr)
        print(f"context: source={source!r}", file=sys.stderr)
        return 2
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"error: {exc}", file=sys.stderr)
        if source is not None:
            print(f"context: source={source!r}", file=sys.stderr)
        return 1

    try:
        build_viewer(cfg.viewer).show(out_path)
    except OSError as exc:
        logger.warning("Could not start viewer %r: %s", cfg.viewer, exc)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
