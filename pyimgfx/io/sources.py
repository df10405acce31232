"""Byte sources for the decoder: local files and HTTP(S) URLs."""

from __future__ import annotations

import logging
from pathlib import Path

from pyimgfx.buffer import PixelBuffer
from pyimgfx.io.decoder import decode
from pyimgfx.limits import Limits
from pyimgfx.utils.optional_deps import require

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0


def is_url(source: str | Path) -> bool:
    return str(source).startswith("http")


def fetch_url(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    requests = require("requests", extra="http", purpose="loading images from URLs")

    logger.info("Fetching image from %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


def read_source(source: str | Path, *, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Return the raw bytes behind a local path or an ``http(s)`` URL."""

    if is_url(source):
        return fetch_url(str(source), timeout=timeout)

    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    logger.info("Reading image from %s", path)
    return path.read_bytes()


def load_image(
    source: str | Path,
    *,
    limits: Limits | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> PixelBuffer:
    return decode(read_source(source, timeout=timeout), limits=limits)
