"""Show a saved image with an external program.

Viewers run after the output file is written and are never part of decode or
encode.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_VIEWER_COMMAND = "viu"


class Viewer(Protocol):
    def show(self, path: str | Path) -> Optional[subprocess.Popen]:
        ...


class TerminalViewer:
    """Spawn a terminal image viewer (``viu`` by default) on a file."""

    def __init__(self, command: str = DEFAULT_VIEWER_COMMAND) -> None:
        self.command = str(command)

    def show(self, path: str | Path) -> subprocess.Popen:
        logger.debug("Spawning viewer: %s %s", self.command, path)
        return subprocess.Popen([self.command, str(path)])


class NullViewer:
    def show(self, path: str | Path) -> None:
        _ = path
        return None


def build_viewer(command: str | None) -> Viewer:
    if command is None or not str(command).strip():
        return NullViewer()
    return TerminalViewer(str(command))
