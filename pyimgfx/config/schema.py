from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pyimgfx.io.sources import DEFAULT_TIMEOUT
from pyimgfx.limits import DEFAULT_MAX_ALLOC, Limits
from pyimgfx.viewer import DEFAULT_VIEWER_COMMAND

# Sample image used when no source is given on the command line.
DEFAULT_SOURCE_URL = (
    "https://user-images.githubusercontent.com/6933510/"
    "107239146-dcc3fd00-6a28-11eb-8c7b-41aaf6618935.png"
)
DEFAULT_OUTPUT = "out.png"


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a dict/object, got {type(value).__name__}")
    return value


def _optional_positive_int(value: Any, *, name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be int or null, got {value!r}")
    try:
        out = int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be int or null, got {value!r}") from exc
    if out < 0:
        raise ValueError(f"{name} must be >= 0, got {out}")
    return out


def _positive_float(value: Any, *, name: str) -> float:
    try:
        out = float(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if out <= 0:
        raise ValueError(f"{name} must be > 0, got {out}")
    return out


@dataclass(frozen=True)
class LimitsConfig:
    max_alloc: int | None = DEFAULT_MAX_ALLOC
    max_image_width: int | None = None
    max_image_height: int | None = None

    def build(self) -> Limits:
        """Return a fresh, unconsumed budget."""

        return Limits(
            max_image_width=self.max_image_width,
            max_image_height=self.max_image_height,
            max_alloc=self.max_alloc,
        )


@dataclass(frozen=True)
class ToolConfig:
    source: str = DEFAULT_SOURCE_URL
    output: str = DEFAULT_OUTPUT
    viewer: str | None = DEFAULT_VIEWER_COMMAND
    timeout: float = DEFAULT_TIMEOUT
    limits: LimitsConfig = field(default_factory=LimitsConfig)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ToolConfig":
        top = _require_mapping(raw, name="config")

        limits_raw = _require_mapping(top.get("limits", {}), name="limits")
        limits = LimitsConfig(
            max_alloc=_optional_positive_int(
                limits_raw.get("max_alloc", DEFAULT_MAX_ALLOC), name="limits.max_alloc"
            ),
            max_image_width=_optional_positive_int(
                limits_raw.get("max_image_width", None), name="limits.max_image_width"
            ),
            max_image_height=_optional_positive_int(
                limits_raw.get("max_image_height", None), name="limits.max_image_height"
            ),
        )

        viewer = top.get("viewer", DEFAULT_VIEWER_COMMAND)
        return cls(
            source=str(top.get("source", DEFAULT_SOURCE_URL)),
            output=str(top.get("output", DEFAULT_OUTPUT)),
            viewer=(str(viewer) if viewer is not None else None),
            timeout=_positive_float(top.get("timeout", DEFAULT_TIMEOUT), name="timeout"),
            limits=limits,
        )
