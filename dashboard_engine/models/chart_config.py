from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

"""Chart configuration model for the dataset explorer engine.

The engine only needs identifiers: the color theme is an opaque id mapped to
display colors by the presentation layer.
"""

__all__ = [
    "ChartKind",
    "ColorTheme",
    "ChartConfiguration",
    "MIN_CHART_SIZE",
    "MAX_CHART_SIZE",
    "DEFAULT_CHART_SIZE",
    "clamp_size",
]

MIN_CHART_SIZE = 200
MAX_CHART_SIZE = 800
DEFAULT_CHART_SIZE = 400


class ChartKind(str, Enum):
    """Supported visual encodings."""
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"

    @property
    def is_cartesian(self) -> bool:
        return self is not ChartKind.PIE


class ColorTheme(str, Enum):
    """Recognized color theme identifiers."""
    PRIMARY = "primary"
    GRADIENT = "gradient"
    PROFESSIONAL = "professional"
    VIBRANT = "vibrant"


def clamp_size(size_px: float) -> int:
    """Clamp a chart size into [MIN_CHART_SIZE, MAX_CHART_SIZE]."""
    return int(max(MIN_CHART_SIZE, min(MAX_CHART_SIZE, size_px)))


@dataclass(frozen=True)
class ChartConfiguration:
    """Chart selection made by the user.

    ``x_column`` / ``y_column`` may be None, in which case the chart shaper
    picks defaults from the column types. ``kind`` and ``color_theme`` accept
    their string ids and are converted to the enums (unknown ids raise
    ValueError). ``size_px`` is clamped on construction.
    """
    kind: ChartKind = ChartKind.BAR
    x_column: str | None = None
    y_column: str | None = None
    color_theme: ColorTheme = ColorTheme.PRIMARY
    size_px: int = DEFAULT_CHART_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ChartKind(self.kind))
        object.__setattr__(self, "color_theme", ColorTheme(self.color_theme))
        object.__setattr__(self, "size_px", clamp_size(self.size_px))

    def with_axes(self, x_column: str | None, y_column: str | None) -> ChartConfiguration:
        return replace(self, x_column=x_column, y_column=y_column)

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "x_column": self.x_column,
            "y_column": self.y_column,
            "color_theme": self.color_theme.value,
            "size_px": self.size_px,
        }
