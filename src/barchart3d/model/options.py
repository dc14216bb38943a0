"""
Chart Options
=============
Resolved chart configuration: defaults merged with caller overrides.

A ChartOptions instance is a read-only snapshot taken for one render call.
Nothing here is persisted across calls.

Overrides are accepted in snake_case or in the camelCase spelling used by
chart payloads written for web front-ends (``xAxisTitle``, ``showLegend``...).
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import logging
from typing import Any, Mapping, Optional, Sequence

from barchart3d.config import (
    BAR_DEPTH,
    BAR_WIDTH,
    COMPACT_VIEWPORT_WIDTH,
    DEFAULT_CAMERA_EYE,
)
from barchart3d.model.clicks import BarClickCallback
from barchart3d.model.data_point import LegendItem

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "3D Bar Chart"
DEFAULT_X_AXIS_TITLE = "X Axis"
DEFAULT_Y_AXIS_TITLE = "Y Axis"
DEFAULT_Z_AXIS_TITLE = "Z Axis"
DEFAULT_X_RANGE: tuple[float, float] = (0.5, 4.5)
DEFAULT_Y_RANGE: tuple[float, float] = (0.0, 100.0)
DEFAULT_Z_RANGE: tuple[float, float] = (0.0, 100.0)

_ALIASES: dict[str, str] = {
    "xAxisTitle": "x_axis_title",
    "yAxisTitle": "y_axis_title",
    "zAxisTitle": "z_axis_title",
    "xRange": "x_range",
    "yRange": "y_range",
    "zRange": "z_range",
    "showXTicks": "show_x_ticks",
    "showLegend": "show_legend",
    "legendItems": "legend_items",
    "onBarClick": "on_bar_click",
    "viewportWidth": "viewport_width",
    "barWidth": "bar_width",
    "barDepth": "bar_depth",
    "cameraEye": "camera_eye",
}


@dataclass(frozen=True)
class ChartOptions:
    """
    Resolved options of a single render call.

    Attributes:
        title: Chart title.
        x_axis_title: Title of the category axis.
        y_axis_title: Title of the depth axis.
        z_axis_title: Title of the height axis.
        x_range: (min, max) of the category axis.
        y_range: (min, max) of the depth axis.
        z_range: (min, max) of the height axis.
        show_x_ticks: Draw tick labels on the category axis.
        show_legend: Request the legend overlay (still hidden on compact viewports).
        legend_items: Swatch + label rows of the legend overlay.
        on_bar_click: Called with (data_point, index) when a bar is clicked.
        viewport_width: Width of the target viewport in pixels, None if unknown.
        bar_width: Bar footprint along the category axis.
        bar_depth: Bar footprint along the depth axis.
        camera_eye: Initial camera eye, in units of the normalized scene box.
    """
    title: str = DEFAULT_TITLE
    x_axis_title: str = DEFAULT_X_AXIS_TITLE
    y_axis_title: str = DEFAULT_Y_AXIS_TITLE
    z_axis_title: str = DEFAULT_Z_AXIS_TITLE
    x_range: tuple[float, float] = DEFAULT_X_RANGE
    y_range: tuple[float, float] = DEFAULT_Y_RANGE
    z_range: tuple[float, float] = DEFAULT_Z_RANGE
    show_x_ticks: bool = True
    show_legend: bool = False
    legend_items: tuple[LegendItem, ...] = field(default_factory=tuple)
    on_bar_click: Optional[BarClickCallback] = None
    viewport_width: Optional[int] = None
    bar_width: float = BAR_WIDTH
    bar_depth: float = BAR_DEPTH
    camera_eye: tuple[float, float, float] = DEFAULT_CAMERA_EYE

    @property
    def is_compact(self) -> bool:
        """True for narrow (mobile-sized) viewports. Unknown width counts as desktop."""
        return self.viewport_width is not None and self.viewport_width <= COMPACT_VIEWPORT_WIDTH

    def with_viewport_width(self, width: Optional[int]) -> ChartOptions:
        return replace(self, viewport_width=width)


def resolve_options(overrides: Optional[Mapping[str, Any] | ChartOptions] = None) -> ChartOptions:
    """
    Merges caller overrides into the default options.

    Args:
        overrides: A ChartOptions (returned unchanged), a mapping of option
            names to values, or None for all defaults. Keys set to None keep
            their default.

    Returns:
        The resolved ChartOptions snapshot.

    Raises:
        ValueError: If a key is not a known option or a range is not a pair.
    """
    if overrides is None:
        return ChartOptions()
    if isinstance(overrides, ChartOptions):
        return overrides

    known = {f.name for f in fields(ChartOptions)}
    values: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _ALIASES.get(key, key)
        if name not in known:
            msg = f"Unknown chart option '{key}'."
            logger.error(msg)
            raise ValueError(msg)
        if value is None:
            continue
        values[name] = value

    for name in ("x_range", "y_range", "z_range"):
        if name in values:
            values[name] = _as_range(name, values[name])
    if "camera_eye" in values:
        values["camera_eye"] = _as_floats("camera_eye", values["camera_eye"], 3)
    if "legend_items" in values:
        values["legend_items"] = _as_legend_items(values["legend_items"])

    options = ChartOptions(**values)
    logger.debug(f"Resolved chart options: {sorted(values)}")
    return options


def _as_floats(name: str, value: Any, count: int) -> tuple[float, ...]:
    try:
        numbers = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        msg = f"Option '{name}' expects {count} numbers ({e})."
        logger.error(msg)
        raise ValueError(msg) from e
    if len(numbers) != count:
        msg = f"Option '{name}' expects {count} values, got {len(numbers)}."
        logger.error(msg)
        raise ValueError(msg)
    return numbers


def _as_range(name: str, value: Sequence[float]) -> tuple[float, float]:
    low, high = _as_floats(name, value, 2)
    return low, high


def _as_legend_items(items: Sequence[LegendItem | Mapping[str, str]]) -> tuple[LegendItem, ...]:
    resolved = []
    for position, item in enumerate(items, start=1):
        if isinstance(item, LegendItem):
            resolved.append(item)
            continue
        if not isinstance(item, Mapping) or not item.get("color") or not item.get("label"):
            msg = f"Legend item {position} needs a 'color' and a 'label', got {item!r}."
            logger.error(msg)
            raise ValueError(msg)
        resolved.append(LegendItem(color=str(item["color"]), label=str(item["label"])))
    return tuple(resolved)
