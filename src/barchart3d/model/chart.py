"""
Chart Assembly
==============
Turns data points and options into an engine-neutral render request.

The request only describes what to draw: one mesh trace and one wireframe
trace per bar, axes, camera, title and the optional legend overlay. The view
layer hands it to PyVista; nothing in here touches a plotter.

Classes:
    MeshTrace: A triangulated solid (one bar).
    LineTrace: A wireframe path with NaN path breaks (one bar outline).
    SceneLayout: Axes and camera of the 3D scene.
    LegendOverlay: Swatch + label list drawn over the scene.
    RenderRequest: Everything the renderer needs for one draw.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Mapping, Optional, Sequence, Union, TYPE_CHECKING

import numpy as np

from barchart3d.config import EDGE_COLOR, EDGE_WIDTH
from barchart3d.model.clicks import bar_trace_name, edge_trace_name
from barchart3d.model.data_point import DataPoint, LegendItem, normalize_color
from barchart3d.model.geometry import build_bar_geometry
from barchart3d.model.options import ChartOptions, resolve_options

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class MeshTrace:
    """A closed, flat-shaded box surface."""
    name: str
    bar_index: int
    vertices: npt.NDArray[np.float64]  # (8, 3)
    i: npt.NDArray[np.int_]
    j: npt.NDArray[np.int_]
    k: npt.NDArray[np.int_]
    color: str
    hover_text: str
    opacity: float = 1.0
    ambient: float = 1.0
    diffuse: float = 0.0
    specular: float = 0.0
    show_legend: bool = False

    @property
    def triangles(self) -> npt.NDArray[np.int_]:
        """(12, 3) array of corner indices."""
        return np.column_stack([self.i, self.j, self.k])


@dataclass
class LineTrace:
    """Connected line segments; NaN rows break the path."""
    name: str
    points: npt.NDArray[np.float64]  # (M, 3)
    color: str = EDGE_COLOR
    line_width: float = EDGE_WIDTH
    hoverable: bool = False
    show_legend: bool = False


Trace = Union[MeshTrace, LineTrace]


@dataclass(frozen=True)
class AxisConfig:
    title: str
    range: tuple[float, float]
    show_ticks: bool = True


@dataclass(frozen=True)
class SceneLayout:
    """Axes and the initial camera eye of the scene."""
    x_axis: AxisConfig
    y_axis: AxisConfig
    z_axis: AxisConfig
    camera_eye: tuple[float, float, float]

    @property
    def bounds(self) -> tuple[float, float, float, float, float, float]:
        """(xmin, xmax, ymin, ymax, zmin, zmax) in data units."""
        return (*self.x_axis.range, *self.y_axis.range, *self.z_axis.range)


@dataclass(frozen=True)
class LegendOverlay:
    items: tuple[LegendItem, ...]


@dataclass
class RenderRequest:
    """
    One draw request for the renderer.

    When `hide_container` is set there is nothing to draw and the caller hides
    the chart container instead of issuing the draw.
    """
    title: str
    traces: list[Trace] = field(default_factory=list)
    layout: Optional[SceneLayout] = None
    legend: Optional[LegendOverlay] = None
    hide_container: bool = False

    @property
    def mesh_traces(self) -> list[MeshTrace]:
        return [t for t in self.traces if isinstance(t, MeshTrace)]

    @property
    def line_traces(self) -> list[LineTrace]:
        return [t for t in self.traces if isinstance(t, LineTrace)]


def build_scene_layout(options: ChartOptions) -> SceneLayout:
    return SceneLayout(
        x_axis=AxisConfig(options.x_axis_title, options.x_range, show_ticks=options.show_x_ticks),
        y_axis=AxisConfig(options.y_axis_title, options.y_range),
        z_axis=AxisConfig(options.z_axis_title, options.z_range),
        camera_eye=options.camera_eye,
    )


def build_legend_overlay(options: ChartOptions) -> Optional[LegendOverlay]:
    """The legend is drawn only when requested and the viewport is not compact."""
    if not options.show_legend or options.is_compact:
        return None
    return LegendOverlay(items=tuple(
        LegendItem(color=normalize_color(item.color), label=item.label)
        for item in options.legend_items
    ))


def assemble_chart(
    data: Optional[Sequence[DataPoint]],
    options: Optional[Union[Mapping[str, Any], ChartOptions]] = None
) -> RenderRequest:
    """
    Builds the render request for a list of data points.

    Args:
        data: Bars in display order. None or empty means "nothing to draw".
        options: Overrides merged into the default ChartOptions.

    Returns:
        A RenderRequest with a mesh trace followed by a wireframe trace for
        every point, in input order. For empty data the request has no traces
        and asks for the container to be hidden.
    """
    resolved = resolve_options(options)

    if not data:
        logger.info("No data to plot, hiding chart container.")
        return RenderRequest(title=resolved.title, hide_container=True)

    traces: list[Trace] = []
    for index, point in enumerate(data):
        geometry = build_bar_geometry(point, width=resolved.bar_width, depth=resolved.bar_depth)
        traces.append(
            MeshTrace(
                name=bar_trace_name(index),
                bar_index=index,
                vertices=geometry.corners,
                i=geometry.faces[:, 0],
                j=geometry.faces[:, 1],
                k=geometry.faces[:, 2],
                color=normalize_color(point.color),
                hover_text=point.resolved_hover_text(),
            )
        )
        traces.append(LineTrace(name=edge_trace_name(index), points=geometry.edges))

    request = RenderRequest(
        title=resolved.title,
        traces=traces,
        layout=build_scene_layout(resolved),
        legend=build_legend_overlay(resolved),
    )
    logger.debug(f"Assembled {len(traces)} traces for {len(data)} bars.")
    return request
