"""
Chart Renderer
Issues a RenderRequest to a PyVista plotter.

Works on any pyvista.Plotter (a QtInteractor inside the widget, or an
off-screen plotter for exports). The renderer remembers which actor belongs to
which trace so a picked actor can be mapped back to its trace name.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
import pyvista as pv

from barchart3d.model.chart import LegendOverlay, LineTrace, MeshTrace, RenderRequest, SceneLayout
from barchart3d.model.clicks import HitPoint
from barchart3d.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)

TITLE_ACTOR_NAME = "chart_title"
BACKGROUND_COLOR = "white"


class BarChartRenderer:
    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self._vtk_utils = VtkUtils()

        # --- Actors state ---
        self._trace_by_actor: dict[Any, str] = {}
        self._hover_by_trace: dict[str, str] = {}
        self._scale: tuple[float, float, float] = (1.0, 1.0, 1.0)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def draw(self, request: RenderRequest) -> None:
        """
        Replaces the scene with the given request.
        1. Traces (bars + wireframes)
        2. Axes and title
        3. Legend overlay
        4. Camera
        """
        if request.hide_container or request.layout is None:
            raise ValueError("Render request has nothing to draw.")

        logger.info(f"Drawing chart '{request.title}' with {len(request.traces)} traces.")
        self.clear()
        self.plotter.set_background(BACKGROUND_COLOR)

        # --- 1. LAYER: TRACES ---
        for trace in request.traces:
            if isinstance(trace, MeshTrace):
                self._add_mesh_trace(trace)
            elif isinstance(trace, LineTrace):
                self._add_line_trace(trace)

        # --- 2. LAYER: AXES ---
        self._apply_layout(request.layout)
        self.plotter.add_text(
            request.title,
            position="upper_edge",
            font_size=12,
            color="black",
            name=TITLE_ACTOR_NAME,
        )

        # --- 3. LAYER: LEGEND ---
        if request.legend is not None:
            self._add_legend(request.legend)

        # --- 4. CAMERA ---
        self._apply_camera(request.layout)

        self.plotter.render()

    def clear(self) -> None:
        """Removes every actor of the previous draw."""
        self.plotter.remove_legend()
        self.plotter.remove_bounds_axes()
        self.plotter.clear()
        self._trace_by_actor.clear()
        self._hover_by_trace.clear()

    def trace_name_for(self, actor: Any) -> Optional[str]:
        if actor is None:
            return None
        return self._trace_by_actor.get(actor)

    def hover_text_for(self, trace_name: Optional[str]) -> Optional[str]:
        if trace_name is None:
            return None
        return self._hover_by_trace.get(trace_name)

    def hit_report_for(self, actor: Any, position: Optional[tuple[float, float, float]] = None) -> list[HitPoint]:
        """Builds the hit report of a picked actor (empty if the actor is not a trace)."""
        name = self.trace_name_for(actor)
        if name is None:
            return []
        return [HitPoint(trace_name=name, position=position)]

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _add_mesh_trace(self, trace: MeshTrace) -> None:
        mesh = self._vtk_utils.mesh_trace_to_polydata(trace)
        actor = self.plotter.add_mesh(
            mesh,
            color=trace.color,
            opacity=trace.opacity,
            ambient=trace.ambient,
            diffuse=trace.diffuse,
            specular=trace.specular,
            pickable=True,
            show_scalar_bar=False,
            name=trace.name,
        )
        self._trace_by_actor[actor] = trace.name
        self._hover_by_trace[trace.name] = trace.hover_text

    def _add_line_trace(self, trace: LineTrace) -> None:
        edges = self._vtk_utils.line_trace_to_polydata(trace)
        if edges.n_points == 0:
            return
        actor = self.plotter.add_mesh(
            edges,
            color=trace.color,
            line_width=trace.line_width,
            pickable=trace.hoverable,
            render_lines_as_tubes=False,
            show_scalar_bar=False,
            name=trace.name,
        )
        self._trace_by_actor[actor] = trace.name

    def _apply_layout(self, layout: SceneLayout) -> None:
        # Every axis range spans one unit on screen, like a cube-shaped scene
        self._scale = self._vtk_utils.scene_scale(layout.bounds)
        sx, sy, sz = self._scale
        self.plotter.set_scale(xscale=sx, yscale=sy, zscale=sz, reset_camera=False)

        # Box drawn in scaled world units, labelled in data units
        scaled_bounds = [v * s for v, s in zip(layout.bounds, (sx, sx, sy, sy, sz, sz))]
        self.plotter.show_bounds(
            bounds=scaled_bounds,
            axes_ranges=list(layout.bounds),
            xtitle=layout.x_axis.title,
            ytitle=layout.y_axis.title,
            ztitle=layout.z_axis.title,
            show_xlabels=layout.x_axis.show_ticks,
            show_ylabels=layout.y_axis.show_ticks,
            show_zlabels=layout.z_axis.show_ticks,
            grid="back",
            location="outer",
            color="black",
        )

    def _add_legend(self, legend: LegendOverlay) -> None:
        if not legend.items:
            return
        self.plotter.add_legend(
            labels=[[item.label, item.color] for item in legend.items],
            bcolor="white",
            border=True,
            loc="upper right",
            face="rectangle",
            size=(0.2, 0.05 * len(legend.items) + 0.02),
        )

    def _apply_camera(self, layout: SceneLayout) -> None:
        bounds = np.asarray(layout.bounds, dtype=np.float64).reshape(3, 2)
        scale = np.asarray(self._scale, dtype=np.float64)

        # Work in scaled (screen) units where the scene box is roughly a unit cube
        center = bounds.mean(axis=1) * scale
        extent = (bounds[:, 1] - bounds[:, 0]) * scale
        eye = np.asarray(layout.camera_eye, dtype=np.float64)
        position = center + eye * np.where(extent > 0, extent, 1.0)

        self.plotter.camera_position = [
            tuple(position),
            tuple(center),
            (0.0, 0.0, 1.0),
        ]
        self.plotter.reset_camera_clipping_range()
