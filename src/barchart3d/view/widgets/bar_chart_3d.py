"""
3D Bar Chart Widget (PyVista Wrapper)
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Sequence, Union

from PySide6.QtWidgets import QWidget, QVBoxLayout, QToolTip
from PySide6.QtCore import QTimer, Signal
from PySide6.QtGui import QCloseEvent, QCursor

from pyvistaqt import QtInteractor
from vtkmodules.vtkRenderingCore import vtkPropPicker

from barchart3d.config import RESIZE_DELAY_MS
from barchart3d.model.chart import RenderRequest, assemble_chart
from barchart3d.model.clicks import BarClickCallback, ClickSubscription, HitPoint
from barchart3d.model.data_point import DataPoint
from barchart3d.model.options import ChartOptions, resolve_options
from barchart3d.view.widgets.chart_renderer import BarChartRenderer

logger = logging.getLogger(__name__)

# A press and release further apart than this is a drag (rotation), not a click
CLICK_TOLERANCE_PX = 3


class BarChart3DWidget(QWidget):
    """
    Container of one 3D bar chart.

    Drawing is scheduled on the Qt event loop: render_chart() returns right
    away and the outcome is reported by `render_finished` / `render_failed`.
    """
    render_finished = Signal()
    render_failed = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Managers ---
        self._renderer = BarChartRenderer(self.plotter)
        self._picker = vtkPropPicker()

        # --- Data state ---
        # Read on every click, so clicks resolve against the current data
        self._data: Sequence[DataPoint] = []
        self._subscriptions: list[ClickSubscription] = []
        self._closed = False

        # --- Pointer state ---
        self._press_position: Optional[tuple[int, int]] = None
        self._hovered_trace: Optional[str] = None
        self._attach_observers()

        # Layout pass after a successful draw
        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(RESIZE_DELAY_MS)
        self._resize_timer.timeout.connect(self._resize_pass)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def render_chart(
        self,
        data: Optional[Sequence[DataPoint]],
        options: Optional[Union[Mapping[str, Any], ChartOptions]] = None
    ) -> Optional[ClickSubscription]:
        """
        Builds the chart and schedules the draw.

        Args:
            data: Bars to draw. Empty or None hides the widget, nothing is drawn.
            options: Chart option overrides. Without an explicit viewport width
                the current widget width is used (read once, here).

        Returns:
            The click subscription when options carry an on_bar_click callback.
            The caller owns it and disposes it when done.
        """
        resolved = resolve_options(options)
        if resolved.viewport_width is None:
            resolved = resolved.with_viewport_width(self.width())

        request = assemble_chart(data, resolved)
        self._data = data if data is not None else []

        if request.hide_container:
            self.hide()
            return None
        self.show()

        subscription = None
        if resolved.on_bar_click is not None:
            subscription = self.subscribe_bar_click(resolved.on_bar_click)

        QTimer.singleShot(0, lambda: self._draw(request))
        return subscription

    def subscribe_bar_click(self, callback: BarClickCallback) -> ClickSubscription:
        """Registers a callback invoked with (data_point, index) on bar clicks."""
        subscription = ClickSubscription(
            callback,
            data_source=lambda: self._data,
            on_dispose=self._remove_subscription,
        )
        self._subscriptions.append(subscription)
        logger.debug(f"Bar click subscription added ({len(self._subscriptions)} active).")
        return subscription

    def dispatch_hit(self, hit_points: Sequence[HitPoint]) -> None:
        """Forwards a hit report to every active click subscription."""
        for subscription in list(self._subscriptions):
            subscription.dispatch(hit_points)

    # ------------------------------------------------------------------------------
    # Internal: Drawing
    # ------------------------------------------------------------------------------

    def _draw(self, request: RenderRequest) -> None:
        # Scheduled before the widget was closed
        if self._closed:
            return

        try:
            self._renderer.draw(request)
        except Exception as e:
            logger.exception(f"Failed to render chart: {e}")
            self.render_failed.emit(str(e))
            return

        logger.info("Chart rendered.")
        self.render_finished.emit()
        self._resize_timer.start()

    def _resize_pass(self) -> None:
        """Re-fits the render window once the layout has settled."""
        self.plotter.updateGeometry()
        self.plotter.reset_camera_clipping_range()
        self.plotter.render()

    def _remove_subscription(self, subscription: ClickSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    # ------------------------------------------------------------------------------
    # Internal: Setup & Observers
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("white")
        self.plotter.enable_trackball_style()

    def _attach_observers(self) -> None:
        iren = self.plotter.iren
        iren.add_observer("LeftButtonPressEvent", lambda *_: self._on_left_press())
        iren.add_observer("LeftButtonReleaseEvent", lambda *_: self._on_left_release())
        iren.add_observer("MouseMoveEvent", lambda *_: self._on_mouse_move())

    def _pick(self) -> tuple[Any, tuple[float, float, float]]:
        x, y = self.plotter.iren.get_event_position()
        self._picker.PickProp(x, y, self.plotter.renderer)
        return self._picker.GetViewProp(), tuple(self._picker.GetPickPosition())

    def _on_left_press(self) -> None:
        self._press_position = tuple(self.plotter.iren.get_event_position())

    def _on_left_release(self) -> None:
        if self._press_position is None:
            return
        x0, y0 = self._press_position
        x1, y1 = self.plotter.iren.get_event_position()
        self._press_position = None
        if math.hypot(x1 - x0, y1 - y0) > CLICK_TOLERANCE_PX:
            return
        if not self._subscriptions:
            return

        actor, position = self._pick()
        hit_points = self._renderer.hit_report_for(actor, position)
        if hit_points:
            self.dispatch_hit(hit_points)

    def _on_mouse_move(self) -> None:
        # No hover while rotating
        if self._press_position is not None:
            return

        actor, _ = self._pick()
        trace_name = self._renderer.trace_name_for(actor)
        if trace_name == self._hovered_trace:
            return
        self._hovered_trace = trace_name

        hover_text = self._renderer.hover_text_for(trace_name)
        if hover_text:
            QToolTip.showText(QCursor.pos(), hover_text, self)
        else:
            QToolTip.hideText()

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._closed:
            event.accept()
            return
        self._closed = True
        for subscription in list(self._subscriptions):
            subscription.dispose()
        self._resize_timer.stop()
        self.plotter.close()
        event.accept()
