"""
Main Application Window
=======================
Demo window around a single BarChart3DWidget.

It loads a chart file (File -> Open), forwards the file's options to the
widget and reports clicked bars in the status bar.
"""
import logging
import os
from typing import Any, Optional

from PySide6.QtWidgets import QMainWindow, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent

from barchart3d.application import VISIBLE_APP_NAME
from barchart3d.model.clicks import ClickSubscription
from barchart3d.model.data_point import DataPoint
from barchart3d.model.io import load_chart_file
from barchart3d.view.widgets.bar_chart_3d import BarChart3DWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, extra_options: Optional[dict[str, Any]] = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)

        self._extra_options: dict[str, Any] = dict(extra_options or {})
        self._click_subscription: Optional[ClickSubscription] = None

        self.chart = BarChart3DWidget(self)
        self.setCentralWidget(self.chart)
        self.chart.render_failed.connect(self._on_render_failed)

        self._create_menu()
        self.statusBar().showMessage("Ready")

    def _create_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.on_open)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    # ------------------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------------------

    def on_open(self) -> None:
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open chart data", "", "Chart data (*.json *.csv)"
        )
        if filepath:
            self.load_file(filepath)

    def load_file(self, filepath: str) -> None:
        try:
            points, options = load_chart_file(filepath)
            # Command line options are merged in here and can still be rejected
            self.show_chart(points, options)
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Could not load chart data:\n{e}")
            return

        self.setWindowTitle(f"{VISIBLE_APP_NAME} - {os.path.basename(filepath)}")

    def show_chart(self, points: list[DataPoint], options: dict[str, Any]) -> None:
        # One live subscription per window
        if self._click_subscription is not None:
            self._click_subscription.dispose()

        merged = {**options, **self._extra_options, "on_bar_click": self._on_bar_click}
        self._click_subscription = self.chart.render_chart(points, merged)
        self.statusBar().showMessage(f"{len(points)} bars")

    # ------------------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------------------

    def _on_bar_click(self, point: DataPoint, index: int) -> None:
        self.statusBar().showMessage(
            f"Bar {index}: {point.label} (x={point.x:g}, z={point.z:g}, value={point.y:g})"
        )

    def _on_render_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Render failed: {message}")

    def closeEvent(self, event: QCloseEvent) -> None:
        # Child widgets get no close event of their own
        self.chart.close()
        super().closeEvent(event)
