"""3D bar charts drawn with PyVista: bar geometry, chart assembly and a Qt widget."""
from barchart3d.model.chart import RenderRequest, assemble_chart
from barchart3d.model.clicks import ClickSubscription, HitPoint, resolve_click
from barchart3d.model.data_point import DataPoint, LegendItem
from barchart3d.model.options import ChartOptions, resolve_options

__all__ = [
    "ChartOptions",
    "ClickSubscription",
    "DataPoint",
    "HitPoint",
    "LegendItem",
    "RenderRequest",
    "assemble_chart",
    "resolve_click",
    "resolve_options",
]
