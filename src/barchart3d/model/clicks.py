"""
Click Attribution
Maps a hit report from the rendering engine back to the clicked data point.

Mesh traces are named ``bar_<index>``. On a click the first hit is decoded
and its index is checked against the data the chart holds *at click time*,
so a chart re-rendered with fewer points never reports a stale bar.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Optional, Sequence

from barchart3d.model.data_point import DataPoint

logger = logging.getLogger(__name__)

BAR_TRACE_PREFIX = "bar_"
EDGE_TRACE_PREFIX = "edges_"

BarClickCallback = Callable[[DataPoint, int], None]


@dataclass(frozen=True)
class HitPoint:
    """One entry of a hit report: the trace the pointer landed on."""
    trace_name: str
    position: Optional[tuple[float, float, float]] = None


def bar_trace_name(index: int) -> str:
    return f"{BAR_TRACE_PREFIX}{index}"


def edge_trace_name(index: int) -> str:
    return f"{EDGE_TRACE_PREFIX}{index}"


def parse_bar_index(trace_name: Optional[str]) -> Optional[int]:
    """
    Decodes the bar index from a mesh trace name.

    Returns None when the prefix is missing or the suffix is not a plain
    non-negative integer.
    """
    if not trace_name or not trace_name.startswith(BAR_TRACE_PREFIX):
        return None
    suffix = trace_name[len(BAR_TRACE_PREFIX):]
    if not (suffix.isascii() and suffix.isdigit()):
        return None
    return int(suffix)


def resolve_click(
    hit_points: Sequence[HitPoint],
    data: Sequence[DataPoint]
) -> Optional[tuple[DataPoint, int]]:
    """
    Resolves the first hit of a report against the current data.

    Args:
        hit_points: The hit report; only the first entry is inspected.
        data: The data currently shown by the chart.

    Returns:
        (data_point, index), or None for wireframe hits, malformed names and
        indices outside the data.
    """
    if not hit_points:
        return None

    trace_name = hit_points[0].trace_name
    index = parse_bar_index(trace_name)
    if index is None:
        logger.debug(f"Ignoring click on non-bar trace '{trace_name}'.")
        return None
    if index >= len(data):
        logger.debug(f"Ignoring click on '{trace_name}': only {len(data)} data points.")
        return None
    return data[index], index


class ClickSubscription:
    """
    A registered bar-click callback.

    Returned to the caller, who owns it and calls dispose() when the callback
    should stop firing. The data is read through `data_source` on every click.
    """

    def __init__(
        self,
        callback: BarClickCallback,
        data_source: Callable[[], Sequence[DataPoint]],
        on_dispose: Optional[Callable[[ClickSubscription], None]] = None
    ) -> None:
        self._callback = callback
        self._data_source = data_source
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispatch(self, hit_points: Sequence[HitPoint]) -> bool:
        """
        Forwards a hit report to the callback if it names a current bar.

        Returns:
            True if the callback was invoked.
        """
        if self._disposed:
            return False

        resolved = resolve_click(hit_points, self._data_source())
        if resolved is None:
            return False

        point, index = resolved
        logger.info(f"Bar {index} clicked ({point.label}).")
        self._callback(point, index)
        return True

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._on_dispose is not None:
            self._on_dispose(self)
