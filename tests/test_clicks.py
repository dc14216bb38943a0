import pytest

from barchart3d.model.clicks import (
    ClickSubscription,
    HitPoint,
    bar_trace_name,
    edge_trace_name,
    parse_bar_index,
    resolve_click,
)
from barchart3d.model.data_point import DataPoint


class RecordingCallback:
    def __init__(self) -> None:
        self.calls: list[tuple[DataPoint, int]] = []

    def __call__(self, point: DataPoint, index: int) -> None:
        self.calls.append((point, index))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("bar_0", 0),
        ("bar_12", 12),
        (bar_trace_name(7), 7),
        (edge_trace_name(2), None),
        ("bar_", None),
        ("bar_x", None),
        ("bar_-1", None),
        ("Bar_1", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_bar_index(name, expected):
    assert parse_bar_index(name) == expected


def test_resolve_click_uses_first_hit(five_points):
    hits = [HitPoint("bar_2"), HitPoint("bar_4")]
    assert resolve_click(hits, five_points) == (five_points[2], 2)


def test_resolve_click_ignores_bad_hits(five_points):
    assert resolve_click([], five_points) is None
    assert resolve_click([HitPoint("bar_9")], five_points) is None
    assert resolve_click([HitPoint("edges_2")], five_points) is None
    assert resolve_click([HitPoint("chart_title")], five_points) is None


def test_subscription_dispatches_bar_hits(five_points):
    callback = RecordingCallback()
    subscription = ClickSubscription(callback, data_source=lambda: five_points)

    assert subscription.dispatch([HitPoint("bar_2")]) is True
    assert callback.calls == [(five_points[2], 2)]


def test_subscription_ignores_out_of_range_and_wireframe_hits(five_points):
    callback = RecordingCallback()
    subscription = ClickSubscription(callback, data_source=lambda: five_points)

    assert subscription.dispatch([HitPoint("bar_9")]) is False
    assert subscription.dispatch([HitPoint(edge_trace_name(2))]) is False
    assert callback.calls == []


def test_index_is_checked_against_click_time_data(five_points):
    callback = RecordingCallback()
    current = {"data": five_points}
    subscription = ClickSubscription(callback, data_source=lambda: current["data"])

    # Chart re-rendered with fewer bars after the subscription was made
    current["data"] = five_points[:2]
    assert subscription.dispatch([HitPoint("bar_3")]) is False
    assert subscription.dispatch([HitPoint("bar_1")]) is True
    assert callback.calls == [(five_points[1], 1)]


def test_dispose_stops_dispatch_and_notifies_owner(five_points):
    callback = RecordingCallback()
    disposed = []
    subscription = ClickSubscription(
        callback,
        data_source=lambda: five_points,
        on_dispose=disposed.append,
    )

    subscription.dispose()
    subscription.dispose()

    assert subscription.disposed
    assert disposed == [subscription]
    assert subscription.dispatch([HitPoint("bar_0")]) is False
    assert callback.calls == []
