import numpy as np
import pytest

from barchart3d.model.chart import assemble_chart
from barchart3d.model.clicks import HitPoint, resolve_click
from barchart3d.view.widgets.chart_renderer import TITLE_ACTOR_NAME, BarChartRenderer


class FakeActor:
    def __init__(self, name: str) -> None:
        self.name = name


class FakePlotter:
    """Records the plotter calls made by the renderer."""

    def __init__(self) -> None:
        self.meshes: list[tuple[object, dict]] = []
        self.calls: list[tuple[str, dict]] = []
        self.camera_position = None

    def _record(self, name: str, /, **kwargs) -> None:
        self.calls.append((name, kwargs))

    def called(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]

    def add_mesh(self, mesh, **kwargs):
        self.meshes.append((mesh, kwargs))
        return FakeActor(kwargs["name"])

    def remove_legend(self):
        self._record("remove_legend")

    def remove_bounds_axes(self):
        self._record("remove_bounds_axes")

    def clear(self):
        self._record("clear")
        self.meshes.clear()

    def set_background(self, color):
        self._record("set_background", color=color)

    def set_scale(self, **kwargs):
        self._record("set_scale", **kwargs)

    def show_bounds(self, **kwargs):
        self._record("show_bounds", **kwargs)

    def add_text(self, text, **kwargs):
        self._record("add_text", text=text, **kwargs)

    def add_legend(self, **kwargs):
        self._record("add_legend", **kwargs)

    def reset_camera_clipping_range(self):
        self._record("reset_camera_clipping_range")

    def render(self):
        self._record("render")


@pytest.fixture
def plotter() -> FakePlotter:
    return FakePlotter()


def test_draw_adds_one_actor_per_trace(plotter, five_points):
    renderer = BarChartRenderer(plotter)

    renderer.draw(assemble_chart(five_points))

    names = [kwargs["name"] for _, kwargs in plotter.meshes]
    assert names == [n for i in range(5) for n in (f"bar_{i}", f"edges_{i}")]

    bar_kwargs = plotter.meshes[0][1]
    assert bar_kwargs["color"] == five_points[0].color
    assert bar_kwargs["pickable"] is True
    assert (bar_kwargs["ambient"], bar_kwargs["diffuse"], bar_kwargs["specular"]) == (1.0, 0.0, 0.0)

    edge_kwargs = plotter.meshes[1][1]
    assert edge_kwargs["color"] == "black"
    assert edge_kwargs["line_width"] == 2
    assert edge_kwargs["pickable"] is False

    assert plotter.calls[-1][0] == "render"


def test_draw_applies_layout_and_title(plotter, five_points):
    renderer = BarChartRenderer(plotter)

    renderer.draw(assemble_chart(five_points, {"title": "Sales", "showXTicks": False, "xRange": [0, 10]}))

    (scale,) = plotter.called("set_scale")
    assert scale["xscale"] == pytest.approx(0.1)
    assert scale["zscale"] == pytest.approx(0.01)

    (bounds,) = plotter.called("show_bounds")
    assert bounds["axes_ranges"] == [0.0, 10.0, 0.0, 100.0, 0.0, 100.0]
    assert bounds["bounds"] == pytest.approx([0.0, 1.0, 0.0, 1.0, 0.0, 1.0])
    assert bounds["show_xlabels"] is False
    assert bounds["xtitle"] == "X Axis"

    (title,) = plotter.called("add_text")
    assert title["text"] == "Sales"
    assert title["name"] == TITLE_ACTOR_NAME


def test_camera_looks_at_scene_center(plotter, five_points):
    renderer = BarChartRenderer(plotter)

    renderer.draw(assemble_chart(five_points, {"camera_eye": (1.0, 0.0, 0.0)}))

    position, focal_point, view_up = plotter.camera_position
    assert np.allclose(focal_point, (0.625, 0.5, 0.5))
    assert np.allclose(position, (1.625, 0.5, 0.5))
    assert view_up == (0.0, 0.0, 1.0)


def test_legend_is_drawn_only_when_requested(plotter, five_points):
    renderer = BarChartRenderer(plotter)
    items = [{"color": "#1f77b4", "label": "North"}, {"color": "#ff7f0e", "label": "South"}]

    renderer.draw(assemble_chart(five_points, {"showLegend": True, "legendItems": items}))
    (legend,) = plotter.called("add_legend")
    assert legend["labels"] == [["North", "#1f77b4"], ["South", "#ff7f0e"]]

    plotter.calls.clear()
    renderer.draw(assemble_chart(five_points, {"showLegend": True, "legendItems": items, "viewportWidth": 600}))
    assert plotter.called("add_legend") == []


def test_picked_actor_maps_back_to_trace(plotter, five_points):
    renderer = BarChartRenderer(plotter)
    renderer.draw(assemble_chart(five_points))
    actors = {actor.name: actor for actor in _actors(renderer)}

    hits = renderer.hit_report_for(actors["bar_2"], (1.0, 2.0, 3.0))
    assert hits == [HitPoint(trace_name="bar_2", position=(1.0, 2.0, 3.0))]
    assert resolve_click(hits, five_points) == (five_points[2], 2)

    wire_hits = renderer.hit_report_for(actors["edges_2"])
    assert resolve_click(wire_hits, five_points) is None

    assert renderer.hit_report_for(None) == []
    assert renderer.hit_report_for(FakeActor("stranger")) == []


def test_hover_text_lookup(plotter, five_points):
    renderer = BarChartRenderer(plotter)
    renderer.draw(assemble_chart(five_points))

    assert "Bar 1" in renderer.hover_text_for("bar_1")
    assert renderer.hover_text_for("edges_1") is None
    assert renderer.hover_text_for(None) is None


def test_redraw_forgets_previous_actors(plotter, five_points):
    renderer = BarChartRenderer(plotter)
    renderer.draw(assemble_chart(five_points))
    old_actor = _actors(renderer)[0]

    renderer.draw(assemble_chart(five_points[:1]))

    assert renderer.trace_name_for(old_actor) is None
    assert len(_actors(renderer)) == 2


def test_empty_request_is_rejected(plotter):
    renderer = BarChartRenderer(plotter)
    with pytest.raises(ValueError):
        renderer.draw(assemble_chart([]))
    assert plotter.meshes == []


def _actors(renderer: BarChartRenderer) -> list:
    return list(renderer._trace_by_actor)
