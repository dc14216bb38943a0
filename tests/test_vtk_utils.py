import numpy as np
import pytest
import pyvista as pv

from barchart3d.model.chart import assemble_chart
from barchart3d.view.widgets.vtk_utils import VtkUtils


def test_mesh_trace_to_polydata(five_points):
    trace = assemble_chart(five_points).mesh_traces[0]

    mesh = VtkUtils.mesh_trace_to_polydata(trace)

    assert isinstance(mesh, pv.PolyData)
    assert mesh.n_points == 8
    assert mesh.n_cells == 12
    faces = mesh.faces.reshape(-1, 4)
    assert np.all(faces[:, 0] == 3)
    assert np.array_equal(faces[:, 1:], trace.triangles)


def test_split_at_path_breaks():
    nan = [np.nan] * 3
    points = np.array([
        [0, 0, 0], [1, 0, 0], [1, 1, 0], nan,
        [5, 5, 5], nan,
        nan,
        [2, 2, 2], [3, 3, 3],
    ], dtype=np.float64)

    runs = VtkUtils.split_at_path_breaks(points)

    # The lone point between breaks cannot form a segment
    assert [len(r) for r in runs] == [3, 2]
    assert np.allclose(runs[1], [[2, 2, 2], [3, 3, 3]])


def test_line_trace_to_polydata_keeps_runs_apart(five_points):
    trace = assemble_chart(five_points).line_traces[0]

    edges = VtkUtils().line_trace_to_polydata(trace)

    # Two closed loops of 5 points and four 2-point connectors
    assert edges.n_points == 5 + 5 + 4 * 2
    assert edges.n_lines == 6
    assert not np.isnan(edges.points).any()


def test_scene_scale():
    assert VtkUtils.scene_scale((0.5, 4.5, 0, 100, 0, 50)) == pytest.approx((0.25, 0.01, 0.02))
    assert VtkUtils.scene_scale((1, 1, 0, 10, 5, 0)) == pytest.approx((1.0, 0.1, 1.0))
