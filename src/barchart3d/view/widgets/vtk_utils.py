"""
VTK and Geometry Utilities
Helper functions converting chart traces into PyVista data.
"""
import logging

import numpy as np
import numpy.typing as npt
import pyvista as pv

from barchart3d.model.chart import LineTrace, MeshTrace

logger = logging.getLogger(__name__)


class VtkUtils:
    @staticmethod
    def mesh_trace_to_polydata(trace: MeshTrace) -> pv.PolyData:
        """
        Converts a mesh trace (vertices + i/j/k index arrays) into triangle PolyData.
        """
        points = np.asarray(trace.vertices, dtype=np.float64).reshape(-1, 3)
        triangles = trace.triangles
        # face cell: [3, a, b, c] per triangle
        faces = np.hstack([
            np.full((triangles.shape[0], 1), 3, dtype=np.int_),
            triangles.astype(np.int_)
        ]).ravel()
        return pv.PolyData(points, faces=faces)

    @staticmethod
    def split_at_path_breaks(points: npt.NDArray[np.float64]) -> list[npt.NDArray[np.float64]]:
        """
        Splits a (M, 3) coordinate sequence at NaN rows.

        Runs with fewer than 2 points cannot form a segment and are dropped.
        """
        arr = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        is_break = np.isnan(arr).any(axis=1)

        runs: list[npt.NDArray[np.float64]] = []
        start = 0
        for idx in np.flatnonzero(is_break):
            if idx - start >= 2:
                runs.append(arr[start:idx])
            start = idx + 1
        if len(arr) - start >= 2:
            runs.append(arr[start:])
        return runs

    def line_trace_to_polydata(self, trace: LineTrace) -> pv.PolyData:
        """Converts a line trace into PolyData with one poly-line cell per run."""
        runs = self.split_at_path_breaks(trace.points)
        if not runs:
            return pv.PolyData()

        cells_list: list[npt.NDArray[np.int_]] = []
        offset = 0
        for run in runs:
            n = run.shape[0]
            # polyline cell: [n, id0, id1, ..., id(n-1)]
            cells_list.append(np.hstack([[n], np.arange(offset, offset + n, dtype=np.int_)]))
            offset += n

        pd = pv.PolyData(np.vstack(runs))
        pd.lines = np.concatenate(cells_list).astype(np.int_)
        pd.verts = np.empty(0, dtype=int)  # no markers at the vertices
        return pd

    @staticmethod
    def scene_scale(bounds: tuple[float, float, float, float, float, float]) -> tuple[float, float, float]:
        """
        Per-axis scale that maps every axis range onto a unit length.

        A degenerate range keeps scale 1.0.
        """
        scale = []
        for lo, hi in zip(bounds[0::2], bounds[1::2]):
            extent = float(hi) - float(lo)
            scale.append(1.0 / extent if extent > 0 else 1.0)
        return scale[0], scale[1], scale[2]
