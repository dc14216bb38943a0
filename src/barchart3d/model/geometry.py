"""
Bar Geometry
Closed-form construction of the box drawn for every data point.

A bar is an axis-aligned box with 8 corners. Corners 0-3 lie on the floor
(height 0) and corners 4-7 directly above them at the bar height:

        5 ------- 6
       /|        /|
      4 ------- 7 |         scene Z (height)
      | 1 ------|-2         |  scene Y (depth)
      |/        |/          | /
      0 ------- 3           |/___ scene X (category)

The box topology never changes, so the triangulation and the edge path are
fixed index tables shared by every bar.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from barchart3d.config import BAR_DEPTH, BAR_WIDTH

if TYPE_CHECKING:
    import numpy.typing as npt
    from barchart3d.model.data_point import DataPoint

# Triangle vertex indices, as three parallel arrays (two triangles per face).
# The winding matters: other tables leave faces inverted or missing.
BOX_FACES_I: tuple[int, ...] = (7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2)
BOX_FACES_J: tuple[int, ...] = (3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 3)
BOX_FACES_K: tuple[int, ...] = (0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6)

# Bottom loop, top loop, then the four vertical connectors.
# None marks a path break.
BOX_EDGE_PATH: tuple[int | None, ...] = (
    0, 1, 2, 3, 0, None,
    4, 5, 6, 7, 4, None,
    0, 4, None,
    1, 5, None,
    2, 6, None,
    3, 7,
)


@dataclass
class BarGeometry:
    """
    Derived geometry of one bar.

    Attributes:
        corners: (8, 3) array of corner coordinates.
        faces: (12, 3) array of triangle corner indices.
        edges: (M, 3) array tracing all 12 box edges, NaN rows are path breaks.
    """
    corners: npt.NDArray[np.float64]
    faces: npt.NDArray[np.int_]
    edges: npt.NDArray[np.float64]

    @property
    def height(self) -> float:
        return float(self.corners[4, 2] - self.corners[0, 2])


def corner_positions(
    point: DataPoint,
    width: float = BAR_WIDTH,
    depth: float = BAR_DEPTH
) -> npt.NDArray[np.float64]:
    """
    Computes the 8 corners of the box standing on the floor at (point.x, point.z).

    Args:
        point: The data point; y is the bar height.
        width: Footprint extent along scene X.
        depth: Footprint extent along scene Y.

    Returns:
        (8, 3) array. Rows 0-3 are at height 0, rows 4-7 at height point.y.
        Heights are not validated, a negative or NaN value goes through as is.
    """
    x0 = point.x - width / 2
    x1 = point.x + width / 2
    y0 = point.z - depth / 2
    y1 = point.z + depth / 2

    footprint = np.array(
        [[x0, y0], [x0, y1], [x1, y1], [x1, y0]],
        dtype=np.float64
    )
    bottom = np.c_[footprint, np.zeros(4, dtype=np.float64)]
    top = np.c_[footprint, np.full(4, point.y, dtype=np.float64)]
    return np.vstack([bottom, top])


def mesh_faces() -> tuple[npt.NDArray[np.int_], npt.NDArray[np.int_], npt.NDArray[np.int_]]:
    """Returns the (i, j, k) index arrays of the 12 box triangles."""
    return (
        np.array(BOX_FACES_I, dtype=np.int_),
        np.array(BOX_FACES_J, dtype=np.int_),
        np.array(BOX_FACES_K, dtype=np.int_),
    )


def wireframe_edges(corners: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Traces the 12 box edges through the given corners.

    Disjoint runs are separated by a NaN row so the renderer does not join them.
    """
    corners = np.asarray(corners, dtype=np.float64).reshape(8, 3)
    path_break = np.full(3, np.nan)
    rows = [path_break if idx is None else corners[idx] for idx in BOX_EDGE_PATH]
    return np.vstack(rows)


def build_bar_geometry(
    point: DataPoint,
    width: float = BAR_WIDTH,
    depth: float = BAR_DEPTH
) -> BarGeometry:
    """Builds corners, faces and edge path for a single data point."""
    corners = corner_positions(point, width=width, depth=depth)
    return BarGeometry(
        corners=corners,
        faces=np.column_stack(mesh_faces()),
        edges=wireframe_edges(corners),
    )
