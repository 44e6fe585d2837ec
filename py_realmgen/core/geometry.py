"""Planar geometry helpers shared by the tessellator and the partitioning passes."""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial import ConvexHull, QhullError

Point = Tuple[float, float]
Tile = Tuple[Point, ...]
Edge = Tuple[Point, Point]


class BBox(NamedTuple):
    """Axis-aligned bounding rectangle."""
    x0: float
    y0: float
    width: float
    height: float

    @property
    def x1(self) -> float:
        return self.x0 + self.width

    @property
    def y1(self) -> float:
        return self.y0 + self.height

    @property
    def center(self) -> Point:
        return (self.x0 + self.width / 2, self.y0 + self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height


def tile_edges(tile: Sequence[Point]) -> Iterable[Edge]:
    """Yield the directed edges (a, b) of a closed polygon."""
    n = len(tile)
    for i in range(n):
        yield tile[i], tile[(i + 1) % n]


def polygon_area(vertices: Sequence[Point]) -> float:
    """Signed shoelace area; positive for counter-clockwise winding."""
    area = 0.0
    for (ax, ay), (bx, by) in tile_edges(vertices):
        area += ax * by - bx * ay
    return area / 2


def polygon_centroid(vertices: Sequence[Point]) -> Point:
    """Compute the area-weighted centroid of a polygon.

    Degenerate polygons (fewer than 3 vertices or zero area) fall back to
    the vertex mean.
    """
    if len(vertices) < 3:
        mean = np.mean(np.asarray(vertices, dtype=float), axis=0)
        return (float(mean[0]), float(mean[1]))

    area = 0.0
    cx = 0.0
    cy = 0.0
    for (ax, ay), (bx, by) in tile_edges(vertices):
        a = ax * by - bx * ay
        area += a
        cx += (ax + bx) * a
        cy += (ay + by) * a

    if abs(area) < 1e-10:
        mean = np.mean(np.asarray(vertices, dtype=float), axis=0)
        return (float(mean[0]), float(mean[1]))

    area *= 0.5
    return (cx / (6.0 * area), cy / (6.0 * area))


def convex_hull(points: Sequence[Point]) -> Optional[List[Point]]:
    """Counter-clockwise convex hull of a point cloud.

    Returns None when the cloud is degenerate (fewer than 3 distinct points
    or all collinear).
    """
    unique = np.unique(np.asarray(points, dtype=float).reshape(-1, 2), axis=0)
    if len(unique) < 3:
        return None
    try:
        hull = ConvexHull(unique)
    except QhullError:
        return None
    # scipy returns 2D hull vertices in counter-clockwise order
    return [(float(unique[i][0]), float(unique[i][1])) for i in hull.vertices]


def polygon_contains(polygon: Sequence[Point], point: Point) -> bool:
    """Even-odd ray casting point-in-polygon test."""
    x, y = point
    inside = False
    n = len(polygon)
    px, py = polygon[n - 1]
    for i in range(n):
        qx, qy = polygon[i]
        if (qy > y) != (py > y) and x < (px - qx) * (y - qy) / (py - qy) + qx:
            inside = not inside
        px, py = qx, qy
    return inside


def squared_distance(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def points_bounds(points: Sequence[Point]) -> BBox:
    """Bounding box of a non-empty point sequence."""
    arr = np.asarray(points, dtype=float).reshape(-1, 2)
    x0, y0 = arr.min(axis=0)
    x1, y1 = arr.max(axis=0)
    return BBox(float(x0), float(y0), float(x1 - x0), float(y1 - y0))
