"""PNG output through matplotlib's Agg backend."""

from pathlib import Path
from typing import Sequence, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Polygon, Rectangle

from ..core.geometry import Edge, Point


class MatplotlibRenderer:
    """
    Draws onto a figure whose data coordinates match canvas pixels.

    The y axis is inverted so that the origin sits at the top-left corner,
    like a canvas.

    Args:
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        dpi: Output resolution
    """

    def __init__(self, canvas_width: float, canvas_height: float, dpi: int = 100):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.figure = plt.figure(figsize=(canvas_width / dpi, canvas_height / dpi), dpi=dpi)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_xlim(0, canvas_width)
        self.ax.set_ylim(canvas_height, 0)
        self.ax.set_aspect("equal")
        self.ax.axis("off")
        self._z = 0

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.ax.add_patch(Rectangle((x, y), width, height, facecolor=color,
                                    edgecolor="none", zorder=self._next_z()))

    def stroke_rect(self, x: float, y: float, width: float, height: float,
                    color: str, line_width: float) -> None:
        self.ax.add_patch(Rectangle((x, y), width, height, facecolor="none",
                                    edgecolor=color, linewidth=line_width,
                                    zorder=self._next_z()))

    def fill_tile(self, polygon: Sequence[Point], color: str) -> None:
        self.ax.add_patch(Polygon(list(polygon), closed=True, facecolor=color,
                                  edgecolor="#000", linewidth=0.5,
                                  zorder=self._next_z()))

    def stroke_edges(self, edges: Sequence[Edge], color: str, line_width: float) -> None:
        if not edges:
            return
        self.ax.add_collection(LineCollection([list(e) for e in edges], colors=color,
                                              linewidths=line_width, zorder=self._next_z()))

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(path, dpi=self.figure.dpi)
        return path

    def close(self) -> None:
        plt.close(self.figure)
