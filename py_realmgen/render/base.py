"""Drawing contract consumed by the map generator."""

from dataclasses import dataclass, field
from typing import Any, List, Protocol, Sequence, Tuple

from ..core.geometry import Edge, Point


class Renderer(Protocol):
    """One-way sink for draw calls; the generator never reads from it."""

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        ...

    def stroke_rect(self, x: float, y: float, width: float, height: float,
                    color: str, line_width: float) -> None:
        ...

    def fill_tile(self, polygon: Sequence[Point], color: str) -> None:
        """Fill a polygon and outline it in black."""
        ...

    def stroke_edges(self, edges: Sequence[Edge], color: str, line_width: float) -> None:
        ...


@dataclass
class RecordingRenderer:
    """Keeps every draw call as ``(operation, args)`` in call order."""
    commands: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)

    def fill_rect(self, x, y, width, height, color):
        self.commands.append(("fill_rect", (x, y, width, height, color)))

    def stroke_rect(self, x, y, width, height, color, line_width):
        self.commands.append(("stroke_rect", (x, y, width, height, color, line_width)))

    def fill_tile(self, polygon, color):
        self.commands.append(("fill_tile", (tuple(polygon), color)))

    def stroke_edges(self, edges, color, line_width):
        self.commands.append(("stroke_edges", (list(edges), color, line_width)))

    def calls(self, operation: str) -> List[Tuple[Any, ...]]:
        return [args for op, args in self.commands if op == operation]
