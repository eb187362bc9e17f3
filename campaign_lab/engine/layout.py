"""Fan layout for newly created children."""

from dataclasses import dataclass

from ..models import GraphNode


@dataclass(frozen=True)
class FanLayout:
    """Places children in a column to the right of the parent.

    Child i sits at (parent.x + dx, parent.y + (i - centering) * spacing), so
    `centering` picks which index lines up with the parent's y.
    """
    dx: float = 400
    spacing: float = 250
    centering: float = 1

    def position(self, parent: GraphNode, index: int) -> tuple[float, float]:
        return (
            parent.x + self.dx,
            parent.y + (index - self.centering) * self.spacing,
        )
