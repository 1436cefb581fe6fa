# garden_nav/domain/graph/spatial_index.py
import math
from collections.abc import Iterable, Iterator

from garden_nav.domain.entities.geography import Node

Cell = tuple[int, int]

# own cell first, then the 8 around it; candidate order depends on this
NEIGHBOR_CELLS: tuple[Cell, ...] = (
    (0, 0),
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)


class SpatialIndex:
    """
    Uniform grid bucketing of nodes.

    A neighbor query inspects the 3x3 block of cells around the query position,
    so with ``cell == radius`` every node within ``radius`` is a candidate.
    Candidates are NOT filtered by distance; callers check exact distance.
    """

    def __init__(self, cell: float, nodes: Iterable[Node] = ()):
        if not cell > 0:
            raise ValueError(f"cell size must be > 0, got {cell!r}")
        self.cell = float(cell)
        self._buckets: dict[Cell, list[Node]] = {}
        self._size = 0
        for n in nodes:
            self.insert(n)

    def __len__(self) -> int:
        return self._size

    def cell_of(self, x: float, y: float) -> Cell:
        return (math.floor(x / self.cell), math.floor(y / self.cell))

    def insert(self, node: Node) -> None:
        self._buckets.setdefault(self.cell_of(node.x, node.y), []).append(node)
        self._size += 1

    def near(self, x: float, y: float) -> Iterator[Node]:
        cx, cy = self.cell_of(x, y)
        for dx, dy in NEIGHBOR_CELLS:
            yield from self._buckets.get((cx + dx, cy + dy), ())

    def neighbors(self, node: Node) -> list[Node]:
        """All nodes in the 3x3 block around ``node``'s cell, itself included."""
        return list(self.near(node.x, node.y))
