from typing import Protocol, runtime_checkable

from garden_nav.domain.graph.graph_builder import WaypointGraph
from garden_nav.domain.graph.search import SearchResult


@runtime_checkable
class PathSearch(Protocol):
    """
    Responsibilities:
      • Find a least-cost node sequence between two graph nodes.
      • Report "no route" as an empty path, never as an exception.
    """

    def search(self, graph: WaypointGraph, start_id: str, goal_id: str) -> SearchResult: ...


@runtime_checkable
class PathSmoother(Protocol):
    """Post-process a raw node sequence. Keeps order and endpoints, never invents nodes."""

    def smooth(self, node_ids: list[str], graph: WaypointGraph) -> list[str]: ...


@runtime_checkable
class Terrain(Protocol):
    """Ground height at world (x, z). Y is up."""

    def height_at(self, x: float, z: float) -> float: ...
