# garden_nav/domain/graph/search.py
import heapq
import math
from dataclasses import dataclass, field

from garden_nav.domain.entities.geography import distance
from garden_nav.domain.graph.graph_builder import WaypointGraph


@dataclass
class SearchResult:
    path: list[str] = field(default_factory=list)  # empty => unreachable
    cost: float = math.inf
    expanded: int = 0

    @property
    def found(self) -> bool:
        return bool(self.path)


def _reconstruct(came_from: dict[str, str], current: str) -> list[str]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def search(graph: WaypointGraph, start_id: str, goal_id: str) -> SearchResult:
    """
    A* over the out-edges of ``graph`` with a straight-line heuristic.

    Raises UnknownNodeError if either endpoint is missing. An unreachable goal
    is not an error: the result has an empty path.
    """
    start = graph.node(start_id)
    goal = graph.node(goal_id)

    def h(node_id: str) -> float:
        return distance(graph.node(node_id), goal)

    g: dict[str, float] = {start_id: 0.0}
    came_from: dict[str, str] = {}
    # (f, seq, id, g at push); seq breaks f ties by insertion order
    seq = 0
    open_heap: list[tuple[float, int, str, float]] = [(distance(start, goal), seq, start_id, 0.0)]
    expanded = 0

    while open_heap:
        _, _, current, g_cur = heapq.heappop(open_heap)
        if g_cur > g[current]:
            continue  # stale entry, a cheaper one was pushed later
        if current == goal_id:
            return SearchResult(_reconstruct(came_from, current), g_cur, expanded)
        expanded += 1
        for e in graph.edges(current):
            tentative = g_cur + e.weight
            if tentative < g.get(e.to, math.inf):
                came_from[e.to] = current
                g[e.to] = tentative
                seq += 1
                heapq.heappush(open_heap, (tentative + h(e.to), seq, e.to, tentative))

    return SearchResult(expanded=expanded)


def a_star(graph: WaypointGraph, start_id: str, goal_id: str) -> list[str]:
    return search(graph, start_id, goal_id).path
