# garden_nav/domain/graph/graph_builder.py
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from garden_nav.domain.entities.geography import Edge, Node, NodeKind, Point, dist2
from garden_nav.domain.graph.errors import UnknownNodeError
from garden_nav.domain.graph.spatial_index import SpatialIndex

DEFAULT_NEIGHBOR_RADIUS = 20.0
DEFAULT_MAX_NEIGHBORS = 8


@dataclass(frozen=True)
class Adjacency:
    node: Node
    edges: tuple[Edge, ...]  # ascending by weight


class WaypointGraph(Mapping[str, Adjacency]):
    """
    Proximity graph over scene nodes. Built once, read-only afterwards.

    Out-edges are truncated per node, so the effective graph may be directed:
    ``a -> b`` can exist without ``b -> a``.
    """

    def __init__(
        self,
        adjacency: dict[str, Adjacency],
        *,
        neighbor_radius: float,
        max_neighbors: int,
        index: SpatialIndex,
    ):
        self._adj = adjacency
        self.neighbor_radius = neighbor_radius
        self.max_neighbors = max_neighbors
        self._index = index

    # ---------- Mapping -----------------------------

    def __getitem__(self, node_id: str) -> Adjacency:
        try:
            return self._adj[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._adj)

    def __len__(self) -> int:
        return len(self._adj)

    # ---------- Lookups -----------------------------

    def node(self, node_id: str) -> Node:
        return self[node_id].node

    def edges(self, node_id: str) -> tuple[Edge, ...]:
        return self[node_id].edges

    def node_point(self, node_id: str) -> Point:
        return self[node_id].node.point

    def key_nodes(self) -> list[Node]:
        return [a.node for a in self._adj.values() if a.node.kind is NodeKind.KEY]

    @property
    def edge_count(self) -> int:
        return sum(len(a.edges) for a in self._adj.values())

    def isolated(self) -> list[str]:
        return [nid for nid, a in self._adj.items() if not a.edges]

    def nearest_node(self, p: Point, kind: NodeKind | None = None) -> str | None:
        """Closest node to a free position, optionally restricted to one kind."""

        def ok(n: Node) -> bool:
            return kind is None or n.kind is kind

        best, best_d2 = None, math.inf
        for n in self._index.near(p.x, p.y):
            d2 = dist2(n, p)
            if ok(n) and d2 < best_d2:
                best, best_d2 = n, d2
        # anything within the radius sits in the 3x3 block, so this is exact
        if best is not None and best_d2 <= self.neighbor_radius**2:
            return best.id
        for a in self._adj.values():
            d2 = dist2(a.node, p)
            if ok(a.node) and d2 < best_d2:
                best, best_d2 = a.node, d2
        return None if best is None else best.id

    def iter_edges(self, node_ids: list[str]) -> Iterator[tuple[str, str, Edge]]:
        """Yield (u, v, edge) for consecutive hops of a path."""
        for u, v in zip(node_ids, node_ids[1:]):
            for e in self[u].edges:
                if e.to == v:
                    yield u, v, e
                    break
            else:
                if v not in self._adj:
                    raise UnknownNodeError(v)
                raise ValueError(f"no edge {u!r} -> {v!r}")

    def path_cost(self, node_ids: list[str]) -> float:
        return sum(e.weight for _, _, e in self.iter_edges(node_ids))


def build_graph(
    nodes: Iterable[Node],
    neighbor_radius: float = DEFAULT_NEIGHBOR_RADIUS,
    max_neighbors: int = DEFAULT_MAX_NEIGHBORS,
) -> WaypointGraph:
    """
    Connect every node to its nearest neighbors within ``neighbor_radius``.

    Each node keeps at most ``max_neighbors`` out-edges, nearest first; edge
    weight is the euclidean distance. Nodes with nothing in range stay isolated.
    """
    if not neighbor_radius > 0:
        raise ValueError(f"neighbor_radius must be > 0, got {neighbor_radius!r}")
    if max_neighbors < 0:
        raise ValueError(f"max_neighbors must be >= 0, got {max_neighbors!r}")

    nodes = list(nodes)
    seen: set[str] = set()
    for n in nodes:
        if n.id in seen:
            raise ValueError(f"duplicate node id {n.id!r}")
        if not (math.isfinite(n.x) and math.isfinite(n.y)):
            raise ValueError(f"node {n.id!r} has non-finite coordinates")
        seen.add(n.id)

    radius2 = neighbor_radius * neighbor_radius
    index = SpatialIndex(neighbor_radius, nodes)

    adjacency: dict[str, Adjacency] = {}
    for n in nodes:
        candidates = []
        for m in index.neighbors(n):
            if m.id == n.id:
                continue
            d2 = dist2(n, m)
            if d2 <= radius2:
                candidates.append((d2, m))
        # stable sort: equal distances keep cell scan order
        candidates.sort(key=lambda c: c[0])
        edges = tuple(Edge(m.id, math.sqrt(d2)) for d2, m in candidates[:max_neighbors])
        adjacency[n.id] = Adjacency(n, edges)

    return WaypointGraph(
        adjacency, neighbor_radius=neighbor_radius, max_neighbors=max_neighbors, index=index
    )
