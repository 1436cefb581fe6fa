# garden_nav/domain/graph/smoothing.py
import math

from garden_nav.domain.graph.graph_builder import WaypointGraph

COLLINEAR_EPS = 0.01


def almost_collinear(a, b, c, eps: float = COLLINEAR_EPS) -> bool:
    abx, aby = b.x - a.x, b.y - a.y
    bcx, bcy = c.x - b.x, c.y - b.y
    cross = abs(abx * bcy - aby * bcx)
    la, lb = math.hypot(abx, aby), math.hypot(bcx, bcy)
    return cross / max(la + lb, 1e-6) < eps


def smooth_path(node_ids: list[str], graph: WaypointGraph, eps: float = COLLINEAR_EPS) -> list[str]:
    """
    Drop interior points that are almost collinear with their neighbors.

    One left-to-right pass; each point is tested against its original
    predecessor and successor, not against what was kept.
    """
    if len(node_ids) <= 2:
        return list(node_ids)
    pts = [graph.node(nid) for nid in node_ids]
    keep = [pts[0]]
    for prev, cur, nxt in zip(pts, pts[1:], pts[2:]):
        if not almost_collinear(prev, cur, nxt, eps):
            keep.append(cur)
    keep.append(pts[-1])
    return [p.id for p in keep]
