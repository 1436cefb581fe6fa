from garden_nav.app.protocols import PathSearch, PathSmoother
from garden_nav.domain.graph.graph_builder import WaypointGraph
from garden_nav.domain.graph.search import SearchResult, search
from garden_nav.domain.graph.smoothing import COLLINEAR_EPS, smooth_path


class AStarSearch(PathSearch):
    def search(self, graph: WaypointGraph, start_id: str, goal_id: str) -> SearchResult:
        return search(graph, start_id, goal_id)


class CollinearSmoother(PathSmoother):
    def __init__(self, eps: float = COLLINEAR_EPS):
        self.eps = eps

    def smooth(self, node_ids, graph):
        return smooth_path(node_ids, graph, self.eps)


class NoSmoother(PathSmoother):
    def smooth(self, node_ids, graph):
        return list(node_ids)
