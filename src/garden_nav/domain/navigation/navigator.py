# garden_nav/domain/navigation/navigator.py
import math
import time
from dataclasses import dataclass, field

from garden_nav.app.protocols import PathSearch, PathSmoother, Terrain
from garden_nav.domain.entities.geography import NodeKind, Point, Point3
from garden_nav.domain.graph.errors import InvalidEndpointError, UnknownNodeError
from garden_nav.domain.graph.graph_builder import WaypointGraph
from garden_nav.domain.motion.flight import DEFAULT_DURATION, DEFAULT_SPEED, FlightPlan
from garden_nav.io.recorder import Recorder
from garden_nav.io.route_events import RouteComputed, RouteUnreachable
from garden_nav.nav.hooks import NavHooks, NoopHooks


def resolve_path(
    node_ids: list[str], graph: WaypointGraph, terrain: Terrain, eye_height: float = 0.0
) -> list[Point3]:
    """Lift node ids to world points: node (x, y) is world (X, Z), Y from the terrain."""
    out = []
    for nid in node_ids:
        n = graph.node(nid)
        out.append(Point3(n.x, terrain.height_at(n.x, n.y) + eye_height, n.y))
    return out


@dataclass
class Route:
    start: str
    goal: str
    ids: list[str] = field(default_factory=list)  # smoothed
    raw_ids: list[str] = field(default_factory=list)  # as searched
    cost: float = math.inf
    points: list[Point3] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.ids)


@dataclass
class FlightSettings:
    speed: float = DEFAULT_SPEED
    duration: float = DEFAULT_DURATION
    scale_by_length: bool = True


class Navigator:
    """
    Session-level façade: owns the read-only graph and answers move requests
    with smoothed, terrain-resolved routes.
    """

    def __init__(
        self,
        graph: WaypointGraph,
        search: PathSearch,
        smoother: PathSmoother,
        terrain: Terrain,
        *,
        eye_height: float = 0.0,
        flight: FlightSettings | None = None,
        require_key_endpoints: bool = True,
        hooks: NavHooks | None = None,
        recorder: Recorder | None = None,
        run_id: str = "local",
    ):
        self.graph, self.searcher, self.smoother, self.terrain = graph, search, smoother, terrain
        self.eye_height = eye_height
        self.flight_settings = flight or FlightSettings()
        self.require_key_endpoints = require_key_endpoints
        self.hooks = hooks or NoopHooks()
        self.recorder = recorder
        self.run_id = run_id
        self._seq = 0

    def _check_endpoint(self, node_id: str) -> None:
        if node_id not in self.graph:
            self.hooks.error(reason="unknown_node", node_id=node_id)
            raise UnknownNodeError(node_id)
        if self.require_key_endpoints and not self.graph.node(node_id).is_key:
            self.hooks.error(reason="waypoint_endpoint", node_id=node_id)
            raise InvalidEndpointError(f"{node_id!r} is a waypoint, not a key node")

    def route(self, start_id: str, goal_id: str) -> Route:
        """Smoothed route between two key nodes; an empty Route means no path."""
        self._check_endpoint(start_id)
        self._check_endpoint(goal_id)
        self._seq += 1

        self.hooks.search_start(start=start_id, goal=goal_id)
        t0 = time.perf_counter()
        res = self.searcher.search(self.graph, start_id, goal_id)
        self.hooks.search_end(
            start=start_id,
            goal=goal_id,
            found=res.found,
            expanded=res.expanded,
            cost=res.cost,
            hops=max(0, len(res.path) - 1),
            ms=(time.perf_counter() - t0) * 1000,
        )

        if not res.found:
            self.hooks.no_route(start=start_id, goal=goal_id, expanded=res.expanded)
            if self.recorder:
                self.recorder.emit(
                    RouteUnreachable(
                        self.run_id, self._seq, "RouteUnreachable", start_id, goal_id, res.expanded
                    )
                )
            return Route(start_id, goal_id)

        ids = self.smoother.smooth(res.path, self.graph)
        route = Route(
            start_id,
            goal_id,
            ids=ids,
            raw_ids=res.path,
            cost=res.cost,
            points=resolve_path(ids, self.graph, self.terrain, self.eye_height),
        )
        if self.recorder:
            self.recorder.emit(
                RouteComputed(
                    self.run_id,
                    self._seq,
                    "RouteComputed",
                    start_id,
                    goal_id,
                    cost=res.cost,
                    raw_ids=list(res.path),
                    ids=list(ids),
                    expanded=res.expanded,
                )
            )
        return route

    def plan(self, route: Route, t0: float = 0.0) -> FlightPlan:
        if not route:
            raise ValueError(f"no route from {route.start!r} to {route.goal!r}")
        fs = self.flight_settings
        return FlightPlan.from_points(
            route.points,
            t0,
            speed=fs.speed,
            duration=fs.duration,
            scale_by_length=fs.scale_by_length,
        )

    def flight(self, start_id: str, goal_id: str, t0: float = 0.0) -> FlightPlan | None:
        route = self.route(start_id, goal_id)
        return self.plan(route, t0) if route else None

    def snap(self, p: Point) -> str | None:
        """Nearest key node to a free ground position."""
        return self.graph.nearest_node(p, kind=NodeKind.KEY)
