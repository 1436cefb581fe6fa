# garden_nav/app/build.py
import time
from collections.abc import Mapping
from dataclasses import dataclass

from garden_nav.config.models import ScenarioModel
from garden_nav.domain.entities.geography import Node
from garden_nav.domain.graph.graph_builder import WaypointGraph, build_graph
from garden_nav.domain.navigation.navigator import FlightSettings, Navigator
from garden_nav.io.nav_logging import NavLogging  # JSON logs
from garden_nav.io.recorder import Recorder, Sink
from garden_nav.nav.hooks import NavHooks, NoopHooks
from garden_nav.runtime.registries import make_search, make_smoother, make_terrain
from garden_nav.runtime.resources import load_scene_nodes


@dataclass
class App:
    config: ScenarioModel
    graph: WaypointGraph
    navigator: Navigator
    hooks: NavHooks
    recorder: Recorder


def load_nodes(model: ScenarioModel) -> list[Node]:
    if model.scene.nodes is not None:
        return [Node(n.id, n.x, n.y, n.kind) for n in model.scene.nodes]
    return list(load_scene_nodes(model.scene.nodes_file))


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    log_stream=None,
    sinks: tuple[Sink, ...] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks & recorder
    hooks = (
        NavLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            stream=log_stream,
        )
        if use_logging
        else NoopHooks()
    )
    recorder = Recorder(*(sinks or ()))  # bounded in-memory sink by default

    # 2) Graph, built once for the session
    t0 = time.perf_counter()
    graph = build_graph(
        load_nodes(model),
        neighbor_radius=model.graph.neighbor_radius,
        max_neighbors=model.graph.max_neighbors,
    )
    hooks.graph_built(
        nodes=len(graph),
        edges=graph.edge_count,
        isolated=graph.isolated(),
        ms=(time.perf_counter() - t0) * 1000,
    )

    # 3) Components
    navigator = Navigator(
        graph,
        make_search(model.search),
        make_smoother(model.smoother),
        make_terrain(model.terrain),
        eye_height=model.flight.eye_height,
        flight=FlightSettings(
            speed=model.flight.speed,
            duration=model.flight.duration,
            scale_by_length=model.flight.scale_by_length,
        ),
        require_key_endpoints=model.require_key_endpoints,
        hooks=hooks,
        recorder=recorder,
        run_id=model.run_id,
    )
    return App(model, graph, navigator, hooks, recorder)
