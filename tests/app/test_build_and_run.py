# tests/app/test_build_and_run.py
import json
import logging
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

import main
from garden_nav.app.build import build
from garden_nav.config.models import ScenarioModel
from garden_nav.domain.navigation.strategies import NoSmoother
from garden_nav.io.route_events import RouteComputed
from garden_nav.runtime.registries import make_search, make_smoother, make_terrain

CAFE = [
    {"id": "A", "x": 0.0, "y": 0.0, "kind": "key"},
    {"id": "B", "x": 3.0, "y": 0.0, "kind": "waypoint"},
    {"id": "C", "x": 6.0, "y": 0.0, "kind": "key"},
    {"id": "D", "x": 3.0, "y": 4.0, "kind": "waypoint"},
    {"id": "E", "x": 100.0, "y": 100.0, "kind": "key"},
]


def _cfg(**over):
    cfg = {
        "name": "cafe",
        "run_id": "t-1",
        "scene": {"nodes": CAFE},
        "graph": {"neighbor_radius": 5, "max_neighbors": 4},
    }
    cfg.update(over)
    return cfg


def test_build_and_route():
    app = build(_cfg(), use_logging=False)
    assert len(app.graph) == 5 and app.graph.isolated() == ["E"]
    route = app.navigator.route("A", "C")
    assert route.ids == ["A", "C"] and route.cost == pytest.approx(6.0)
    # default flight eye height
    assert route.points[0].y == pytest.approx(1.5)
    assert isinstance(app.recorder.sinks[0].events[0], RouteComputed)
    assert app.recorder.sinks[0].events.maxlen == 1000


def test_build_from_nodes_file(tmp_path):
    f = tmp_path / "scene.json"
    f.write_text(json.dumps({"nodes": CAFE}))
    app = build(_cfg(scene={"nodes_file": str(f)}), use_logging=False)
    assert app.navigator.route("A", "C").raw_ids == ["A", "B", "C"]


def test_build_with_heightmap_terrain_and_no_smoothing():
    cfg = _cfg(
        terrain={"kind": "heightmap", "data": [[0.5]], "ground_width": 100.0, "scale": 2.0},
        smoother={"kind": "none"},
        flight={"eye_height": 0.0},
    )
    app = build(cfg, use_logging=False)
    assert isinstance(app.navigator.smoother, NoSmoother)
    route = app.navigator.route("A", "C")
    assert route.ids == ["A", "B", "C"]
    assert [p.y for p in route.points] == pytest.approx([1.0, 1.0, 1.0])


def test_build_with_logging_emits_structured_records(caplog):
    with caplog.at_level(logging.INFO, logger="garden_nav"):
        app = build(_cfg(run_id="logged"))
        app.navigator.route("A", "E")
    ours = [r for r in caplog.records if getattr(r, "extra", {}).get("run_id") == "logged"]
    msgs = {r.getMessage() for r in ours}
    assert {"graph_built", "isolated_nodes", "no_route"} <= msgs


# ---------- Config validation


def test_defaults():
    m = ScenarioModel.model_validate({"name": "x", "scene": {"nodes": []}})
    assert m.graph.neighbor_radius == 20.0 and m.graph.max_neighbors == 8
    assert m.smoother.kind == "collinear" and m.smoother.eps == 0.01
    assert m.search.kind == "astar" and m.terrain.kind == "flat"
    assert m.require_key_endpoints is True


@pytest.mark.parametrize(
    "bad",
    [
        {"scene": {"nodes": CAFE + [{"id": "A", "x": 1, "y": 1}]}},
        {"scene": {}},
        {"scene": {"nodes": CAFE, "nodes_file": "scene.json"}},
        {"graph": {"neighbor_radius": 0}},
        {"graph": {"max_neighbors": -1}},
        {"smoother": {"kind": "spline"}},
        {"terrain": {"kind": "heightmap", "ground_width": 10}},
        {"scene": {"nodes": [{"id": "A", "x": float("nan"), "y": 0}]}},
        {"scene": {"nodes": [{"id": "A", "x": 0, "y": 0, "kind": "door"}]}},
        {"colour": "blue"},
    ],
)
def test_invalid_configs_rejected(bad):
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate(_cfg(**bad))


def test_nodes_file_expands_user(monkeypatch):
    monkeypatch.setenv("HOME", "/home/tester")
    m = ScenarioModel.model_validate(_cfg(scene={"nodes_file": "~/scene.json"}))
    assert m.scene.nodes_file == "/home/tester/scene.json"


def test_unknown_registry_kind():
    bogus = SimpleNamespace(kind="bogus")
    for make in (make_search, make_smoother, make_terrain):
        with pytest.raises(ValueError, match="bogus"):
            make(bogus)


# ---------- CLI


@pytest.fixture
def scenario_file(tmp_path):
    f = tmp_path / "scenario.json"
    f.write_text(json.dumps(_cfg()))
    return str(f)


def test_cli_json(scenario_file, capsys):
    assert main.run([scenario_file, "A", "C", "--json", "--quiet"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["ids"] == ["A", "C"] and out["raw_ids"] == ["A", "B", "C"]
    assert out["cost"] == pytest.approx(6.0)
    assert out["points"] == [[0.0, 1.5, 0.0], [6.0, 1.5, 0.0]]
    assert out["duration"] == pytest.approx(0.5)  # 6 units at 12/s


def test_cli_plain_and_failures(scenario_file, capsys):
    assert main.run([scenario_file, "A", "C", "--quiet"]) == 0
    assert capsys.readouterr().out.strip() == "A -> C"
    assert main.run([scenario_file, "A", "E", "--quiet"]) == 1
    assert main.run([scenario_file, "A", "nope", "--quiet"]) == 2
    assert main.run([scenario_file, "A", "B", "--quiet"]) == 2


def test_cli_json_stays_parseable_with_logging(scenario_file, capsys, monkeypatch):
    monkeypatch.setattr(logging.getLogger("garden_nav"), "handlers", [])
    assert main.run([scenario_file, "A", "C", "--json"]) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out)["ids"] == ["A", "C"]
    logged = [json.loads(x)["msg"] for x in captured.err.splitlines() if x.startswith("{")]
    assert "graph_built" in logged
