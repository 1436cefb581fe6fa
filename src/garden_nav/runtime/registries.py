# runtime/registries.py
from collections.abc import Callable
from typing import Any

from garden_nav.app.protocols import PathSearch, PathSmoother, Terrain
from garden_nav.config.models import (
    SearchAStarModel,
    SearchUnion,
    SmootherCollinearModel,
    SmootherNoneModel,
    SmootherUnion,
    TerrainFlatModel,
    TerrainHeightmapModel,
    TerrainUnion,
)
from garden_nav.domain.navigation.strategies import AStarSearch, CollinearSmoother, NoSmoother
from garden_nav.domain.terrain.terrain import FlatTerrain, HeightmapTerrain
from garden_nav.runtime.resources import load_heightmap

SearchFactory = Callable[[SearchUnion, dict], PathSearch]
SmootherFactory = Callable[[SmootherUnion, dict], PathSmoother]
TerrainFactory = Callable[[TerrainUnion, dict], Terrain]

_search_registry: dict[str, SearchFactory] = {}
_smoother_registry: dict[str, SmootherFactory] = {}
_terrain_registry: dict[str, TerrainFactory] = {}


def _lookup(registry: dict[str, Any], what: str, kind: str):
    try:
        return registry[kind]
    except KeyError:
        raise ValueError(f"Unknown {what} kind {kind!r}") from None


# ------------------- Search ---------------------------


def register_search(kind: str):
    def deco(fn: SearchFactory):
        _search_registry[kind] = fn
        return fn

    return deco


def make_search(cfg: SearchUnion, *, deps: dict | None = None) -> PathSearch:
    return _lookup(_search_registry, "search", cfg.kind)(cfg, deps or {})


@register_search("astar")
def _make_astar(cfg: SearchAStarModel, deps):
    return AStarSearch()


# ------------------- Smoothers ---------------------------


def register_smoother(kind: str):
    def deco(fn: SmootherFactory):
        _smoother_registry[kind] = fn
        return fn

    return deco


def make_smoother(cfg: SmootherUnion, *, deps: dict | None = None) -> PathSmoother:
    return _lookup(_smoother_registry, "smoother", cfg.kind)(cfg, deps or {})


@register_smoother("collinear")
def _make_collinear(cfg: SmootherCollinearModel, deps):
    return CollinearSmoother(cfg.eps)


@register_smoother("none")
def _make_no_smoother(cfg: SmootherNoneModel, deps):
    return NoSmoother()


# ------------------- Terrain ---------------------------


def register_terrain(kind: str):
    def deco(fn: TerrainFactory):
        _terrain_registry[kind] = fn
        return fn

    return deco


def make_terrain(cfg: TerrainUnion, *, deps: dict | None = None) -> Terrain:
    return _lookup(_terrain_registry, "terrain", cfg.kind)(cfg, deps or {})


@register_terrain("flat")
def _make_flat(cfg: TerrainFlatModel, deps):
    return FlatTerrain(cfg.height)


@register_terrain("heightmap")
def _make_heightmap(cfg: TerrainHeightmapModel, deps):
    data = load_heightmap(cfg.file) if cfg.file is not None else cfg.data
    return HeightmapTerrain(
        data,
        ground_width=cfg.ground_width,
        repeat=cfg.repeat,
        scale=cfg.scale,
        offset=cfg.offset,
    )
