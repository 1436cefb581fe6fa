import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    KEY = "key"  # destination, valid search endpoint
    WAYPOINT = "waypoint"  # path-shaping only


# Core geometry types used by the graph
@dataclass(frozen=True)
class Point:
    x: float  # world X
    y: float  # world Z, projected onto the ground plane


@dataclass(frozen=True)
class Point3:
    x: float
    y: float  # up
    z: float


@dataclass(frozen=True)
class Node:
    id: str
    x: float
    y: float
    kind: NodeKind = NodeKind.KEY

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_key(self) -> bool:
        return self.kind is NodeKind.KEY

    @classmethod
    def from_record(cls, rec: Mapping) -> "Node":
        x, y = float(rec["x"]), float(rec["y"])
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"node {rec['id']!r} has non-finite coordinates")
        return cls(str(rec["id"]), x, y, NodeKind(rec.get("kind", NodeKind.KEY)))


@dataclass(frozen=True)
class Edge:
    to: str
    weight: float  # euclidean length at build time


def dist2(a, b) -> float:
    dx, dy = a.x - b.x, a.y - b.y
    return dx * dx + dy * dy


def distance(a, b) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)
