# garden_nav/io/route_events.py

from dataclasses import dataclass, field


# Analytics records for route requests (emitted through the Recorder)
@dataclass
class RouteEvent:
    run_id: str
    seq: int  # request sequence within the session
    name: str  # stable event name
    start: str
    goal: str


@dataclass
class RouteComputed(RouteEvent):
    cost: float
    raw_ids: list[str] = field(default_factory=list)
    ids: list[str] = field(default_factory=list)
    expanded: int = 0


@dataclass
class RouteUnreachable(RouteEvent):
    expanded: int = 0
