# io/recorder.py
import json
import logging
import math
import sys
from collections import deque
from dataclasses import asdict
from typing import Protocol

from garden_nav.io.route_events import RouteEvent

log = logging.getLogger("garden_nav.recorder")


class Sink(Protocol):
    def write(self, ev: RouteEvent) -> None: ...


def route_record(ev: RouteEvent) -> dict:
    """Plain dict for a route event; non-finite costs become None."""
    rec = asdict(ev)
    cost = rec.get("cost")
    if isinstance(cost, float) and not math.isfinite(cost):
        rec["cost"] = None
    return rec


class JsonlSink:
    """One strict-JSON line per route event."""

    def __init__(self, fp=None):
        self.fp = fp or sys.stdout

    def write(self, ev: RouteEvent) -> None:
        self.fp.write(json.dumps(route_record(ev), allow_nan=False) + "\n")


class MemorySink:
    """Keeps the most recent ``maxlen`` route events."""

    def __init__(self, maxlen: int | None = 1000):
        self.events: deque[RouteEvent] = deque(maxlen=maxlen)

    def write(self, ev: RouteEvent) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list[RouteEvent]:
        return [ev for ev in self.events if ev.name == name]


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (MemorySink(),)
        self.emitted = 0

    def emit(self, ev: RouteEvent):
        self.emitted += 1
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # never break navigation over analytics
                log.exception("sink %s failed on %s", type(s).__name__, ev.name)
