# garden_nav/domain/motion/flight.py
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from garden_nav.domain.entities.geography import Point3

DEFAULT_SPEED = 12.0  # world units per second
DEFAULT_DURATION = 6.0


def _length(a: Point3, b: Point3) -> float:
    return math.dist((a.x, a.y, a.z), (b.x, b.y, b.z))


def flight_duration(
    length: float,
    *,
    speed: float = DEFAULT_SPEED,
    duration: float = DEFAULT_DURATION,
    scale_by_length: bool = True,
) -> float:
    if not scale_by_length:
        return duration
    return max(0.1, length / max(0.001, speed))


@dataclass
class Leg:
    start: Point3
    end: Point3
    start_t: float
    end_t: float
    length: float

    def frac(self, t: float) -> float:
        if t <= self.start_t:
            return 0.0
        if t >= self.end_t:
            return 1.0
        return (t - self.start_t) / (self.end_t - self.start_t)

    def pos(self, t: float) -> Point3:
        f = self.frac(t)
        return Point3(
            self.start.x + f * (self.end.x - self.start.x),
            self.start.y + f * (self.end.y - self.start.y),
            self.start.z + f * (self.end.z - self.start.z),
        )


@dataclass
class FlightPlan:
    """Constant-speed polyline flight through resolved path points."""

    points: list[Point3]
    legs: list[Leg]
    total_length: float
    start_t: float
    end_t: float

    @property
    def duration(self) -> float:
        return self.end_t - self.start_t

    @classmethod
    def from_points(
        cls,
        points: Iterable[Point3],
        t0: float = 0.0,
        *,
        speed: float = DEFAULT_SPEED,
        duration: float = DEFAULT_DURATION,
        scale_by_length: bool = True,
    ) -> "FlightPlan":
        pts = list(points)
        if not pts:
            raise ValueError("flight plan needs at least one point")
        lengths = [_length(a, b) for a, b in zip(pts, pts[1:])]
        total = sum(lengths)
        span = flight_duration(
            total, speed=speed, duration=duration, scale_by_length=scale_by_length
        )
        legs, t, walked = [], t0, 0.0
        for i, ((a, b), L) in enumerate(zip(zip(pts, pts[1:]), lengths)):
            walked += L
            # zero-length paths split time evenly across legs
            share = walked / total if total > 0 else (i + 1) / len(lengths)
            end_t = t0 + span * share
            legs.append(Leg(a, b, t, end_t, L))
            t = end_t
        return cls(pts, legs, total, t0, t0 + span)

    def pos(self, t: float) -> Point3:
        if not self.legs or t <= self.start_t:
            return self.points[0]
        if t >= self.end_t:
            return self.points[-1]
        for leg in self.legs:
            if t <= leg.end_t:
                return leg.pos(t)
        return self.points[-1]

    def checkpoints(self, step: float = 1.0) -> Iterator[tuple[float, Point3]]:
        """Yield (t, position) roughly every ``step`` world units, ending on arrival."""
        if step <= 0:
            raise ValueError("step must be > 0")
        for leg in self.legs:
            steps = max(1, math.ceil(leg.length / step))
            for k in range(1, steps + 1):
                t = leg.start_t + (leg.end_t - leg.start_t) * k / steps
                yield t, leg.pos(t)
