# main.py
import argparse
import json
import sys

from garden_nav.app.build import build
from garden_nav.domain.graph.errors import InvalidEndpointError, UnknownNodeError


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Route between two key nodes of a scene.")
    ap.add_argument("scenario", help="scenario JSON file")
    ap.add_argument("start")
    ap.add_argument("goal")
    ap.add_argument("--json", action="store_true", help="print ids, cost, points and duration")
    ap.add_argument("--quiet", action="store_true", help="disable structured logs")
    return ap.parse_args(argv)


def run(argv=None) -> int:
    args = parse_args(argv)
    with open(args.scenario, encoding="utf-8") as f:
        cfg = json.load(f)
    # stdout carries the route; logs go to stderr
    app = build(cfg, use_logging=not args.quiet, log_stream=sys.stderr)

    try:
        route = app.navigator.route(args.start, args.goal)
    except (UnknownNodeError, InvalidEndpointError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    if not route:
        print(f"no route from {args.start} to {args.goal}", file=sys.stderr)
        return 1

    if args.json:
        plan = app.navigator.plan(route)
        out = {
            "ids": route.ids,
            "raw_ids": route.raw_ids,
            "cost": route.cost,
            "points": [[p.x, p.y, p.z] for p in route.points],
            "duration": plan.duration,
        }
        print(json.dumps(out))
    else:
        print(" -> ".join(route.ids))
    return 0


if __name__ == "__main__":
    sys.exit(run())
