# io/nav_logging.py
import json
import logging
import sys

from garden_nav.nav.hooks import NoopHooks


def _default_json_logger(name="garden_nav", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    elif stream is not None:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler):
                h.setStream(stream)
    logger.setLevel(level)
    return logger


class NavLogging(NoopHooks):
    """
    Structured JSON logs for graph construction and route searches.
    Per-search traces are DEBUG and only emitted with ``debug=True``.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        stream=None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level, stream=stream)
        self.searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def graph_built(self, *, nodes, edges, isolated, ms):
        self._emit("INFO", "graph_built", nodes=nodes, edges=edges, isolated=len(isolated), ms=ms)
        if isolated:
            self._emit("WARNING", "isolated_nodes", ids=list(isolated))

    def search_start(self, *, start, goal):
        self.searches += 1
        if self.debug:
            self._emit("DEBUG", "search_start", start=start, goal=goal, n=self.searches)

    def search_end(self, *, start, goal, found, expanded, cost, hops, ms):
        if self.debug:
            self._emit(
                "DEBUG",
                "search_end",
                start=start,
                goal=goal,
                found=found,
                expanded=expanded,
                cost=cost if found else None,
                hops=hops,
                ms=ms,
            )

    def no_route(self, *, start, goal, expanded):
        self._emit("WARNING", "no_route", start=start, goal=goal, expanded=expanded)

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "nav_error", reason=reason, **kw)
