# nav/hooks.py
from typing import Protocol


class NavHooks(Protocol):
    def graph_built(self, *, nodes, edges, isolated, ms): ...
    def search_start(self, *, start, goal): ...
    def search_end(self, *, start, goal, found, expanded, cost, hops, ms): ...
    def no_route(self, *, start, goal, expanded): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def graph_built(self, **_):
        pass

    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def no_route(self, **_):
        pass

    def error(self, **_):
        pass
