class UnknownNodeError(KeyError):
    """Lookup of a node id the graph does not contain (malformed scene data)."""

    def __init__(self, node_id):
        super().__init__(node_id)
        self.node_id = node_id

    def __str__(self) -> str:
        return f"unknown node id {self.node_id!r}"


class InvalidEndpointError(ValueError):
    """A route was requested to or from a node that is not a key node."""
