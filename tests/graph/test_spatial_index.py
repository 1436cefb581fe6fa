# tests/graph/test_spatial_index.py
import pytest

from garden_nav.domain.entities.geography import Node
from garden_nav.domain.graph.spatial_index import SpatialIndex


def test_cells_use_floor_division():
    idx = SpatialIndex(5.0)
    assert idx.cell_of(0.0, 0.0) == (0, 0)
    assert idx.cell_of(5.0, 4.999) == (1, 0)  # boundary goes to the upper cell
    assert idx.cell_of(-0.1, -5.0) == (-1, -1)


def test_neighbors_cover_3x3_block_only():
    idx = SpatialIndex(
        5.0,
        [
            Node("self", 1.0, 1.0),
            Node("east", 9.9, 1.0),  # cell (1, 0)
            Node("diag", -4.0, -4.0),  # cell (-1, -1)
            Node("far", 10.0, 1.0),  # cell (2, 0)
        ],
    )
    got = {n.id for n in idx.neighbors(Node("q", 1.0, 1.0))}
    assert got == {"self", "east", "diag"}
    assert len(idx) == 4


def test_neighbors_are_not_distance_filtered():
    idx = SpatialIndex(5.0, [Node("a", 0.0, 0.0), Node("b", 9.9, 9.9)])
    # b is ~14 away but sits in the adjacent diagonal cell
    assert {n.id for n in idx.neighbors(Node("a", 0.0, 0.0))} == {"a", "b"}


def test_rejects_non_positive_cell():
    with pytest.raises(ValueError):
        SpatialIndex(0.0)
