from __future__ import annotations

import numpy as np
import pytest

from block_blast.game import CATALOG, Shape, get_shape, list_shapes, shape_id


def test_catalog_has_required_families() -> None:
    dims = {(s.width, s.height, s.size) for s in list_shapes()}
    assert (1, 1, 1) in dims
    for n in range(2, 6):
        assert (n, 1, n) in dims  # horizontal line
        assert (1, n, n) in dims  # vertical line
    for w, h in [(2, 2), (2, 3), (3, 2), (3, 3)]:
        assert (w, h, w * h) in dims


def test_shapes_are_normalized_and_distinct() -> None:
    seen = set()
    for shape in CATALOG:
        xs = [x for x, _ in shape.cells]
        ys = [y for _, y in shape.cells]
        assert min(xs) == 0 and min(ys) == 0
        assert shape.width == max(xs) + 1
        assert shape.height == max(ys) + 1
        key = frozenset(shape.cells)
        assert key not in seen, shape.name
        seen.add(key)


def test_shape_lookup_by_name() -> None:
    plus = get_shape(shape_id("plus"))
    assert plus.size == 5
    assert (plus.width, plus.height) == (3, 3)
    with pytest.raises(KeyError):
        shape_id("hexomino")


def test_mask_matches_cells() -> None:
    stair = get_shape(shape_id("stair"))
    expected = np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8)
    assert np.array_equal(stair.mask(), expected)


def test_shape_rejects_unnormalized_offsets() -> None:
    with pytest.raises(ValueError):
        Shape("floating", ((1, 1), (2, 1)))


def test_shapes_are_immutable() -> None:
    shape = get_shape(0)
    with pytest.raises(AttributeError):
        shape.cells = ((0, 0), (1, 0))  # type: ignore[misc]
