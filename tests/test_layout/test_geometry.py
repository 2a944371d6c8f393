"""Tests for the numpy geometry helpers."""

import numpy as np

from vdsl.utils.geometry import (
    as_point_array,
    cell_centers,
    cell_edges,
    rects_overlap,
    scale_points,
    to_pairs,
)


def test_rects_overlap():
    assert rects_overlap((0, 0, 10, 10), (5, 5, 15, 15))
    assert not rects_overlap((0, 0, 10, 10), (10, 0, 20, 10))
    assert not rects_overlap((0, 0, 10, 10), (20, 20, 30, 30))


def test_cell_edges():
    np.testing.assert_allclose(cell_edges(0, 10, 4), [0, 2.5, 5, 7.5, 10])
    np.testing.assert_allclose(cell_edges(5, 8, 1), [5, 8])


def test_scale_points():
    pts = np.array([[0.0, 0.0], [20.0, 10.0], [10.0, 5.0]])
    out = scale_points(pts, (100, 50, 300, 250), 20, 10)
    np.testing.assert_allclose(out, [[100, 50], [300, 250], [200, 150]])


def test_cell_centers():
    pts = np.array([[0.0, 0.0], [1.0, 2.0]])
    out = cell_centers(pts, (0, 0, 40, 90), 3, 2)
    np.testing.assert_allclose(out, [[10, 15], [30, 75]])


def test_empty_inputs():
    assert as_point_array([]).shape == (0, 2)
    assert scale_points(as_point_array([]), (0, 0, 1, 1), 1, 1).shape == (0, 2)
    assert cell_centers(as_point_array([]), (0, 0, 1, 1), 1, 1).shape == (0, 2)
    assert to_pairs(np.empty((0, 2))) == []


def test_to_pairs_gives_plain_floats():
    pairs = to_pairs(as_point_array([(1, 2), (3, 4)]))
    assert pairs == [(1.0, 2.0), (3.0, 4.0)]
    assert all(type(v) is float for pair in pairs for v in pair)
