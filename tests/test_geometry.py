"""Polygon vertex, chord, intersection and marker geometry."""

import math

import numpy as np
import pytest

from chordface.geometry import (
    Bounds, Chord, DisplayGeometry, Point, TRIANGLE_SHIFT, chord, chords,
    euclid_mod, highlight, intersect, intersect_or, marker_point_count,
    vertex, vertices,
)

CENTER = Point(72.0, 84.0)
RADIUS = 72.0


def _residual(c, p):
    (x0, y0), (x1, y1) = c
    a = y1 - y0
    b = x0 - x1
    return a * p.x + b * p.y - (a * x0 + b * y0)


@pytest.mark.parametrize("index, n, expected", [
    (0, 12, 0), (13, 12, 1), (-1, 12, 11), (-13, 12, 11), (-24, 12, 0), (5, 3, 2),
])
def test_euclid_mod_is_non_negative(index, n, expected):
    assert euclid_mod(index, n) == expected


def test_vertex_is_periodic():
    for n in range(3, 31):
        for i in range(-2 * n, 3 * n):
            assert vertex(i, n, CENTER, RADIUS) == vertex(i % n, n, CENTER, RADIUS)


def test_vertex_zero_is_at_top_and_indices_run_clockwise():
    c = (50.0, 50.0)
    np.testing.assert_allclose(vertex(0, 12, c, 40), (50, 10), atol=1e-9)
    np.testing.assert_allclose(vertex(3, 12, c, 40), (90, 50), atol=1e-9)
    np.testing.assert_allclose(vertex(6, 12, c, 40), (50, 90), atol=1e-9)
    np.testing.assert_allclose(vertex(9, 12, c, 40), (10, 50), atol=1e-9)


def test_vertex_uses_matching_center_components():
    # Non-square display: x must come from center.x, y from center.y
    p = vertex(0, 4, (10.0, 200.0), 5.0)
    np.testing.assert_allclose(p, (10.0, 195.0), atol=1e-9)


def test_vertices_lie_on_circle():
    for n in (3, 7, 12, 60):
        for i in range(n):
            x, y = vertex(i, n, CENTER, RADIUS)
            assert math.hypot(x - CENTER.x, y - CENTER.y) == pytest.approx(RADIUS)


def test_chord_joins_index_and_index_plus_shift():
    c = chord(10, 12, 3, CENTER, RADIUS)
    assert isinstance(c, Chord)
    assert c.start == vertex(10, 12, CENTER, RADIUS)
    assert c.end == vertex(1, 12, CENTER, RADIUS)


def test_chord_with_zero_shift_is_a_point():
    c = chord(4, 12, 12, CENTER, RADIUS)
    assert c.start == c.end
    assert intersect(c, chord(5, 12, 3, CENTER, RADIUS)) is None


def test_intersection_lies_on_both_lines():
    n = 24
    for shift in (3, 5, 7, 10):
        for i in range(n):
            a = chord(i, n, shift, CENTER, RADIUS)
            b = chord(i + 1, n, shift, CENTER, RADIUS)
            p = intersect(a, b)
            assert p is not None
            assert abs(_residual(a, p)) < 1e-6
            assert abs(_residual(b, p)) < 1e-6


def test_intersection_of_crossing_segments():
    p = intersect(((0, 0), (10, 10)), ((0, 10), (10, 0)))
    assert p == Point(5.0, 5.0)


def test_parallel_and_identical_chords_have_no_intersection():
    assert intersect(((0, 0), (1, 0)), ((0, 1), (2, 1))) is None
    c = chord(2, 12, 3, CENTER, RADIUS)
    assert intersect(c, c) is None


def test_intersect_or_substitutes_fallback():
    c = chord(2, 12, 3, CENTER, RADIUS)
    p = intersect_or(c, c, (1, 2))
    assert p == Point(1, 2)
    assert not any(math.isnan(v) for v in p)


def test_theoretically_parallel_float_chords_are_degenerate():
    # For n=12, shift=8 the chords behind the target are parallel in theory
    n, shift = 12, 8
    a = chord(0 - shift + 1, n, shift, CENTER, RADIUS)
    b = chord(0 - 1, n, shift, CENTER, RADIUS)
    assert intersect(a, b) is None


def test_marker_point_count_follows_shift():
    for n in range(3, 25):
        for shift in range(-n, 2 * n):
            if shift % n == 0:
                continue
            pts = highlight(0, n, shift, CENTER, RADIUS)
            expected = 3 if shift % n == TRIANGLE_SHIFT else 4
            assert len(pts) == expected == marker_point_count(n, shift)


def test_marker_starts_at_target_vertex():
    pts = highlight(3, 12, 3, CENTER, RADIUS)
    assert len(pts) == 4
    assert pts[0] == vertex(3, 12, CENTER, RADIUS)


def test_marker_normalizes_target_index():
    assert highlight(-9, 12, 3, CENTER, RADIUS) == highlight(3, 12, 3, CENTER, RADIUS)
    assert highlight(27, 12, 3, CENTER, RADIUS) == highlight(3, 12, 3, CENTER, RADIUS)


@pytest.mark.parametrize("shift", [2, 3, 4, 5])
def test_marker_corners_are_finite_and_inside_circle(shift):
    n = 12
    for target in range(n):
        for x, y in highlight(target, n, shift, CENTER, RADIUS):
            assert math.isfinite(x) and math.isfinite(y)
            assert math.hypot(x - CENTER.x, y - CENTER.y) <= RADIUS + 1e-6


def test_marker_corners_lie_on_the_bounding_chords():
    n, shift, t = 12, 3, 5
    _, p1, p3, p2 = highlight(t, n, shift, CENTER, RADIUS)

    def line(i):
        return chord(i, n, shift, CENTER, RADIUS)

    assert abs(_residual(line(t - shift), p1)) < 1e-6
    assert abs(_residual(line(t - 1), p1)) < 1e-6
    assert abs(_residual(line(t - shift + 1), p2)) < 1e-6
    assert abs(_residual(line(t), p2)) < 1e-6
    assert abs(_residual(line(t - shift + 1), p3)) < 1e-6
    assert abs(_residual(line(t - 1), p3)) < 1e-6


def test_degenerate_marker_falls_back_to_target():
    # shift=1: neighbouring chords are identical polygon edges
    target = vertex(4, 12, CENTER, RADIUS)
    pts = highlight(4, 12, 1, CENTER, RADIUS)
    assert len(pts) == 4
    for p in pts:
        assert not any(math.isnan(v) for v in p)
    assert pts[1] == target
    assert pts[3] == target


def test_minimum_polygon_is_a_triangle():
    for shift in (1, 2):
        segs = [chord(i, 3, shift, CENTER, RADIUS) for i in range(3)]
        for start, end in segs:
            assert math.hypot(end.x - start.x, end.y - start.y) > 0
        assert {s.start for s in segs} == {vertex(i, 3, CENTER, RADIUS) for i in range(3)}


def test_batch_helpers_match_scalar_functions():
    n, shift = 17, 5
    np.testing.assert_allclose(
        vertices(n, CENTER, RADIUS),
        [vertex(i, n, CENTER, RADIUS) for i in range(n)], atol=1e-9)
    np.testing.assert_allclose(
        chords(n, shift, CENTER, RADIUS),
        [chord(i, n, shift, CENTER, RADIUS) for i in range(n)], atol=1e-9)


def test_display_geometry_from_bounds():
    geo = DisplayGeometry.from_bounds((0, 0, 144, 168))
    assert geo.bounds == Bounds(0, 0, 144, 168)
    assert geo.center == Point(72.0, 84.0)
    assert geo.radius == 72.0
    assert not geo.is_empty

    offset = DisplayGeometry.from_bounds(Bounds(10, 20, 100, 50))
    assert offset.center == Point(60.0, 45.0)
    assert offset.radius == 25.0


def test_zero_area_display_is_empty():
    assert DisplayGeometry.from_bounds((0, 0, 0, 168)).is_empty
    assert DisplayGeometry.from_bounds((0, 0, 144, 0)).is_empty


def test_marker_points_outward_when_shift_exceeds_half_the_polygon():
    # shift=10 on 12 vertices runs the star backwards (same chords as -2);
    # the neighbouring chords then cross outside the circle
    n, shift = 12, 10
    for target in range(n):
        pts = highlight(target, n, shift, CENTER, RADIUS)
        assert len(pts) == 4
        dists = [math.hypot(x - CENTER.x, y - CENTER.y) for x, y in pts]
        assert dists[0] == pytest.approx(RADIUS)
        assert max(dists) > RADIUS * 1.1
        for x, y in pts:
            assert math.isfinite(x) and math.isfinite(y)
