"""Chord-star geometry: polygon vertices, chords and highlight markers."""

import logging
import math
from typing import NamedTuple, Optional

import numpy as np

logger = logging.getLogger(__name__)

# At this shift the two neighbouring chords of a marker coincide, so the
# quadrilateral degenerates and one corner has to be dropped.
TRIANGLE_SHIFT = 2

PARALLEL_EPS = 1e-9


class Point(NamedTuple):
    x: float
    y: float


class Chord(NamedTuple):
    start: Point
    end: Point


class Bounds(NamedTuple):
    x: float
    y: float
    w: float
    h: float


class DisplayGeometry(NamedTuple):
    """Drawable area plus the inscribed circle the polygon lives on."""
    bounds: Bounds
    center: Point
    radius: float

    @classmethod
    def from_bounds(cls, bounds):
        bounds = Bounds(*bounds)
        center = Point(bounds.x + bounds.w / 2.0, bounds.y + bounds.h / 2.0)
        radius = max(0.0, min(bounds.w, bounds.h) / 2.0)
        return cls(bounds, center, radius)

    @property
    def is_empty(self):
        return self.bounds.w <= 0 or self.bounds.h <= 0


def euclid_mod(index: int, n: int) -> int:
    """Reduce index into [0, n) regardless of the operand signs."""
    return ((index % n) + n) % n


def _angle(index, n):
    # Quarter-turn offset and sign flip put index 0 at the top of the
    # display and make indices advance clockwise.
    theta = 2 * math.pi * index / n
    return -(theta + math.pi / 2)


def vertex(index: int, n: int, center, radius: float) -> Point:
    """Return the position of polygon vertex `index` on the inscribed circle."""
    angle = _angle(euclid_mod(index, n), n)
    return Point(center[0] - radius * math.cos(angle),
                 center[1] + radius * math.sin(angle))


def chord(index: int, n: int, shift: int, center, radius: float) -> Chord:
    """Chord joining vertex(index) and vertex(index + shift)."""
    return Chord(vertex(index, n, center, radius),
                 vertex(index + shift, n, center, radius))


def _line_coefficients(c):
    (x0, y0), (x1, y1) = c
    a = float(y1 - y0)
    b = float(x0 - x1)
    return a, b, a * x0 + b * y0


def intersect(a, b) -> Optional[Point]:
    """
    Intersection of the infinite lines through two chords.

    Each chord p0->p1 becomes A*x + B*y = C and the 2x2 system is solved
    with Cramer's rule. Returns None when the determinant vanishes, which
    covers parallel and coincident lines as well as zero-length chords.
    The zero test is relative to the magnitude of the two products.
    """
    a1, b1, c1 = _line_coefficients(a)
    a2, b2, c2 = _line_coefficients(b)
    delta = a1 * b2 - a2 * b1
    if abs(delta) <= PARALLEL_EPS * max(1.0, abs(a1 * b2) + abs(a2 * b1)):
        return None
    return Point((b2 * c1 - b1 * c2) / delta,
                 (a1 * c2 - a2 * c1) / delta)


def intersect_or(a, b, fallback) -> Point:
    """Like intersect(), but substitutes `fallback` for degenerate input."""
    p = intersect(a, b)
    if p is None:
        logger.debug("Degenerate intersection %s x %s, using %s", a, b, fallback)
        return Point(*fallback)
    return p


def marker_point_count(n: int, shift: int) -> int:
    """Number of corners a highlight marker has for this configuration."""
    return 3 if euclid_mod(shift, n) == TRIANGLE_SHIFT else 4


def highlight(target_index: int, n: int, shift: int, center, radius: float):
    """
    Build the filled marker that points at vertex `target_index`.

    The marker is bounded by the two chords passing through the target
    and their angular neighbours. Returns a list of 3 or 4 Points,
    starting at the target vertex.
    """
    index = euclid_mod(target_index, n)
    target = vertex(index, n, center, radius)

    def line(i):
        return chord(i, n, shift, center, radius)

    p1 = intersect_or(line(index - shift), line(index - 1), target)
    p2 = intersect_or(line(index - shift + 1), line(index), target)

    if marker_point_count(n, shift) == 3:
        return [target, p1, p2]

    p3 = intersect_or(line(index - shift + 1), line(index - 1), target)
    return [target, p1, p3, p2]


def vertices(n: int, center, radius: float) -> np.ndarray:
    """All n vertices as an (n, 2) float array, same values as vertex()."""
    angles = -(2 * np.pi * np.arange(n) / n + np.pi / 2)
    out = np.empty((n, 2), dtype=np.float64)
    out[:, 0] = center[0] - radius * np.cos(angles)
    out[:, 1] = center[1] + radius * np.sin(angles)
    return out


def chords(n: int, shift: int, center, radius: float) -> np.ndarray:
    """All n chords as an (n, 2, 2) array of [start, end] pairs."""
    pts = vertices(n, center, radius)
    idx = np.arange(n)
    return np.stack([pts[idx], pts[(idx + shift) % n]], axis=1)
