"""
Chordface - a watch face drawn from chords of a regular polygon.

Every vertex of an n-gon inscribed in the display is joined to the
vertex `shift` steps further on. The chords through the current hour
and minute vertices are marked with filled polygons that act as hands.

Basic usage:
    $ chordface render face.png --time 03:00
    $ chordface scope -n 24 -s 5
    $ chordface config --vertex-count 12 --vertex-shift 3

Or use as a library:
    from chordface import FaceRenderer, ImageCanvas
    canvas = ImageCanvas(144, 168)
    FaceRenderer().redraw(canvas)
    canvas.save("face.png")
"""

__version__ = "0.1.0"

from .geometry import (
    Point, Chord, Bounds, DisplayGeometry, TRIANGLE_SHIFT,
    euclid_mod, vertex, chord, intersect, intersect_or, highlight,
    marker_point_count, vertices, chords,
)
from .config import FaceConfig, InvalidConfig, apply_message
from .settings import SettingsStore
from .canvas import Canvas, ImageCanvas, TraceCanvas
from .face import FaceRenderer, FaceState, HighlightPath, hand_indices

__all__ = [
    # Geometry
    "Point",
    "Chord",
    "Bounds",
    "DisplayGeometry",
    "TRIANGLE_SHIFT",
    "euclid_mod",
    "vertex",
    "chord",
    "intersect",
    "intersect_or",
    "highlight",
    "marker_point_count",
    "vertices",
    "chords",
    # Configuration
    "FaceConfig",
    "InvalidConfig",
    "apply_message",
    "SettingsStore",
    # Rendering
    "Canvas",
    "ImageCanvas",
    "TraceCanvas",
    "FaceRenderer",
    "FaceState",
    "HighlightPath",
    "hand_indices",
    # Meta
    "__version__",
]
