"""Drawing surfaces the face renderer paints on."""

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Polygon, Rectangle

from .config import color_to_rgb
from .geometry import Bounds
from .trace import build_xy_from_polylines, inset_rings


class Canvas:
    """
    Minimal host graphics interface.

    Subclasses provide the drawable bounds and the three primitives the
    renderer needs. begin_frame()/end_frame() bracket each redraw.
    """

    def get_bounds(self) -> Bounds:
        raise NotImplementedError

    def begin_frame(self):
        pass

    def end_frame(self):
        pass

    def fill_rect(self, bounds, color):
        raise NotImplementedError

    def draw_line(self, start, end, color, width=1):
        raise NotImplementedError

    def fill_polygon(self, points, color):
        raise NotImplementedError


class ImageCanvas(Canvas):
    """Raster surface backed by a matplotlib Agg figure, one unit per pixel."""

    def __init__(self, width=144, height=168, dpi=100):
        if width < 0 or height < 0:
            raise ValueError(f"Canvas size must be non-negative (got {width}x{height})")
        self.dpi = dpi
        self.figure = Figure(dpi=dpi)
        self._agg = FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.resize(width, height)

    def resize(self, width, height):
        self.width = width
        self.height = height
        # Agg cannot allocate a zero-sized buffer
        self.figure.set_size_inches(max(width, 1) / self.dpi, max(height, 1) / self.dpi)
        self._reset_axes()

    def _reset_axes(self):
        self.ax.cla()
        self.ax.set_axis_off()
        self.ax.set_xlim(0, max(self.width, 1))
        self.ax.set_ylim(max(self.height, 1), 0)

    def get_bounds(self):
        return Bounds(0, 0, self.width, self.height)

    def begin_frame(self):
        self._reset_axes()

    def fill_rect(self, bounds, color):
        x, y, w, h = bounds
        self.ax.add_patch(Rectangle((x, y), w, h, facecolor=color_to_rgb(color),
                                    edgecolor='none'))

    def draw_line(self, start, end, color, width=1):
        # linewidth is in points; convert from pixels
        self.ax.add_line(Line2D([start[0], end[0]], [start[1], end[1]],
                                color=color_to_rgb(color),
                                linewidth=width * 72.0 / self.dpi))

    def fill_polygon(self, points, color):
        self.ax.add_patch(Polygon(np.asarray(points, dtype=np.float64), closed=True,
                                  facecolor=color_to_rgb(color), edgecolor='none'))

    def to_array(self):
        """Render and return an (H, W, 4) uint8 RGBA snapshot."""
        self._agg.draw()
        return np.asarray(self._agg.buffer_rgba()).copy()

    def save(self, path):
        self.figure.savefig(path, dpi=self.dpi)


class TraceCanvas(Canvas):
    """
    Vector surface for an XY oscilloscope.

    Lines become open polylines; filled polygons become concentric
    rings so the beam paints them solid. Colors have no meaning on a
    scope and are ignored.
    """

    def __init__(self, width=200, height=200, fill_rings=6):
        self.width = width
        self.height = height
        self.fill_rings = fill_rings
        self.polylines = []

    def get_bounds(self):
        return Bounds(0, 0, self.width, self.height)

    def begin_frame(self):
        self.polylines = []

    def fill_rect(self, bounds, color):
        pass

    def draw_line(self, start, end, color, width=1):
        self.polylines.append(np.array([start, end], dtype=np.float64))

    def fill_polygon(self, points, color):
        self.polylines.extend(inset_rings(points, self.fill_rings))

    def to_xy(self, samples, amp=1.0):
        """Looped (samples, 2) float32 buffer in [-amp, amp]."""
        xy = build_xy_from_polylines(self.polylines, self.get_bounds(), samples)
        return np.clip(xy * amp, -1.0, 1.0).astype(np.float32)
