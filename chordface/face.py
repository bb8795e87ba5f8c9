"""Face renderer: draws the chord star and the hour/minute markers."""

import enum
import logging
from datetime import datetime

import numpy as np

from .config import FaceConfig, InvalidConfig, apply_message
from .geometry import DisplayGeometry, chord, highlight

logger = logging.getLogger(__name__)


def local_time():
    """Current local (hour, minute)."""
    now = datetime.now()
    return now.hour, now.minute


def hand_indices(hour, minute, n):
    """Map wall-clock time to (hour_index, min_index) on an n-gon."""
    return (hour % 12) * n // 12, (minute % 60) * n // 60


class FaceState(enum.Enum):
    IDLE = "idle"
    RENDERING = "rendering"


class HighlightPath:
    """Polygon handed to the surface for one frame; close() releases it."""

    def __init__(self, points):
        self.points = np.asarray(points, dtype=np.float64)
        self.closed = False

    def __len__(self):
        return len(self.points)

    def close(self):
        self.closed = True


class FaceRenderer:
    """
    Owns the FaceConfig and redraws the face on request.

    The host supplies a time source returning (hour, minute) and a
    request_redraw callback; it calls redraw(canvas) whenever a redraw
    was requested, and on_tick() once per minute.
    """

    SLOTS = ('minute', 'hour')

    def __init__(self, config=None, time_source=local_time, request_redraw=None,
                 store=None):
        self._config = (config or FaceConfig()).validate()
        self.time_source = time_source
        self.request_redraw = request_redraw or (lambda: None)
        self.store = store
        self.state = FaceState.IDLE
        self._paths = dict.fromkeys(self.SLOTS)
        self._last_indices = None

    @property
    def config(self):
        return self._config

    def set_config(self, config):
        """Replace the whole configuration; invalid configs are refused."""
        self._config = config.validate()
        self.request_redraw()

    def apply_config(self, message):
        """
        Apply a configuration message (any subset of FaceConfig fields).

        On success the new config takes effect, a redraw is requested and
        the config is then persisted (when a store is attached); a failed
        write is logged and does not undo the update. On failure the last
        good config stays in place and InvalidConfig propagates.
        """
        try:
            config = apply_message(self._config, message)
        except InvalidConfig as e:
            logger.warning(f"Rejected configuration {message!r}: {e}")
            raise
        self._config = config
        logger.info(f"Configuration updated: {config}")
        self.request_redraw()
        if self.store is not None:
            try:
                self.store.save(config)
            except OSError as e:
                logger.warning(f"Could not save settings to '{self.store.path}': {e}")
        return config

    @property
    def last_indices(self):
        """(hour_index, min_index) of the last rendered frame, or None."""
        return self._last_indices

    def indices(self, hour, minute):
        return hand_indices(hour, minute, self._config.vertex_count)

    def on_tick(self, hour, minute):
        """Request a redraw only if a highlighted index would move."""
        if self.indices(hour, minute) == self._last_indices:
            return False
        self.request_redraw()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def redraw(self, canvas):
        """Run one full draw sequence. Returns the markers drawn (minute, hour)."""
        if self.state is FaceState.RENDERING:
            raise RuntimeError("redraw() called while already rendering")
        self.state = FaceState.RENDERING
        try:
            return self._render(canvas)
        finally:
            self.state = FaceState.IDLE

    def _render(self, canvas):
        cfg = self._config
        geo = DisplayGeometry.from_bounds(canvas.get_bounds())
        hour, minute = self.time_source()

        canvas.begin_frame()
        canvas.fill_rect(geo.bounds, cfg.background_color)
        if geo.is_empty:
            logger.debug(f"Empty display bounds {geo.bounds}, blank frame")
            self.release()
            canvas.end_frame()
            return []

        n, shift = cfg.vertex_count, cfg.vertex_shift
        for i in range(n):
            start, end = chord(i, n, shift, geo.center, geo.radius)
            canvas.draw_line(start, end, cfg.line_color, width=1)

        hour_index, min_index = hand_indices(hour, minute, n)
        self._last_indices = (hour_index, min_index)

        # Hour goes last so it stays on top when both indices coincide
        drawn = []
        for slot, index, color in (('minute', min_index, cfg.min_color),
                                   ('hour', hour_index, cfg.hour_color)):
            path = self._replace_path(slot, index, cfg, geo)
            canvas.fill_polygon(path.points, color)
            drawn.append(path)

        canvas.end_frame()
        return drawn

    def _replace_path(self, slot, index, cfg, geo):
        old = self._paths[slot]
        if old is not None:
            old.close()
            self._paths[slot] = None
        path = HighlightPath(highlight(index, cfg.vertex_count, cfg.vertex_shift,
                                       geo.center, geo.radius))
        self._paths[slot] = path
        return path

    def path(self, slot):
        """The live marker for 'hour' or 'minute', or None."""
        return self._paths[slot]

    def release(self):
        """Release any live marker paths."""
        for slot, path in self._paths.items():
            if path is not None:
                path.close()
            self._paths[slot] = None
