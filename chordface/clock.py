"""Real-time oscilloscope chord-star watch face."""

import soundfile as sf

from .base import ScopePlayer
from .canvas import TraceCanvas
from .face import FaceRenderer


class FacePlayer(ScopePlayer):
    """
    Streams the watch face to an oscilloscope.

    Acts as the renderer's host: the audio callback delivers a tick
    whenever the minute changes and re-renders the XY buffer only when
    a redraw was requested.
    """

    def __init__(self, renderer=None, canvas=None, **kwargs):
        super().__init__(**kwargs)
        self.canvas = canvas or TraceCanvas()
        self.renderer = renderer or FaceRenderer()
        self.renderer.request_redraw = self.request_redraw
        self._dirty = True
        self._last_tick = None
        self._update_face()

    def request_redraw(self):
        self._dirty = True

    def _tick(self):
        now = self.renderer.time_source()
        if now != self._last_tick:
            self._last_tick = now
            self.renderer.on_tick(*now)

    def _update_face(self):
        """Tick the renderer and rebuild the XY buffer if it asked to."""
        self._tick()
        if not self._dirty:
            return False
        self._dirty = False
        self.renderer.redraw(self.canvas)
        self.xy_data = self.canvas.to_xy(self.samples, self.amp)
        self.position = 0
        hour, minute = self._last_tick
        hi, mi = self.renderer.last_indices or (None, None)
        print(f"  {hour:02d}:{minute:02d}  hour index {hi}, minute index {mi}")
        return True

    def audio_callback(self, outdata, frames, time, status):
        """Custom callback that checks for time and config updates."""
        self._check_status(status)

        self._update_face()
        self._fill_buffer(outdata, frames)
        self.global_sample += frames

    def _on_start(self):
        cfg = self.renderer.config
        print(f"Chord face: {cfg.vertex_count} vertices, shift {cfg.vertex_shift}")
        print("  Press Ctrl+C to stop.")


def generate_wav(renderer, output, rate, secs, amp):
    """Render one frame and write it as a stereo WAV (L=X, R=Y)."""
    samples = int(rate * secs)
    canvas = TraceCanvas()
    renderer.redraw(canvas)
    xy = canvas.to_xy(samples, amp)
    sf.write(output, xy, rate)
    print(f"Wrote {output} ({rate} Hz, {samples} frames). L=X, R=Y")
    return xy
