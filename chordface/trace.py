"""Turn display-space polylines into a looped XY beam path."""

import numpy as np


def inset_rings(points, rings):
    """
    Concentric copies of a polygon shrunk toward its centroid.

    Tracing all of them fills a convex shape on the scope. Each ring is
    a closed (k+1, 2) polyline, outermost first.
    """
    pts = np.asarray(points, dtype=np.float64)
    closed = np.vstack([pts, pts[:1]])
    centroid = pts.mean(axis=0)
    rings = max(1, int(rings))
    return [centroid + (closed - centroid) * (k / rings) for k in range(rings, 0, -1)]


def to_scope_coords(poly, bounds):
    """Map display pixels (y down) to [-1, 1] scope units (y up)."""
    x, y, w, h = bounds
    half = min(w, h) / 2.0
    if half <= 0:
        return np.zeros_like(poly)
    cx, cy = x + w / 2.0, y + h / 2.0
    out = np.empty_like(poly)
    out[:, 0] = (poly[:, 0] - cx) / half
    out[:, 1] = (cy - poly[:, 1]) / half
    return out


def resample_polyline(p, n):
    """Resample a polyline p (Nx2) to n points at approximately constant speed."""
    if len(p) < 2:
        return np.repeat(p[:1], n, axis=0) if len(p) == 1 else np.zeros((n, 2), dtype=np.float64)
    diffs = np.diff(p, axis=0)
    seglen = np.sqrt((diffs ** 2).sum(axis=1))
    s = np.concatenate(([0.0], np.cumsum(seglen)))
    total = s[-1]
    if total <= 0:
        return np.repeat(p[:1], n, axis=0)
    t = np.linspace(0.0, total, n)
    x = np.interp(t, s, p[:, 0])
    y = np.interp(t, s, p[:, 1])
    return np.column_stack((x, y))


def order_polylines(polys):
    """Greedy nearest-endpoint ordering to keep beam jumps short.

    Open polylines may be reversed when their far end is closer.
    """
    if len(polys) <= 1:
        return list(polys)

    remaining = list(polys[1:])
    ordered = [polys[0]]
    while remaining:
        prev_end = ordered[-1][-1]
        best, best_d, flip = 0, np.inf, False
        for j, p in enumerate(remaining):
            d_start = ((p[0] - prev_end) ** 2).sum()
            d_end = ((p[-1] - prev_end) ** 2).sum()
            if d_start < best_d:
                best, best_d, flip = j, d_start, False
            if d_end < best_d:
                best, best_d, flip = j, d_end, True
        p = remaining.pop(best)
        ordered.append(p[::-1] if flip else p)
    return ordered


def build_xy_from_polylines(polys, bounds, samples):
    """
    Convert display-space polylines to an XY array of `samples` points.

    Samples are shared out in proportion to arc length, so every chord
    is drawn at the same brightness. An empty frame is a dot at the
    center.
    """
    polys = [to_scope_coords(np.asarray(p, dtype=np.float64), bounds)
             for p in polys if len(p) >= 2]
    if not polys or samples <= 0:
        return np.zeros((max(samples, 0), 2), dtype=np.float64)

    polys = order_polylines(polys)

    lengths = []
    for p in polys:
        d = np.diff(p, axis=0)
        lengths.append(float(np.sqrt((d ** 2).sum(axis=1)).sum()))
    total_len = sum(lengths)
    if total_len <= 0:
        total_len = float(len(polys))
        lengths = [1.0] * len(polys)

    out = []
    for p, L in zip(polys, lengths):
        n = int(max(2, samples * (L / total_len)))
        out.append(resample_polyline(p, n))

    xy = np.vstack(out)
    if len(xy) < samples:
        pad = np.tile(xy[-1], (samples - len(xy), 1))
        xy = np.vstack([xy, pad])
    else:
        xy = xy[:samples]

    # Force seamless loop wrap
    xy[-1] = xy[0]
    return xy
