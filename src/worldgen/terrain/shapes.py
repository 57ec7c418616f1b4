"""Grid-clipped shape masks shared by the carving stages.

Every window is clipped to the grid before use so no stage ever indexes
outside [0, width) x [0, height); numpy would wrap negative indices silently.
"""

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray


class Window(NamedTuple):
    """A clipped rectangular region and a per-cell value over it."""

    rows: slice
    cols: slice
    values: NDArray


def _clip_box(
    width: int,
    height: int,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    margin: int,
) -> tuple[int, int, int, int] | None:
    """Clip the inclusive box [x0, x1] x [y0, y1] to the grid minus margin."""
    x0 = max(x0, margin)
    y0 = max(y0, margin)
    x1 = min(x1, width - 1 - margin)
    y1 = min(y1, height - 1 - margin)
    if x0 > x1 or y0 > y1:
        return None
    return x0, y0, x1, y1


def disk_window(
    width: int,
    height: int,
    cx: int,
    cy: int,
    radius: int,
    margin: int = 0,
) -> Window | None:
    """Boolean mask of cells with dx^2 + dy^2 <= radius^2 around (cx, cy).

    Returns None when the disk lies entirely outside the grid.
    """
    box = _clip_box(
        width, height, cx - radius, cy - radius, cx + radius, cy + radius, margin
    )
    if box is None:
        return None
    x0, y0, x1, y1 = box
    dy = np.arange(y0, y1 + 1)[:, None] - cy
    dx = np.arange(x0, x1 + 1)[None, :] - cx
    mask = dx * dx + dy * dy <= radius * radius
    return Window(slice(y0, y1 + 1), slice(x0, x1 + 1), mask)


def ellipse_window(
    width: int,
    height: int,
    cx: int,
    cy: int,
    radius_x: int,
    radius_y: int,
    margin: int = 0,
) -> Window | None:
    """Normalized elliptical distance sqrt((dx/rx)^2 + (dy/ry)^2) per cell."""
    box = _clip_box(
        width,
        height,
        cx - radius_x,
        cy - radius_y,
        cx + radius_x,
        cy + radius_y,
        margin,
    )
    if box is None:
        return None
    x0, y0, x1, y1 = box
    dy = (np.arange(y0, y1 + 1)[:, None] - cy) / radius_y
    dx = (np.arange(x0, x1 + 1)[None, :] - cx) / radius_x
    return Window(slice(y0, y1 + 1), slice(x0, x1 + 1), np.sqrt(dx * dx + dy * dy))
