"""
Point cloud -> ASCII frame.

Per frame:
    1. Reset the depth buffer to -inf and the character buffer to blanks.
    2. Spin every point about Y by the current angle, then tilt about X.
    3. Perspective divide: scale = fov / (camera_dist - z).
    4. Floor to cells, drop anything off screen or behind the camera.
    5. Depth test: the nearest point (largest rotated z) owns its cell.
    6. Map the winner's depth onto the glyph ramp (near = heavy).
    7. Join the character buffer row by row.
"""

import logging

import numpy as np

from ascii_spin.config import DEFAULT_CONFIG, Config
from ascii_spin.sampler import PointCloud

logger = logging.getLogger(__name__)

BLANK = " "


# ==============================================================================
# 1. MATRIX MATH HELPERS
# ==============================================================================
def rotation_matrix(angle, tilt):
    """Spin about Y by angle, then tilt about X."""
    cy, sy = np.cos(angle), np.sin(angle)
    cx, sx = np.cos(tilt), np.sin(tilt)

    mat_y = np.array([[cy, 0, -sy], [0, 1, 0], [sy, 0, cy]])
    mat_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])

    # Apply Rx * Ry
    return mat_x @ mat_y


def rotate(points, angle, tilt=0.0):
    """Rotate an (N, 3) array. Returns a new array."""
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    # Transpose for multiplication (3xN) then transpose back
    return (rotation_matrix(angle, tilt) @ points.T).T


def project(rotated, config: Config = DEFAULT_CONFIG):
    """
    Perspective-project rotated points onto the character grid.

    Returns (cols, rows, visible). cols/rows are only meaningful where
    visible is True.
    """
    x, y, z = rotated[:, 0], rotated[:, 1], rotated[:, 2]
    denom = config.camera_dist - z
    in_front = denom > 0
    # Points at or behind the camera get a dummy scale and are masked out below
    scale = config.fov / np.where(in_front, denom, 1.0)

    x_proj = x * scale + config.render_width / 2
    y_proj = -y * scale * config.aspect + config.render_height / 2

    cols = np.floor(x_proj).astype(np.int64)
    rows = np.floor(y_proj).astype(np.int64)
    visible = (
        in_front
        & (cols >= 0) & (cols < config.render_width)
        & (rows >= 0) & (rows < config.render_height)
    )
    return cols, rows, visible


def glyph_indices(depths, config: Config = DEFAULT_CONFIG):
    depth_norm = (np.asarray(depths, dtype=np.float64) + config.depth_offset) / config.depth_span
    idx = np.floor(depth_norm * len(config.char_map)).astype(np.int64)
    return np.clip(idx, 0, len(config.char_map) - 1)


# ==============================================================================
# 2. FRAME BUFFERS
# ==============================================================================
class FrameBuffers:
    """Flat depth and character buffers indexed by row * width + col."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.depth = np.full(width * height, -np.inf, dtype=np.float64)
        self.chars = np.full(width * height, BLANK, dtype="<U1")

    def reset(self):
        self.depth.fill(-np.inf)
        self.chars.fill(BLANK)

    def to_text(self) -> str:
        rows = self.chars.reshape(self.height, self.width)
        return "".join("".join(row) + "\n" for row in rows)


def blank_frame(config: Config = DEFAULT_CONFIG) -> str:
    return (BLANK * config.render_width + "\n") * config.render_height


# ==============================================================================
# 3. RENDERER
# ==============================================================================
class SceneRenderer:
    """Renders a point cloud at a given rotation angle into a text frame."""

    def __init__(self, config: Config = DEFAULT_CONFIG):
        self.config = config
        self.buffers = FrameBuffers(config.render_width, config.render_height)
        self._glyphs = np.array(list(config.char_map), dtype="<U1")

    def render(self, cloud: PointCloud, angle: float) -> str:
        cfg = self.config
        buf = self.buffers

        # 1. Buffers
        buf.reset()
        if cloud.is_empty:
            return buf.to_text()

        # 2. Rotate
        rotated = rotate(cloud.array, angle, cfg.tilt_x)

        # 3/4. Project + clip
        cols, rows, visible = project(rotated, cfg)
        cells = rows[visible] * cfg.render_width + cols[visible]
        depths = rotated[visible, 2]

        # 5. Depth test: keep the max per cell, first point wins on ties
        np.maximum.at(buf.depth, cells, depths)
        winners = np.flatnonzero(depths == buf.depth[cells])
        won_cells, first = np.unique(cells[winners], return_index=True)
        won_depths = depths[winners[first]]

        # 6. Depth shading
        buf.chars[won_cells] = self._glyphs[glyph_indices(won_depths, cfg)]

        logger.debug(
            "angle=%.3f points=%d visible=%d cells=%d",
            angle, len(cloud), len(cells), len(won_cells),
        )

        # 7. Stringify
        return buf.to_text()
