"""Tests for rotation, projection and the depth-buffered frame pass."""

import math

import numpy as np
import pytest

from ascii_spin.config import Config
from ascii_spin.renderer import (
    BLANK,
    FrameBuffers,
    SceneRenderer,
    blank_frame,
    glyph_indices,
    project,
    rotate,
    rotation_matrix,
)
from ascii_spin.sampler import PointCloud, load_point_cloud


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _grid(frame: str):
    lines = frame.split("\n")
    assert lines[-1] == ""
    return lines[:-1]


def _filled_cells(frame: str):
    return [(r, c) for r, line in enumerate(_grid(frame)) for c, ch in enumerate(line) if ch != BLANK]


# ---------------------------------------------------------------------------
# Rotation
# ---------------------------------------------------------------------------


class TestRotation:
    def test_matrix_is_orthonormal(self):
        m = rotation_matrix(1.234, 0.2)
        np.testing.assert_allclose(m @ m.T, np.eye(3), atol=1e-12)

    def test_quarter_turn_about_y(self):
        np.testing.assert_allclose(rotate([[1.0, 0.0, 0.0]], math.pi / 2), [[0.0, 0.0, 1.0]], atol=1e-12)

    def test_tilt_about_x(self):
        tilt = 0.2
        out = rotate([[0.0, 1.0, 0.0]], 0.0, tilt)
        np.testing.assert_allclose(out, [[0.0, math.cos(tilt), math.sin(tilt)]], atol=1e-12)

    def test_full_turn_is_identity(self):
        rng = np.random.default_rng(1)
        pts = rng.uniform(-75, 75, size=(200, 3))
        np.testing.assert_allclose(rotate(pts, 2 * math.pi, 0.2), rotate(pts, 0.0, 0.2), atol=1e-9)


# ---------------------------------------------------------------------------
# Projection & shading
# ---------------------------------------------------------------------------


class TestProjection:
    def test_origin_lands_mid_screen(self):
        cfg = Config()
        cols, rows, visible = project(np.zeros((1, 3)), cfg)
        assert (cols[0], rows[0], visible[0]) == (50, 25, True)

    def test_off_screen_dropped(self):
        _, _, visible = project(np.array([[1000.0, 0.0, 0.0], [0.0, -1000.0, 0.0]]), Config())
        assert not visible.any()

    def test_behind_camera_dropped(self):
        _, _, visible = project(np.array([[0.0, 0.0, 150.0], [0.0, 0.0, 200.0]]), Config())
        assert not visible.any()


class TestGlyphIndices:
    def test_near_is_heavier(self):
        near, far = glyph_indices([10.0, -10.0])
        assert near > far

    def test_clamped(self):
        cfg = Config()
        assert list(glyph_indices([-1000.0, 1000.0], cfg)) == [0, len(cfg.char_map) - 1]

    def test_single_glyph_ramp(self):
        assert list(glyph_indices([-50.0, 0.0, 50.0], Config(char_map="#"))) == [0, 0, 0]


# ---------------------------------------------------------------------------
# Frame pass
# ---------------------------------------------------------------------------


class TestFrameBuffers:
    def test_reset(self):
        buf = FrameBuffers(3, 2)
        buf.depth[:] = 5.0
        buf.chars[:] = "#"
        buf.reset()
        assert np.isneginf(buf.depth).all()
        assert buf.to_text() == "   \n   \n"


class TestSceneRenderer:
    def test_empty_cloud_is_blank(self):
        cfg = Config()
        frame = SceneRenderer(cfg).render(PointCloud.empty(), 0.0)
        assert frame == blank_frame(cfg)
        assert _grid(frame) == [" " * cfg.render_width] * cfg.render_height

    def test_black_square_is_centred(self, black_square_png, native_config):
        cloud = load_point_cloud(black_square_png, native_config)
        frame = SceneRenderer(native_config).render(cloud, 0.0)
        w, h = native_config.render_width, native_config.render_height
        assert len(frame) == w * h + h
        assert all(len(line) == w for line in _grid(frame))

        cells = _filled_cells(frame)
        assert cells
        mean_row = sum(r for r, _ in cells) / len(cells)
        mean_col = sum(c for _, c in cells) / len(cells)
        assert abs(mean_row - h / 2) <= 2
        assert abs(mean_col - w / 2) <= 2

    def test_idempotent(self, black_square_png, native_config):
        cloud = load_point_cloud(black_square_png, native_config)
        renderer = SceneRenderer(native_config)
        assert renderer.render(cloud, 0.7) == renderer.render(cloud, 0.7)

    def test_buffers_do_not_leak_between_frames(self, black_square_png, native_config):
        cloud = load_point_cloud(black_square_png, native_config)
        renderer = SceneRenderer(native_config)
        renderer.render(cloud, 0.3)
        assert renderer.render(PointCloud.empty(), 0.3) == blank_frame(native_config)

    @pytest.mark.parametrize("order", [[0, 1], [1, 0]])
    def test_nearest_point_wins(self, order):
        cfg = Config(tilt_x=0.0)
        near, far = [0.0, 0.0, 10.0], [0.0, 0.0, -10.0]
        pts = [[near, far][i] for i in order]
        frame = SceneRenderer(cfg).render(PointCloud(pts), 0.0)

        cells = _filled_cells(frame)
        assert cells == [(25, 50)]
        expected = cfg.char_map[glyph_indices([10.0], cfg)[0]]
        assert _grid(frame)[25][50] == expected
        assert expected != cfg.char_map[glyph_indices([-10.0], cfg)[0]]

    def test_all_points_off_screen(self):
        cfg = Config()
        frame = SceneRenderer(cfg).render(PointCloud([[5000.0, 0.0, 0.0]]), 0.0)
        assert frame == blank_frame(cfg)

    def test_does_not_mutate_cloud(self, black_square_png, native_config):
        cloud = load_point_cloud(black_square_png, native_config)
        before = cloud.array.copy()
        SceneRenderer(native_config).render(cloud, 1.0)
        np.testing.assert_array_equal(cloud.array, before)
