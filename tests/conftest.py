"""Shared image fixtures for the ascii_spin test suite."""

import io

import numpy as np
import pytest
from PIL import Image

from ascii_spin.config import Config


def png_bytes(pixels: np.ndarray) -> bytes:
    """Encode an (H, W, 4) uint8 RGBA array as PNG bytes."""
    out = io.BytesIO()
    Image.fromarray(pixels.astype(np.uint8)).save(out, format="PNG")
    return out.getvalue()


def solid_rgba(w, h, rgba) -> np.ndarray:
    return np.tile(np.array(rgba, dtype=np.uint8), (h, w, 1))


@pytest.fixture
def black_square_png():
    return png_bytes(solid_rgba(4, 4, (0, 0, 0, 255)))


@pytest.fixture
def transparent_png():
    return png_bytes(solid_rgba(10, 10, (0, 0, 0, 0)))


@pytest.fixture
def native_config():
    """Samples a 4x4 image pixel for pixel."""
    return Config(sample_size=4, density=1)
