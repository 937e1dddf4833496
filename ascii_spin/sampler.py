"""
Image -> point cloud sampling.

The image is fitted into a square analysis grid, scanned on a fixed stride,
and every pixel that is opaque enough and not near-white becomes a column of
points along Z. Coordinates are centred on the image and Y points up.
"""

import io
import logging
import mimetypes
from typing import Iterator, NamedTuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from ascii_spin.config import DEFAULT_CONFIG, Config
from ascii_spin.errors import ImageDecodeError, ImageTypeError

logger = logging.getLogger(__name__)

TYPE_ERROR_MESSAGE = "Please upload an image file (PNG or JPG)."


class Point(NamedTuple):
    x: float
    y: float
    z: float


class PointCloud:
    """Read-only (N, 3) array of points in sampler space."""

    def __init__(self, points=None):
        if points is None:
            arr = np.empty((0, 3), dtype=np.float64)
        else:
            arr = np.array(points, dtype=np.float64).reshape(-1, 3)
        arr.flags.writeable = False
        self._points = arr

    @classmethod
    def empty(cls) -> "PointCloud":
        return cls()

    @property
    def array(self) -> np.ndarray:
        return self._points

    @property
    def is_empty(self) -> bool:
        return len(self._points) == 0

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        for x, y, z in self._points:
            yield Point(float(x), float(y), float(z))

    def __repr__(self) -> str:
        return f"PointCloud({len(self)} points)"


# ==============================================================================
# 1. INPUT VALIDATION & DECODE
# ==============================================================================
def check_image_type(name, declared_type=None):
    """Reject anything not declared (or guessed from its name) as image/*."""
    mime = declared_type or mimetypes.guess_type(str(name))[0] or ""
    if not mime.startswith("image/"):
        logger.warning("Rejected %s (type %r)", name, mime or "unknown")
        raise ImageTypeError(TYPE_ERROR_MESSAGE)
    return mime


def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded RGBA image."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e


# ==============================================================================
# 2. SAMPLING
# ==============================================================================
def fit_size(width, height, bound):
    """Scale (width, height) so the larger side equals bound, keeping aspect."""
    aspect = width / height
    if width > height:
        target_w, target_h = bound, bound / aspect
    else:
        target_w, target_h = bound * aspect, bound
    return max(1, int(target_w)), max(1, int(target_h))


def extrusion_layers(config: Config = DEFAULT_CONFIG) -> np.ndarray:
    z_start = -config.depth / 2
    return z_start + config.z_step * np.arange(config.layers, dtype=np.float64)


def sample_image(image: Image.Image, config: Config = DEFAULT_CONFIG) -> PointCloud:
    """Convert a decoded image into an extruded point cloud."""
    width, height = fit_size(image.width, image.height, config.sample_size)
    resized = image.convert("RGBA").resize((width, height), resample=Image.Resampling.BILINEAR)
    pixels = np.asarray(resized, dtype=np.float64)

    # Stride scan from the top-left corner
    grid = pixels[::config.density, ::config.density]
    brightness = grid[..., :3].mean(axis=2)
    valid = (grid[..., 3] > config.alpha_min) & (brightness < config.brightness_max)

    rows, cols = np.nonzero(valid)
    xs = cols * config.density - width / 2
    ys = -(rows * config.density - height / 2)  # Flip Y for 3D coords

    # Every pixel becomes a column of points, raster order then Z
    layers = extrusion_layers(config)
    n = len(layers)
    points = np.empty((len(xs) * n, 3), dtype=np.float64)
    points[:, 0] = np.repeat(xs, n)
    points[:, 1] = np.repeat(ys, n)
    points[:, 2] = np.tile(layers, len(xs))

    logger.info(
        "Sampled %dx%d image on %dx%d grid: %d pixels -> %d points",
        image.width, image.height, width, height, len(xs), len(points),
    )
    return PointCloud(points)


def load_point_cloud(data: bytes, config: Config = DEFAULT_CONFIG) -> PointCloud:
    """Decode and sample in one go. Either a complete cloud or an exception."""
    return sample_image(decode_image(data), config)
