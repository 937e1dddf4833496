"""Spin an image as an ASCII-art point cloud."""

from ascii_spin.config import Config
from ascii_spin.errors import AsciiSpinError, ImageDecodeError, ImageTypeError
from ascii_spin.loop import FrameScheduler, LoopState, RenderLoop
from ascii_spin.renderer import SceneRenderer, blank_frame
from ascii_spin.sampler import Point, PointCloud, load_point_cloud, sample_image

__all__ = [
    "AsciiSpinError",
    "Config",
    "FrameScheduler",
    "ImageDecodeError",
    "ImageTypeError",
    "LoopState",
    "Point",
    "PointCloud",
    "RenderLoop",
    "SceneRenderer",
    "blank_frame",
    "load_point_cloud",
    "sample_image",
]
