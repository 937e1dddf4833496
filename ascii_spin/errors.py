"""Exceptions raised while turning an uploaded file into a point cloud."""


class AsciiSpinError(Exception):
    """Base class for ascii_spin errors."""


class ImageTypeError(AsciiSpinError):
    """The uploaded file is not declared as an image."""


class ImageDecodeError(AsciiSpinError):
    """The image bytes could not be decoded into a raster."""
