"""Ties the sampler and render loop together behind one upload slot."""

import logging
from pathlib import Path
from typing import Callable, Optional

from ascii_spin.assets import default_image_bytes
from ascii_spin.config import DEFAULT_CONFIG, Config
from ascii_spin.errors import ImageDecodeError, ImageTypeError
from ascii_spin.loop import FrameScheduler, LoopState, RenderLoop
from ascii_spin.renderer import SceneRenderer
from ascii_spin.sampler import check_image_type, load_point_cloud

logger = logging.getLogger(__name__)

PLACEHOLDER = "Waiting for image..."


class Pipeline:
    """
    Single-image visualizer state.

    Attributes:
        frame: Last frame published by the render loop ("" before the first).
        error: User-facing message for the last failed load ("" when none).
        is_processing: True while an image is being decoded and sampled.
    """

    def __init__(
        self,
        config: Config = DEFAULT_CONFIG,
        scheduler: Optional[FrameScheduler] = None,
        on_frame: Optional[Callable[[str], None]] = None,
    ):
        self.config = config
        self.scheduler = scheduler or FrameScheduler(fps=config.fps)
        self.frame = ""
        self.error = ""
        self.is_processing = False
        self._on_frame = on_frame
        self.loop = RenderLoop(SceneRenderer(config), self.scheduler, self._publish)

    def _publish(self, frame: str) -> None:
        self.frame = frame
        if self._on_frame is not None:
            self._on_frame(frame)

    def load_default(self) -> bool:
        logger.info("Loading built-in default image")
        return self.load_bytes(default_image_bytes())

    def load_file(self, path, declared_type: Optional[str] = None) -> bool:
        """Validate, read and sample an uploaded file. Returns True on success."""
        path = Path(path)
        try:
            check_image_type(path.name, declared_type)
        except ImageTypeError as e:
            self.error = str(e)
            return False
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            self.error = f"Could not read {path.name}: {e.strerror or e}"
            return False
        return self.load_bytes(data)

    def load_bytes(self, data: bytes) -> bool:
        self.error = ""
        self.is_processing = True
        try:
            cloud = load_point_cloud(data, self.config)
        except ImageDecodeError as e:
            # The previous cloud, if any, keeps spinning
            logger.warning("%s", e)
            self.error = str(e)
            return False
        finally:
            self.is_processing = False
        self.loop.set_cloud(cloud)
        return True

    @property
    def running(self) -> bool:
        return self.loop.state is LoopState.RUNNING

    def display(self) -> str:
        """What the screen shows right now."""
        if not self.running or not self.frame:
            return PLACEHOLDER
        return self.frame

    def close(self) -> None:
        self.loop.stop()
