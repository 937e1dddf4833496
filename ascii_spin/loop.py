"""
Cooperative frame scheduling and the render loop state machine.

FrameScheduler plays the role of a display-driven animation callback:
callers request a frame, get a handle back, and may cancel it. RenderLoop
owns the rotation angle and the live point cloud and keeps at most one
continuation scheduled at any time.
"""

import enum
import itertools
import logging
import math
import time
from collections import OrderedDict
from typing import Callable, Optional

from ascii_spin.renderer import SceneRenderer
from ascii_spin.sampler import PointCloud

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi


class FrameScheduler:
    """requestAnimationFrame-style scheduler pumped from a single thread."""

    def __init__(self, fps=60, clock=time.monotonic, sleep=time.sleep):
        self.interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep
        self._ids = itertools.count(1)
        self._callbacks: "OrderedDict[int, Callable[[float], None]]" = OrderedDict()
        self._next_due: Optional[float] = None
        self.frames = 0

    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._callbacks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def step(self) -> int:
        """Run every callback requested before this step. Returns how many ran."""
        batch = list(self._callbacks.items())
        self._callbacks.clear()
        now = self._clock()
        for _, callback in batch:
            callback(now)
        if batch:
            self.frames += 1
        return len(batch)

    def run(self, max_frames: Optional[int] = None) -> None:
        """Pump frames at a steady cadence until nothing is pending or max_frames is hit."""
        self._next_due = self._clock()
        start = self.frames
        while self._callbacks:
            if max_frames is not None and self.frames - start >= max_frames:
                break
            delay = self._next_due - self._clock()
            if delay > 0:
                self._sleep(delay)
            self.step()
            # Missed frames are dropped, not replayed back to back
            self._next_due = max(self._next_due + self.interval, self._clock())


class LoopState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class RenderLoop:
    """Spins the live point cloud, publishing one text frame per tick."""

    def __init__(
        self,
        renderer: SceneRenderer,
        scheduler: FrameScheduler,
        on_frame: Callable[[str], None],
    ):
        self.renderer = renderer
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.angle = 0.0
        self.cloud = PointCloud.empty()
        self.state = LoopState.IDLE
        self._handle: Optional[int] = None

    def set_cloud(self, cloud: PointCloud) -> None:
        """Swap in a new cloud. Any scheduled frame of the old one is dropped."""
        self._cancel()
        self.cloud = cloud
        if cloud.is_empty:
            self.state = LoopState.IDLE
            logger.info("Empty point cloud, render loop idle")
            return
        self.state = LoopState.RUNNING
        self._schedule()
        logger.info("Render loop running with %d points", len(cloud))

    def start(self) -> None:
        if self.state is LoopState.RUNNING or self.cloud.is_empty:
            return
        self.state = LoopState.RUNNING
        self._schedule()

    def stop(self) -> None:
        self._cancel()
        self.state = LoopState.IDLE

    def render_frame(self) -> str:
        """Render the current cloud at the current angle without advancing."""
        return self.renderer.render(self.cloud, self.angle)

    def tick(self, timestamp: float = 0.0) -> None:
        self._handle = None
        if self.state is not LoopState.RUNNING:
            return
        try:
            self.on_frame(self.render_frame())
        finally:
            # Keep the continuation even if publishing failed
            self.angle = (self.angle + self.renderer.config.speed) % TWO_PI
            self._schedule()

    def _schedule(self):
        self._cancel()
        self._handle = self.scheduler.request_frame(self.tick)

    def _cancel(self):
        self.scheduler.cancel_frame(self._handle)
        self._handle = None
