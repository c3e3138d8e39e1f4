"""
Animation Clock
===============
Drives the per-frame update of the visible sketch.

Why is this file needed?
------------------------
1. Single loop: One QTimer on the GUI thread replaces the browser's
   animation-frame callback. Input slots and frame ticks run to completion
   one after another, so the shared state needs no locking.
2. Frame normalisation: The model advances in units of 60 Hz frames. A slow
   machine that misses ticks still animates at the intended speed (capped, so
   a stalled window does not jump forward).

Classes:
    AnimationClock: QTimer wrapper emitting `frame(float)`.
"""
import logging
import time

from PySide6.QtCore import QObject, QTimer, Signal

from quantumsketches.config import TARGET_FPS, MAX_FRAMES_PER_TICK

logger = logging.getLogger(__name__)


class AnimationClock(QObject):
    # Signal: number of elapsed 60 Hz frames since the previous tick
    frame = Signal(float)

    def __init__(self, fps: int = TARGET_FPS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._last_tick: float | None = None

        self.timer = QTimer(self)
        self.timer.timeout.connect(self._on_timeout)
        self.set_fps(fps)

    def set_fps(self, fps: int) -> None:
        """Update timer interval based on FPS."""
        if fps > 0:
            self.timer.setInterval(1000 // fps)

    def start(self) -> None:
        self._last_tick = None
        self.timer.start()
        logger.debug(f"Animation started ({self.timer.interval()} ms interval).")

    def stop(self) -> None:
        self.timer.stop()
        logger.debug("Animation stopped.")

    def is_running(self) -> bool:
        return self.timer.isActive()

    def _on_timeout(self) -> None:
        now = time.perf_counter()
        if self._last_tick is None:
            frames = 1.0
        else:
            frames = (now - self._last_tick) * TARGET_FPS
            frames = min(max(frames, 0.0), MAX_FRAMES_PER_TICK)
        self._last_tick = now
        self.frame.emit(frames)
