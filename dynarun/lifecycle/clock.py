"""Animation clock driving the spinner of running tasks."""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL = 0.1


class AnimationClock:
    """Recurring timer that advances the spinner frame and requests a redraw.

    The timer thread is created on the first ``start()`` and never again,
    even after ``stop()``. Ticks only change ``frame_index``; everything
    else happens in the ``on_tick`` callback.
    """

    def __init__(
        self,
        frame_count: int,
        on_tick: Callable[[], None],
        interval: float = DEFAULT_FRAME_INTERVAL,
    ):
        """Initialize the clock.

        Args:
            frame_count: Number of spinner frames to cycle through
            on_tick: Called after every frame advance
            interval: Seconds between ticks
        """
        if frame_count < 1:
            raise ValueError("frame_count must be at least 1")
        self.frame_index = 0
        self._frame_count = frame_count
        self._on_tick = on_tick
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def started(self) -> bool:
        return self._thread is not None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def advance(self) -> int:
        """Move to the next frame, wrapping to 0."""
        self.frame_index = (self.frame_index + 1) % self._frame_count
        return self.frame_index

    def tick(self) -> None:
        self.advance()
        self._on_tick()

    def start(self) -> None:
        """Start ticking. No-op if the timer was ever started or stopped."""
        if self._thread is not None or self.stopped:
            return
        self._thread = threading.Thread(target=self._run, name="dynarun-clock", daemon=True)
        self._thread.start()
        logger.debug("Animation clock started (%.3fs)", self._interval)

    def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        if self.stopped:
            return
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        logger.debug("Animation clock stopped at frame %d", self.frame_index)

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.tick()
