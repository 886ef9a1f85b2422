"""Terminal session: cursor visibility and cleanup on exit or termination."""

import atexit
import logging
import os
import signal
import threading
from typing import Any, Callable, Optional

from ..formatters import OutputFormatter

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class TerminalSession:
    """Scoped ownership of the terminal for one run.

    ``open()`` hides the cursor and arranges for ``dispose()`` to run at
    interpreter exit and on SIGINT/SIGTERM/SIGHUP. ``dispose()`` runs the
    cleanup callback, shows the cursor again and restores the previous
    signal handlers. It is idempotent, so every exit path can call it.
    """

    def __init__(
        self,
        output: OutputFormatter,
        on_dispose: Optional[Callable[[], None]] = None,
        install_signal_handlers: bool = True,
    ):
        self._output = output
        self._on_dispose = on_dispose
        self._install_signal_handlers = install_signal_handlers
        self._previous_handlers: dict[int, Any] = {}
        self._opened = False
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def open(self) -> None:
        if self._opened:
            return
        self._opened = True
        self._output.show_cursor(False)
        atexit.register(self.dispose)

        # Signal handlers can only be installed from the main thread
        if self._install_signal_handlers and threading.current_thread() is threading.main_thread():
            for signum in HANDLED_SIGNALS:
                self._previous_handlers[signum] = signal.getsignal(signum)
                signal.signal(signum, self._handle_signal)

    def dispose(self) -> None:
        """Stop animation, restore the cursor and the previous signal handlers."""
        if self._disposed:
            return
        self._disposed = True

        if self._on_dispose is not None:
            self._on_dispose()

        if self._opened:
            self._output.show_cursor(True)
            self._output.drain()
            atexit.unregister(self.dispose)

        if self._previous_handlers and threading.current_thread() is threading.main_thread():
            for signum, handler in self._previous_handlers.items():
                signal.signal(signum, handler)
            self._previous_handlers.clear()

    def _handle_signal(self, signum: int, frame: Any) -> None:
        logger.debug("Received signal %d, restoring terminal", signum)
        previous = self._previous_handlers.get(signum, signal.SIG_DFL)
        self.dispose()

        if callable(previous):
            previous(signum, frame)
        elif previous != signal.SIG_IGN:
            # Re-deliver with the default disposition so the process terminates as expected
            signal.signal(signum, signal.SIG_DFL)
            os.kill(os.getpid(), signum)

    def __enter__(self) -> "TerminalSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()
