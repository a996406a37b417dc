"""Fixed-rate ticker that re-arms itself after each tick."""
import logging
import threading
from typing import Callable, Optional


class FixedRateTicker:
    """Runs ``callback`` every ``interval`` seconds on a background thread.

    The next tick is scheduled only after the current one has finished, so
    a slow tick pushes the schedule back instead of overlapping. Exceptions
    from the callback are logged and the ticker keeps going.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = 'ticker'):
        self.interval = interval
        self.callback = callback
        self.name = name
        self.logger = logging.getLogger('FaviconPong.ticker')
        self.tick_count = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        self.logger.info(f"Ticker '{self.name}' started ({1 / self.interval:.0f} Hz)")

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None

    def run_once(self) -> None:
        """Execute a single tick on the calling thread."""
        try:
            self.callback()
        except Exception as e:
            self.logger.error(f"Error in tick {self.tick_count}: {e}", exc_info=True)
        finally:
            self.tick_count += 1

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.run_once()
            self._stop_event.wait(self.interval)
