""" Periodic Task: the refresh loop shared by Refresher and Swapper. """
import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from ..config import RefreshConfig

logger = logging.getLogger(__name__)


class PeriodicTask(ABC):
    """
    Runs ``_tick`` every ``config.period`` until a stop event is set.

    Each instance owns its own stop event and, once started, its own thread.
    A tick in progress is never interrupted; setting the stop event only
    skips the next one.
    """

    def __init__(self, config: RefreshConfig):
        self.config = config
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @abstractmethod
    def _tick(self) -> None:
        """One refresh; must log its own failures rather than raise."""

    def run(self, stop_event: threading.Event) -> None:
        """Block, ticking once per period, until ``stop_event`` is set."""
        while not stop_event.wait(self.config.period_seconds):
            self._tick()

    async def arun(self, stop_event: asyncio.Event) -> None:
        """Asyncio version of ``run``; ticks execute in a worker thread."""
        while True:
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.config.period_seconds)
                return
            except asyncio.TimeoutError:
                await asyncio.to_thread(self._tick)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> threading.Thread:
        """Run the loop on a dedicated daemon thread."""
        if self.running:
            raise RuntimeError(f"{type(self).__name__} is already started")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self.run,
            args=(self._stop_event,),
            name=f"awscreds-{type(self).__name__.lower()}",
            daemon=True,
        )
        self._thread.start()
        logger.debug(f"Started {self._thread.name} with period {self.config.period}")
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Signal the loop to stop and wait for its thread to exit.

        If ``timeout`` expires while a tick is still running, the thread is
        kept, so ``start`` keeps refusing until the loop has actually exited.
        """
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"{self._thread.name} is still finishing a refresh")
            return

        logger.debug(f"Stopped {self._thread.name}")
        self._thread = None
        self._stop_event = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
