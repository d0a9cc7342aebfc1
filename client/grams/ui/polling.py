import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PollingRefresher:
    """Calls ``refresh`` every ``interval`` seconds until stopped."""

    def __init__(self, refresh: Callable[[], Awaitable[Any]], interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._refresh = refresh
        self._interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.debug("Polling every %.1fs", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._refresh()
            except Exception as e:
                logger.error(f"Scheduled refresh failed: {e!r}")
