"""Refresh scheduler re-running portfolio fetch cycles on a timer and on refocus."""
import asyncio
import logging
from typing import Optional
from portfolio.application.portfolio_service import PortfolioService
from portfolio.application.visibility import PageVisibility
from portfolio.domain.models import RefreshMetrics


logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SECONDS = 300.0


class RefreshScheduler:
    """Owns the refresh timer and the visibility subscription of one view.

    Resources are acquired in `start()` and released in `stop()`; use the
    scheduler as an async context manager to scope them. Only one fetch
    cycle runs at a time. Triggers arriving during a cycle are coalesced
    into a single follow-up cycle.
    """

    def __init__(
        self,
        service: PortfolioService,
        interval_seconds: float = REFRESH_INTERVAL_SECONDS,
        visibility: Optional[PageVisibility] = None
    ):
        """Initialize refresh scheduler.

        Args:
            service: Portfolio service whose cycles are triggered
            interval_seconds: Period of the recurring refresh
            visibility: Page visibility to listen to, if any
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self._service = service
        self._interval = interval_seconds
        self._visibility = visibility
        self._running = False
        self._timer_task: Optional[asyncio.Task] = None
        self._cycle_task: Optional[asyncio.Task] = None
        self._pending_trigger: Optional[str] = None
        self._cycles_completed = 0
        self._last_metrics: Optional[RefreshMetrics] = None
        self._cycle_done = asyncio.Condition()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def cycles_completed(self) -> int:
        return self._cycles_completed

    @property
    def last_metrics(self) -> Optional[RefreshMetrics]:
        return self._last_metrics

    async def start(self) -> None:
        """Subscribe to visibility, start the timer and run the initial cycle."""
        if self._running:
            return
        self._running = True
        if self._visibility is not None:
            self._visibility.add_listener(self._on_visibility_change)
        self._timer_task = asyncio.create_task(self._run_timer())
        logger.info(f"Refresh scheduler started (interval: {self._interval:.0f} seconds)")
        self.request_refresh("initial")

    async def stop(self) -> None:
        """Release the timer and listener and abort any in-flight cycle."""
        if not self._running:
            return
        self._running = False
        if self._visibility is not None:
            self._visibility.remove_listener(self._on_visibility_change)
        self._pending_trigger = None

        for task in (self._timer_task, self._cycle_task):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._timer_task = None
        self._cycle_task = None
        async with self._cycle_done:
            self._cycle_done.notify_all()
        logger.info("Refresh scheduler stopped")

    def request_refresh(self, trigger: str = "manual") -> None:
        """Trigger a fetch cycle, or queue one if a cycle is in flight."""
        if not self._running:
            logger.warning(f"Ignoring refresh ({trigger}): scheduler is not running")
            return
        if self._cycle_task is not None and not self._cycle_task.done():
            logger.warning(f"Refresh ({trigger}) requested during an active cycle; queued")
            self._pending_trigger = trigger
            return
        self._cycle_task = asyncio.create_task(self._run_cycles(trigger))
        self._cycle_task.add_done_callback(self._log_cycle_failure)

    async def wait_idle(self) -> None:
        """Wait until no cycle is running or queued."""
        while self._cycle_task is not None and not self._cycle_task.done():
            await asyncio.shield(self._cycle_task)

    async def wait_for_cycles(self, count: int) -> None:
        """Wait until at least `count` cycles have completed.

        Returns early when the scheduler is not running, including when
        `stop()` is called while waiting.
        """
        async with self._cycle_done:
            await self._cycle_done.wait_for(
                lambda: self._cycles_completed >= count or not self._running
            )

    async def _run_cycles(self, trigger: str) -> None:
        next_trigger: Optional[str] = trigger
        while next_trigger is not None:
            self._last_metrics = await self._service.refresh(next_trigger)
            self._cycles_completed += 1
            async with self._cycle_done:
                self._cycle_done.notify_all()
            next_trigger, self._pending_trigger = self._pending_trigger, None

    @staticmethod
    def _log_cycle_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Refresh cycle crashed", exc_info=task.exception())

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.request_refresh("interval")

    def _on_visibility_change(self, hidden: bool) -> None:
        if not hidden:
            self.request_refresh("visibility")

    async def __aenter__(self) -> "RefreshScheduler":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
