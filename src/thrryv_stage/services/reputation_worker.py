"""Background reputation recomputation.

Moderation decisions request a recompute for the affected author instead of
running it inline. Requests are queued and processed by a single worker task
owned by the application; each job gets its own database session and is
retried on storage failures, so delivery is at-least-once. Running a job
twice is harmless because a recompute re-derives the score from raw data.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from thrryv_stage.core.errors import NotFoundError, StorageError
from thrryv_stage.core.settings import settings
from thrryv_stage.services.reputation import ReputationEngine, ReputationResult

# Configure logger for this module
logger = logging.getLogger(__name__)

RecomputeDispatcher = Callable[[str], None]


class ReputationRecomputeWorker:
    """Consumes recompute requests from an in-process queue."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        max_attempts: int | None = None,
        retry_delay_seconds: float | None = None,
    ) -> None:
        """Initialize the worker.

        Args:
            session_factory: Callable returning a fresh session per job.
            max_attempts: Attempts per job before it is dropped.
            retry_delay_seconds: Base delay between attempts, scaled by attempt number.
        """
        self.session_factory = session_factory
        self.max_attempts = max(
            1, settings.recompute_max_attempts if max_attempts is None else max_attempts
        )
        self.retry_delay_seconds = max(
            0.0,
            settings.recompute_retry_delay_seconds
            if retry_delay_seconds is None
            else retry_delay_seconds,
        )
        self._queue: asyncio.Queue[str | None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background processing loop."""

        if self.running:
            return

        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Process queued jobs, then stop the loop."""

        if self._task is None or self._queue is None:
            return

        await self._queue.put(None)
        await self._task
        self._task = None

    def enqueue(self, user_id: str) -> None:
        """Request a recompute for `user_id`; callable from any thread.

        Raises:
            RuntimeError: If the worker has not been started.
        """
        if not self.running or self._loop is None or self._queue is None:
            raise RuntimeError("Reputation recompute worker is not running")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, user_id)

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()

    async def _run(self) -> None:
        assert self._queue is not None
        while True:
            user_id = await self._queue.get()
            try:
                if user_id is None:
                    return
                await self._process(user_id)
            finally:
                self._queue.task_done()

    async def _process(self, user_id: str) -> None:
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await asyncio.to_thread(self._recompute_once, user_id)
            except NotFoundError:
                logger.warning("Skipping reputation recompute for missing user %s", user_id)
                return
            except StorageError as e:
                logger.warning(
                    "Reputation recompute for %s failed (attempt %d/%d): %s",
                    user_id,
                    attempt,
                    self.max_attempts,
                    e,
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay_seconds * attempt)
                continue
            except Exception:
                logger.error(
                    "Unexpected error recomputing reputation for %s", user_id, exc_info=True
                )
                return

            logger.debug("Background recompute for %s settled at %.2f", user_id, result.new_score)
            return

        logger.error(
            "Giving up on reputation recompute for %s after %d attempts",
            user_id,
            self.max_attempts,
        )

    def _recompute_once(self, user_id: str) -> ReputationResult:
        session = self.session_factory()
        try:
            return ReputationEngine(session).recompute(user_id)
        finally:
            session.close()
