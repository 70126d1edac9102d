"""Fire-and-forget writes of timer lifecycle events to the task store"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Set

from taskflow.events import STORE_WRITE_ERROR, ErrorEmitter, StoreOperation, TaskStoreWriteError, error_emitter
from taskflow.models.task import Task, TaskStatus, TaskTimerUpdate

logger = logging.getLogger(__name__)


class TaskStore(Protocol):
    """The part of the task repository the timer engine writes through"""

    def path_for(self, task_id: str) -> str:
        ...

    async def update(self, id: str, data: TaskTimerUpdate) -> Optional[Task]:
        ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PersistenceBridge:
    """
    Turns timer lifecycle events into task store updates.

    Every write is scheduled on the running event loop and the caller returns
    immediately. Failures are published on the error channel; nothing is retried.
    Must be called from inside the event loop.
    """

    def __init__(
        self,
        store: TaskStore,
        emitter: ErrorEmitter = error_emitter,
        now: Callable[[], datetime] = _utc_now,
    ):
        self._store = store
        self._emitter = emitter
        self._now = now
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def mark_in_progress(self, task_id: str) -> None:
        self.commit(task_id, status=TaskStatus.IN_PROGRESS)

    def commit(
        self,
        task_id: str,
        status: Optional[TaskStatus] = None,
        time_spent: Optional[int] = None,
        report_errors: bool = True,
    ) -> None:
        """Schedule a partial update; only the given fields are written"""
        fields = {"updated_at": self._now()}
        if status is not None:
            fields["status"] = status
        if time_spent is not None:
            fields["time_spent"] = max(0, time_spent)

        update = TaskTimerUpdate(**fields)
        task = asyncio.get_running_loop().create_task(self._write(task_id, update, report_errors))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, task_id: str, update: TaskTimerUpdate, report_errors: bool) -> None:
        payload = update.model_dump(exclude_unset=True, mode="json")
        try:
            result = await self._store.update(task_id, update)
            if result is None:
                raise LookupError("no matching task (missing or access denied)")
            logger.debug(f"Task {task_id} updated: {payload}")
        except Exception as e:
            if not report_errors:
                # Page is going away; nobody is left to act on the failure
                logger.warning(f"Write for task {task_id} failed during unload: {e}")
                return
            self._emitter.emit(
                STORE_WRITE_ERROR,
                TaskStoreWriteError(
                    path=self._store.path_for(task_id),
                    operation=StoreOperation.UPDATE,
                    request_payload=payload,
                    cause=e,
                ),
            )

    async def drain(self) -> None:
        """Wait for every scheduled write to settle"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
