"""Downstream consumer of task store write failures"""
import logging
from collections import deque
from typing import Deque, List

from taskflow import config
from taskflow.events.error_emitter import STORE_WRITE_ERROR, ErrorEmitter
from taskflow.events.errors import TaskStoreWriteError

logger = logging.getLogger(__name__)


class StoreErrorListener:
    """Logs failed task store writes and keeps the most recent ones for inspection"""

    def __init__(self, max_recent: int = 20):
        self._recent: Deque[TaskStoreWriteError] = deque(maxlen=max_recent)
        self.failure_count = 0

    def attach(self, emitter: ErrorEmitter) -> None:
        emitter.on(STORE_WRITE_ERROR, self)

    def detach(self, emitter: ErrorEmitter) -> None:
        emitter.off(STORE_WRITE_ERROR, self)

    def __call__(self, error: TaskStoreWriteError) -> None:
        self.failure_count += 1
        self._recent.append(error)
        if config.is_development():
            logger.error(str(error))
        else:
            logger.error(f"Task store {error.operation.value} failed for {error.path}: {error.cause}")

    @property
    def recent(self) -> List[TaskStoreWriteError]:
        return list(self._recent)
