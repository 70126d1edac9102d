"""Per-user timer engines sharing one persistence bridge"""
import logging
import time
from typing import Callable, Dict, Optional

from taskflow.features.timer.engine import TimerEngine
from taskflow.features.timer.persistence import PersistenceBridge

logger = logging.getLogger(__name__)


class TimerSessions:
    """One TimerEngine per signed-in user, all ticked by the same driver"""

    def __init__(self, bridge: PersistenceBridge, clock: Callable[[], float] = time.time):
        self.bridge = bridge
        self._clock = clock
        self._engines: Dict[str, TimerEngine] = {}

    def engine_for(self, user_id: str) -> TimerEngine:
        engine = self._engines.get(user_id)
        if engine is None:
            engine = TimerEngine(user_id, self.bridge, clock=self._clock)
            self._engines[user_id] = engine
            logger.info(f"Timer session opened for user {user_id}")
        return engine

    def get(self, user_id: str) -> Optional[TimerEngine]:
        return self._engines.get(user_id)

    def tick_all(self) -> None:
        for engine in list(self._engines.values()):
            engine.tick()

    def flush_all(self) -> None:
        """Commit every running timer of every user (shutdown path)"""
        for engine in list(self._engines.values()):
            engine.flush()

    def sign_out(self, user_id: str) -> None:
        engine = self._engines.pop(user_id, None)
        if engine is not None:
            engine.sign_out()
            logger.info(f"Timer session closed for user {user_id}")

    def running_count(self) -> int:
        return sum(1 for engine in self._engines.values() if engine.has_running_timers)

    def __len__(self) -> int:
        return len(self._engines)
