"""In-memory registry of per-task timer state"""
from typing import Dict, Iterator, List, Optional

from taskflow.features.timer.domain import TimerState


class TimerRegistry:
    """Holds at most one TimerState per task id. Only the engine writes to it."""

    def __init__(self):
        self._timers: Dict[str, TimerState] = {}

    def get(self, task_id: str) -> Optional[TimerState]:
        return self._timers.get(task_id)

    def put(self, state: TimerState) -> None:
        self._timers[state.task_id] = state

    def running(self) -> List[TimerState]:
        """Running timers; a list so callers may mutate states while iterating"""
        return [state for state in self._timers.values() if state.is_running]

    def __iter__(self) -> Iterator[TimerState]:
        return iter(list(self._timers.values()))
