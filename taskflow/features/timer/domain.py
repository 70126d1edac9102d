"""Domain models for the timer feature"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from taskflow.models.task import PomodoroSettings, DEFAULT_POMODORO_SETTINGS


class TimerMode(str, Enum):
    """How a timer counts"""
    STOPWATCH = "stopwatch"
    COUNTDOWN = "countdown"
    POMODORO = "pomodoro"


class PomodoroPhase(str, Enum):
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class TimerState(BaseModel):
    """
    Per-task timer state.

    `time` is remaining seconds for countdown/pomodoro and total elapsed seconds for
    stopwatch. While running it is only exact at `start_time`; use live_time() for the
    current value.
    """
    task_id: str
    mode: TimerMode
    is_running: bool = False
    time: int = Field(0, ge=0)
    start_time: Optional[float] = None  # epoch seconds
    initial_time_spent: int = Field(0, ge=0)
    initial_duration: int = Field(0, ge=0)
    pomodoro_state: PomodoroPhase = PomodoroPhase.WORK
    current_cycle: int = Field(1, ge=1)
    pomodoro_settings: PomodoroSettings = Field(default_factory=lambda: DEFAULT_POMODORO_SETTINGS.model_copy())

    @property
    def counts_down(self) -> bool:
        return self.mode in (TimerMode.COUNTDOWN, TimerMode.POMODORO)

    @property
    def accrues_time_spent(self) -> bool:
        """Whether running time is credited to the task's durable time spent"""
        if self.mode == TimerMode.STOPWATCH:
            return True
        return self.mode == TimerMode.POMODORO and self.pomodoro_state == PomodoroPhase.WORK

    def elapsed(self, now: float) -> int:
        """Whole seconds since the current running segment began"""
        if not self.is_running or self.start_time is None:
            return 0
        return max(0, math.floor(now - self.start_time))

    def live_time(self, now: float) -> int:
        if not self.is_running:
            return self.time
        if self.mode == TimerMode.STOPWATCH:
            return self.initial_time_spent + self.elapsed(now)
        return max(0, self.time - self.elapsed(now))

    def live_time_spent(self, now: float) -> int:
        if not self.is_running or not self.accrues_time_spent:
            return self.initial_time_spent
        elapsed = self.elapsed(now)
        if self.mode == TimerMode.POMODORO:
            # A work segment never credits more than what was left of it
            elapsed = min(elapsed, self.time)
        return self.initial_time_spent + elapsed


def progress_percent(mode: TimerMode, time: int, initial_duration: int) -> float:
    """Share of the current countdown phase already consumed, 0-100"""
    if mode == TimerMode.STOPWATCH or initial_duration <= 0:
        return 0.0
    return min(100.0, max(0.0, 100 - (time / initial_duration) * 100))


class TimerSnapshot(TimerState):
    """Read-only view of a timer with values derived at read time"""
    time_spent: int = 0
    progress_percent: float = 0.0

    @classmethod
    def from_state(cls, state: TimerState, now: float) -> "TimerSnapshot":
        time = state.live_time(now)
        return cls(
            **state.model_dump(exclude={"time"}),
            time=time,
            time_spent=state.live_time_spent(now),
            progress_percent=progress_percent(state.mode, time, state.initial_duration),
        )
