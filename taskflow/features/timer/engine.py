"""Timer engine - per-task stopwatch, countdown and Pomodoro timers"""

import logging
import time
from typing import Callable, List, Optional

from taskflow.features.timer.domain import (
    PomodoroPhase,
    TimerMode,
    TimerSnapshot,
    TimerState,
)
from taskflow.features.timer.notifications import InAppNotifier
from taskflow.features.timer.persistence import PersistenceBridge
from taskflow.features.timer.registry import TimerRegistry
from taskflow.features.timer.title import TitleAnnouncer
from taskflow.models.task import Task, TaskStatus, resolve_pomodoro_settings
from taskflow.utils.time_format import format_title

logger = logging.getLogger(__name__)


class TimerEngine:
    """
    Timer state for one user session.

    All methods are synchronous and must run on the event loop thread: they update
    in-memory state and return, while task store writes happen in the background
    through the PersistenceBridge. Calls for unknown tasks and calls made while signed
    out are silent no-ops.
    """

    def __init__(
        self,
        user_id: Optional[str],
        bridge: PersistenceBridge,
        notifier: Optional[InAppNotifier] = None,
        title: Optional[TitleAnnouncer] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.user_id = user_id
        self._registry = TimerRegistry()
        self._bridge = bridge
        self._notifier = notifier or InAppNotifier()
        self._title = title or TitleAnnouncer()
        self._clock = clock

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def title(self) -> TitleAnnouncer:
        return self._title

    @property
    def notifier(self) -> InAppNotifier:
        return self._notifier

    @property
    def has_running_timers(self) -> bool:
        return bool(self._registry.running())

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------

    def start_timer(self, task: Task, mode: TimerMode, duration_minutes: float = 0) -> None:
        """
        Start (or resume) the timer for a task.

        Any other running timer is paused first. Resuming in the same mode keeps the
        remaining time, Pomodoro phase and cycle; a new mode reseeds the timer.

        Args:
            task: Task as currently persisted (supplies time spent and Pomodoro settings)
            mode: Timer mode to run in
            duration_minutes: Countdown length, used only for countdown mode
        """
        if not self.is_authenticated:
            return

        now = self._clock()
        for running in self._registry.running():
            self._pause(running, now, is_unloading=False)

        existing = self._registry.get(task.id)
        if existing is not None and existing.mode == mode:
            state = existing
            if state.mode == TimerMode.COUNTDOWN and state.time <= 0:
                # Finished countdown: start over at the requested (or previous) length
                length = int(duration_minutes * 60) or state.initial_duration
                state.time = length
                state.initial_duration = length
        else:
            state = self._seed(task, mode, duration_minutes, existing)

        state.start_time = now
        state.is_running = True
        self._registry.put(state)

        self._bridge.mark_in_progress(task.id)

        self._title.focus(task.id)
        self._title.announce(format_title(state.live_time(now), self._title.neutral))

        logger.info(f"Timer started: task {task.id} ({mode.value}, time={state.time}s)")

    def pause_timer(self, task_id: str, is_unloading: bool = False) -> None:
        """
        Pause a running timer and commit the elapsed time.

        Args:
            task_id: Task whose timer to pause
            is_unloading: The page is going away; write failures are not reported
        """
        if not self.is_authenticated:
            return

        state = self._registry.get(task_id)
        if state is None or not state.is_running:
            return

        self._pause(state, self._clock(), is_unloading)

    def reset_timer(self, task_id: str) -> None:
        """Stop a timer and put it back to its starting value for its mode"""
        if not self.is_authenticated:
            return

        state = self._registry.get(task_id)
        if state is None:
            return

        was_running = state.is_running
        time_spent: Optional[int] = None

        if state.mode == TimerMode.STOPWATCH:
            state.initial_time_spent = 0
            state.time = 0
            time_spent = 0
        elif state.mode == TimerMode.COUNTDOWN:
            state.time = state.initial_duration
        else:
            if was_running and state.pomodoro_state == PomodoroPhase.WORK:
                state.initial_time_spent = state.live_time_spent(self._clock())
                time_spent = state.initial_time_spent
            work_seconds = state.pomodoro_settings.work_duration * 60
            state.time = work_seconds
            state.initial_duration = work_seconds
            state.pomodoro_state = PomodoroPhase.WORK
            state.current_cycle = 1

        state.is_running = False
        state.start_time = None

        if self._title.is_focused(task_id):
            self._title.clear()

        if was_running or time_spent is not None:
            self._bridge.commit(
                task_id,
                status=TaskStatus.PENDING if was_running else None,
                time_spent=time_spent,
            )

        logger.info(f"Timer reset: task {task_id} ({state.mode.value})")

    def get_timer_state(self, task_id: str) -> Optional[TimerSnapshot]:
        """Current view of a task's timer, derived at call time; never mutates"""
        state = self._registry.get(task_id)
        if state is None:
            return None
        return TimerSnapshot.from_state(state, self._clock())

    @property
    def timers(self) -> List[TimerSnapshot]:
        now = self._clock()
        return [TimerSnapshot.from_state(state, now) for state in self._registry]

    def handle_visibility_change(self, hidden: bool) -> None:
        """Commit every running timer when the page is hidden or closed"""
        if hidden:
            self.flush()

    def flush(self) -> None:
        """Pause all running timers as part of an unload"""
        for state in self._registry.running():
            self.pause_timer(state.task_id, is_unloading=True)

    def sign_out(self) -> None:
        self.flush()
        self.user_id = None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance running timers: expire countdowns, switch Pomodoro phases, update the title"""
        now = self._clock()
        title_set = False

        for state in self._registry.running():
            if state.counts_down and state.time - state.elapsed(now) <= 0:
                if state.mode == TimerMode.POMODORO:
                    self._advance_pomodoro(state, now)
                else:
                    self._finish_countdown(state)

            if state.is_running and self._title.is_focused(state.task_id):
                self._title.announce(format_title(state.live_time(now), self._title.neutral))
                title_set = True

        if not title_set:
            self._title.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _seed(
        self,
        task: Task,
        mode: TimerMode,
        duration_minutes: float,
        existing: Optional[TimerState],
    ) -> TimerState:
        # In-memory baseline wins over the task snapshot, which may predate pending writes
        baseline = existing.initial_time_spent if existing is not None else task.time_spent
        settings = resolve_pomodoro_settings(task.pomodoro_settings)

        if mode == TimerMode.STOPWATCH:
            time_value = baseline
            duration = 0
        elif mode == TimerMode.COUNTDOWN:
            time_value = duration = int(duration_minutes * 60)
        else:
            time_value = duration = settings.work_duration * 60

        return TimerState(
            task_id=task.id,
            mode=mode,
            time=time_value,
            initial_time_spent=baseline,
            initial_duration=duration,
            pomodoro_settings=settings,
        )

    def _pause(self, state: TimerState, now: float, is_unloading: bool) -> None:
        elapsed = state.elapsed(now)
        time_spent: Optional[int] = None

        if state.accrues_time_spent:
            state.initial_time_spent = state.live_time_spent(now)
            time_spent = state.initial_time_spent

        if state.mode == TimerMode.STOPWATCH:
            state.time = state.initial_time_spent
        else:
            state.time = max(0, state.time - elapsed)

        state.is_running = False
        state.start_time = None

        if self._title.is_focused(state.task_id):
            self._title.clear()

        self._bridge.commit(
            state.task_id,
            status=TaskStatus.PENDING,
            time_spent=time_spent,
            report_errors=not is_unloading,
        )

        logger.info(f"Timer paused: task {state.task_id} after {elapsed}s (time={state.time}s)")

    def _finish_countdown(self, state: TimerState) -> None:
        state.time = 0
        state.is_running = False
        state.start_time = None

        if self._title.is_focused(state.task_id):
            self._title.clear()

        self._notifier.notify("Timer Finished!", "The timer for your task has ended.", task_id=state.task_id)
        self._bridge.commit(state.task_id, status=TaskStatus.PENDING)

        logger.info(f"Countdown finished: task {state.task_id}")

    def _advance_pomodoro(self, state: TimerState, now: float) -> None:
        """
        Move to the next Pomodoro phase.

        A finished work segment is credited with what was left of its nominal length
        when the segment last started, not with the observed tick count.
        """
        settings = state.pomodoro_settings

        if state.pomodoro_state == PomodoroPhase.WORK:
            state.initial_time_spent += state.time
            completed_cycle = state.current_cycle
            state.current_cycle += 1

            if completed_cycle % settings.cycles == 0:
                next_phase = PomodoroPhase.LONG_BREAK
                minutes = settings.long_break_duration
                title = "Long Break Time!"
            else:
                next_phase = PomodoroPhase.SHORT_BREAK
                minutes = settings.short_break_duration
                title = "Short Break Time!"
            description = f"Time for a {minutes}-minute break."

            self._bridge.commit(
                state.task_id,
                status=TaskStatus.IN_PROGRESS,
                time_spent=state.initial_time_spent,
            )
        else:
            next_phase = PomodoroPhase.WORK
            minutes = settings.work_duration
            title = "Back to Work!"
            description = f"Starting a new {minutes}-minute work session."

        duration = minutes * 60
        state.pomodoro_state = next_phase
        state.time = duration
        state.initial_duration = duration
        state.start_time = now

        self._notifier.notify(title, description, task_id=state.task_id)
        logger.info(f"Pomodoro phase changed: task {state.task_id} -> {next_phase.value} (cycle {state.current_cycle})")
