# tests/unit/test_timer_tick.py
# Unit tests for tick-driven behaviour: countdown expiry, Pomodoro phase machine & title updates

from taskflow.features.timer import PomodoroPhase, TimerMode
from taskflow.models.task import PomodoroSettings, TaskStatus

SHORT_SETTINGS = PomodoroSettings(
    work_duration=1,
    short_break_duration=1,
    long_break_duration=2,
    cycles=4,
)


def _run_ticks(engine, clock, seconds):
    for _ in range(seconds):
        clock.advance(1)
        engine.tick()


# * Countdown expiry
class TestCountdownExpiry:

    async def test_auto_stops_once_at_zero(self, engine, make_task, clock, bridge, store):
        task = make_task()
        engine.start_timer(task, TimerMode.COUNTDOWN, duration_minutes=1)

        _run_ticks(engine, clock, 59)
        assert engine.get_timer_state(task.id).is_running is True

        _run_ticks(engine, clock, 6)
        await bridge.drain()

        state = engine.get_timer_state(task.id)
        assert state.time == 0
        assert state.is_running is False
        assert state.start_time is None

        finished = [n for n in engine.notifier.pending() if n.title == "Timer Finished!"]
        assert len(finished) == 1
        assert finished[0].task_id == task.id
        assert store.writes_for(task.id)[-1]["status"] == TaskStatus.PENDING
        assert store.time_spent_writes(task.id) == []

    async def test_expiry_restores_title(self, engine, make_task, clock):
        task = make_task()
        engine.start_timer(task, TimerMode.COUNTDOWN, duration_minutes=1)

        _run_ticks(engine, clock, 60)

        assert engine.title.title == "TaskFlow"
        assert engine.title.focused_task_id is None

    async def test_late_tick_still_expires(self, engine, make_task, clock):
        task = make_task()
        engine.start_timer(task, TimerMode.COUNTDOWN, duration_minutes=1)

        clock.advance(600)
        engine.tick()

        assert engine.get_timer_state(task.id).time == 0
        assert len(engine.notifier.pending()) == 1


# * Pomodoro phase machine
class TestPomodoroTransitions:

    async def test_fourth_work_segment_leads_to_long_break(self, engine, make_task, clock):
        task = make_task(pomodoro_settings=SHORT_SETTINGS)
        engine.start_timer(task, TimerMode.POMODORO)

        breaks = []
        for _ in range(4):
            _run_ticks(engine, clock, 60)
            state = engine.get_timer_state(task.id)
            breaks.append(state.pomodoro_state)
            _run_ticks(engine, clock, state.initial_duration)
            assert engine.get_timer_state(task.id).pomodoro_state == PomodoroPhase.WORK

        assert breaks == [
            PomodoroPhase.SHORT_BREAK,
            PomodoroPhase.SHORT_BREAK,
            PomodoroPhase.SHORT_BREAK,
            PomodoroPhase.LONG_BREAK,
        ]
        assert engine.get_timer_state(task.id).current_cycle == 5

    async def test_work_completion_credits_nominal_duration(self, engine, make_task, clock, store, bridge):
        task = make_task(time_spent=100, pomodoro_settings=SHORT_SETTINGS)
        engine.start_timer(task, TimerMode.POMODORO)

        # detected three seconds late; still credited 60s
        clock.advance(63)
        engine.tick()
        await bridge.drain()

        state = engine.get_timer_state(task.id)
        assert state.pomodoro_state == PomodoroPhase.SHORT_BREAK
        assert state.initial_time_spent == 160
        assert state.time == 60
        assert state.initial_duration == 60
        assert state.start_time == clock.now
        assert state.is_running is True
        assert store.time_spent_writes(task.id) == [160]
        assert store.writes_for(task.id)[-1]["status"] == TaskStatus.IN_PROGRESS

    async def test_paused_work_segment_is_not_double_counted(self, engine, make_task, clock, store, bridge):
        task = make_task(time_spent=0, pomodoro_settings=SHORT_SETTINGS)
        engine.start_timer(task, TimerMode.POMODORO)
        clock.advance(20)
        engine.pause_timer(task.id)
        engine.start_timer(task, TimerMode.POMODORO)

        _run_ticks(engine, clock, 40)
        await bridge.drain()

        assert store.time_spent_writes(task.id) == [20, 60]

    async def test_break_completion_does_not_touch_durable_time(self, engine, make_task, clock, store, bridge):
        task = make_task(pomodoro_settings=SHORT_SETTINGS)
        engine.start_timer(task, TimerMode.POMODORO)

        _run_ticks(engine, clock, 60)
        _run_ticks(engine, clock, 60)
        await bridge.drain()

        state = engine.get_timer_state(task.id)
        assert state.pomodoro_state == PomodoroPhase.WORK
        assert state.current_cycle == 2
        assert state.time == 60
        assert store.time_spent_writes(task.id) == [60]

    async def test_transition_notifications(self, engine, make_task, clock):
        task = make_task(pomodoro_settings=SHORT_SETTINGS)
        engine.start_timer(task, TimerMode.POMODORO)

        _run_ticks(engine, clock, 120)

        messages = [(n.title, n.description) for n in engine.notifier.drain()]
        assert messages == [
            ("Short Break Time!", "Time for a 1-minute break."),
            ("Back to Work!", "Starting a new 1-minute work session."),
        ]

    async def test_single_cycle_setting_always_long_break(self, engine, make_task, clock):
        settings = SHORT_SETTINGS.model_copy(update={"cycles": 1})
        task = make_task(pomodoro_settings=settings)
        engine.start_timer(task, TimerMode.POMODORO)

        _run_ticks(engine, clock, 60)

        assert engine.get_timer_state(task.id).pomodoro_state == PomodoroPhase.LONG_BREAK
        assert engine.get_timer_state(task.id).time == 120


# * Title surface during ticks
class TestTitle:

    async def test_focused_stopwatch_is_mirrored(self, engine, make_task, clock):
        task = make_task(time_spent=60)
        engine.start_timer(task, TimerMode.STOPWATCH)

        _run_ticks(engine, clock, 5)

        assert engine.title.title == "00:01:05 - TaskFlow"

    async def test_neutral_title_is_not_rewritten(self, engine, make_task, clock, monkeypatch):
        task = make_task()
        engine.start_timer(task, TimerMode.STOPWATCH)
        engine.pause_timer(task.id)

        surface = engine.title.surface
        written = []
        original_set = surface.set
        monkeypatch.setattr(surface, "set", lambda value: (written.append(value), original_set(value)))

        for _ in range(5):
            engine.tick()

        assert engine.title.title == "TaskFlow"
        assert written == []

    async def test_stopwatch_has_no_expiry(self, engine, make_task, clock):
        task = make_task()
        engine.start_timer(task, TimerMode.STOPWATCH)

        clock.advance(10 * 3600)
        engine.tick()

        assert engine.get_timer_state(task.id).is_running is True
        assert engine.get_timer_state(task.id).time == 36000
        assert engine.notifier.pending() == []
