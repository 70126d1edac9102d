# tests/conftest.py
# Shared fixtures: controllable clock, in-memory task store & a wired timer engine

from typing import Dict, List, Optional, Tuple

import pytest

from taskflow.events import ErrorEmitter, STORE_WRITE_ERROR
from taskflow.features.timer import PersistenceBridge, TimerEngine
from taskflow.models.task import PomodoroSettings, Task, TaskTimerUpdate

START = 1_700_000_000.0
USER_ID = "user-1"


class FakeClock:
    """Wall clock that only moves when told to"""

    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTaskStore:
    """In-memory stand-in for the Supabase task repository"""

    def __init__(self):
        self.tasks: Dict[str, Task] = {}
        self.writes: List[Tuple[str, dict]] = []
        self.fail_with: Optional[Exception] = None

    def add(self, task: Task) -> Task:
        self.tasks[task.id] = task
        return task

    def path_for(self, task_id: str) -> str:
        return f"tasks/{task_id}"

    async def update(self, id: str, data: TaskTimerUpdate) -> Optional[Task]:
        payload = data.model_dump(exclude_unset=True)
        self.writes.append((id, payload))
        if self.fail_with is not None:
            raise self.fail_with
        task = self.tasks.get(id)
        if task is None:
            return None
        updated = task.model_copy(update=payload)
        self.tasks[id] = updated
        return updated

    async def find_for_user(self, task_id: str, user_id: str) -> Optional[Task]:
        task = self.tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task

    def writes_for(self, task_id: str) -> List[dict]:
        return [payload for written_id, payload in self.writes if written_id == task_id]

    def time_spent_writes(self, task_id: str) -> List[int]:
        return [p["time_spent"] for p in self.writes_for(task_id) if "time_spent" in p]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FakeTaskStore()


@pytest.fixture
def emitter():
    return ErrorEmitter()


@pytest.fixture
def store_errors(emitter):
    errors = []
    emitter.on(STORE_WRITE_ERROR, errors.append)
    return errors


@pytest.fixture
def bridge(store, emitter):
    return PersistenceBridge(store, emitter=emitter)


@pytest.fixture
def engine(bridge, clock):
    return TimerEngine(USER_ID, bridge, clock=clock)


@pytest.fixture
def make_task(store):
    def _make(
        task_id: str = "task-1",
        time_spent: int = 0,
        pomodoro_settings: Optional[PomodoroSettings] = None,
        user_id: str = USER_ID,
    ) -> Task:
        return store.add(Task(
            id=task_id,
            user_id=user_id,
            name=f"Task {task_id}",
            time_spent=time_spent,
            pomodoro_settings=pomodoro_settings,
        ))

    return _make
