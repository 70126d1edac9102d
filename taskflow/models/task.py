"""Task domain model"""
from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class TaskType(str, Enum):
    TASK = "task"
    HABIT = "habit"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskPeriod(str, Enum):
    """Built-in time-of-day buckets"""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    ANYTIME = "Anytime"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class PomodoroSettings(BaseModel):
    """Pomodoro cycle configuration (durations in minutes)"""
    work_duration: int = Field(25, gt=0)
    short_break_duration: int = Field(5, gt=0)
    long_break_duration: int = Field(15, gt=0)
    cycles: int = Field(4, ge=1)


DEFAULT_POMODORO_SETTINGS = PomodoroSettings()


def resolve_pomodoro_settings(settings: Optional[PomodoroSettings]) -> PomodoroSettings:
    """Return the task's own settings, or a copy of the global defaults when absent"""
    if settings is None:
        return DEFAULT_POMODORO_SETTINGS.model_copy()
    return settings.model_copy()


class Task(BaseModel):
    """Complete task model from database"""
    id: str
    user_id: str
    name: str
    type: TaskType = TaskType.TASK
    priority: TaskPriority = TaskPriority.MEDIUM
    # Users may define their own periods besides the built-in ones
    period: str = TaskPeriod.ANYTIME.value
    tags: List[str] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    time_spent: int = Field(0, ge=0)  # seconds
    pomodoro_settings: Optional[PomodoroSettings] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskTimerUpdate(BaseModel):
    """Partial update written by the timer engine - only set fields are sent"""
    status: Optional[TaskStatus] = None
    time_spent: Optional[int] = Field(None, ge=0)
    updated_at: Optional[datetime] = None
