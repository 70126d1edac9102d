"""Domain models for the application"""
from .task import (
    Task,
    TaskPeriod,
    TaskPriority,
    TaskStatus,
    TaskTimerUpdate,
    TaskType,
    PomodoroSettings,
    DEFAULT_POMODORO_SETTINGS,
    resolve_pomodoro_settings,
)

__all__ = [
    'Task', 'TaskPeriod', 'TaskPriority', 'TaskStatus', 'TaskTimerUpdate', 'TaskType',
    'PomodoroSettings', 'DEFAULT_POMODORO_SETTINGS', 'resolve_pomodoro_settings',
]
