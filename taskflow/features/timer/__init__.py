"""Timer feature module"""

from taskflow.features.timer.api import router
from taskflow.features.timer.domain import (
    PomodoroPhase,
    TimerMode,
    TimerSnapshot,
    TimerState,
)
from taskflow.features.timer.engine import TimerEngine
from taskflow.features.timer.notifications import InAppNotifier, Notification
from taskflow.features.timer.persistence import PersistenceBridge
from taskflow.features.timer.registry import TimerRegistry
from taskflow.features.timer.sessions import TimerSessions
from taskflow.features.timer.tick_driver import TickDriver
from taskflow.features.timer.title import DocumentTitle, TitleAnnouncer

__all__ = [
    "router",
    "PomodoroPhase",
    "TimerMode",
    "TimerSnapshot",
    "TimerState",
    "TimerEngine",
    "InAppNotifier",
    "Notification",
    "PersistenceBridge",
    "TimerRegistry",
    "TimerSessions",
    "TickDriver",
    "DocumentTitle",
    "TitleAnnouncer",
]
