"""Request/response schemas for the timer API"""

from typing import List, Optional

from pydantic import BaseModel, Field

from taskflow.features.timer.domain import TimerMode, TimerSnapshot
from taskflow.features.timer.notifications import Notification


class StartTimerRequest(BaseModel):
    mode: TimerMode
    duration_minutes: float = Field(0, ge=0)


class VisibilityRequest(BaseModel):
    hidden: bool


class TimerListResponse(BaseModel):
    timers: List[TimerSnapshot]
    count: int


class TitleResponse(BaseModel):
    title: str
    focused_task_id: Optional[str] = None


class NotificationListResponse(BaseModel):
    notifications: List[Notification]
    count: int


class FlushResponse(BaseModel):
    success: bool
    running: int


class SignOutResponse(BaseModel):
    success: bool
    message: str
