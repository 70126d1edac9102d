"""Timer API endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from taskflow.features.timer.domain import TimerSnapshot
from taskflow.features.timer.engine import TimerEngine
from taskflow.features.timer.schemas import (
    FlushResponse,
    NotificationListResponse,
    SignOutResponse,
    StartTimerRequest,
    TimerListResponse,
    TitleResponse,
    VisibilityRequest,
)
from taskflow.features.timer.sessions import TimerSessions
from taskflow.infra.supabase import get_supabase_client
from taskflow.infra.supabase.repositories import TaskRepository
from taskflow.middleware.auth import get_current_user_id

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/timers", tags=["timers"])


async def get_timer_sessions(request: Request) -> TimerSessions:
    return request.app.state.timer_sessions


def get_task_repository() -> TaskRepository:
    return TaskRepository(get_supabase_client())


async def get_engine(
    user_id: str = Depends(get_current_user_id),
    sessions: TimerSessions = Depends(get_timer_sessions),
) -> TimerEngine:
    return sessions.engine_for(user_id)


def _snapshot_or_404(engine: TimerEngine, task_id: str) -> TimerSnapshot:
    snapshot = engine.get_timer_state(task_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Timer not found")
    return snapshot


@router.get("", response_model=TimerListResponse)
async def list_timers(engine: TimerEngine = Depends(get_engine)):
    """All timers of the current session, with live values"""
    timers = engine.timers
    return {"timers": timers, "count": len(timers)}


@router.post("/visibility", response_model=FlushResponse)
async def change_visibility(request: VisibilityRequest, engine: TimerEngine = Depends(get_engine)):
    """
    Report a page visibility change.

    When the page is hidden every running timer is paused and its elapsed time
    committed; write failures during this flush are not reported.
    """
    engine.handle_visibility_change(request.hidden)
    running = sum(1 for timer in engine.timers if timer.is_running)
    return {"success": True, "running": running}


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(
    user_id: str = Depends(get_current_user_id),
    sessions: TimerSessions = Depends(get_timer_sessions),
):
    """
    Close the caller's timer session.

    Running timers are committed first (write failures are not reported), then the
    session's timers are dropped from memory.
    """
    sessions.sign_out(user_id)
    return {"success": True, "message": "Timer session closed"}


@router.get("/title", response_model=TitleResponse)
async def get_title(engine: TimerEngine = Depends(get_engine)):
    return {"title": engine.title.title, "focused_task_id": engine.title.focused_task_id}


@router.get("/notifications", response_model=NotificationListResponse)
async def drain_notifications(engine: TimerEngine = Depends(get_engine)):
    """Return and clear pending timer notifications"""
    notifications = engine.notifier.drain()
    return {"notifications": notifications, "count": len(notifications)}


@router.get("/{task_id}", response_model=TimerSnapshot)
async def get_timer(task_id: str, engine: TimerEngine = Depends(get_engine)):
    return _snapshot_or_404(engine, task_id)


@router.post("/{task_id}/start", response_model=TimerSnapshot)
async def start_timer(
    task_id: str,
    request: StartTimerRequest,
    engine: TimerEngine = Depends(get_engine),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Start or resume a task's timer; other running timers are paused first"""
    task = await repo.find_for_user(task_id, engine.user_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    engine.start_timer(task, request.mode, request.duration_minutes)
    return _snapshot_or_404(engine, task_id)


@router.post("/{task_id}/pause", response_model=TimerSnapshot)
async def pause_timer(task_id: str, engine: TimerEngine = Depends(get_engine)):
    engine.pause_timer(task_id)
    return _snapshot_or_404(engine, task_id)


@router.post("/{task_id}/reset", response_model=TimerSnapshot)
async def reset_timer(task_id: str, engine: TimerEngine = Depends(get_engine)):
    engine.reset_timer(task_id)
    return _snapshot_or_404(engine, task_id)
