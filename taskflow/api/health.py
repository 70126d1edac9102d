"""Health check endpoints"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Basic health check plus timer and task store counters"""
    sessions = request.app.state.timer_sessions
    store_errors = request.app.state.store_errors
    return {
        "status": "healthy",
        "service": "taskflow-backend",
        "sessions": len(sessions),
        "running_sessions": sessions.running_count(),
        "pending_writes": sessions.bridge.pending_count,
        "store_write_failures": store_errors.failure_count,
    }
