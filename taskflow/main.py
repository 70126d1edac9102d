import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from taskflow import config  # noqa: E402
from taskflow.api.base import api_router  # noqa: E402
from taskflow.events import StoreErrorListener, error_emitter  # noqa: E402
from taskflow.features.timer import PersistenceBridge, TickDriver, TimerSessions  # noqa: E402
from taskflow.infra.supabase import get_supabase_client  # noqa: E402
from taskflow.infra.supabase.repositories import TaskRepository  # noqa: E402

logger = logging.getLogger(__name__)


def build_timer_sessions() -> TimerSessions:
    bridge = PersistenceBridge(TaskRepository(get_supabase_client()))
    return TimerSessions(bridge)


def create_app(sessions: Optional[TimerSessions] = None, tick_interval: Optional[float] = None) -> FastAPI:
    """
    Build the API application.

    The tick driver runs for the lifetime of the app. On shutdown every running
    timer is flushed to the task store before pending writes are awaited.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        timer_sessions = sessions if sessions is not None else build_timer_sessions()
        listener = StoreErrorListener()
        listener.attach(error_emitter)
        app.state.timer_sessions = timer_sessions
        app.state.store_errors = listener

        driver = TickDriver(
            timer_sessions.tick_all,
            interval=tick_interval or config.TIMER_TICK_INTERVAL_SECONDS,
        )
        driver.start()
        try:
            yield
        finally:
            timer_sessions.flush_all()
            await driver.stop()
            await timer_sessions.bridge.drain()
            listener.detach(error_emitter)
            logger.info("Timer sessions flushed")

    app = FastAPI(
        title=f"{config.APP_TITLE} Backend API",
        description="Backend API for TaskFlow - tasks, habits and per-task timers",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": f"{config.APP_TITLE} Backend API",
            "docs": "/docs",
            "version": "1.0.0"
        }

    return app


app = create_app()
