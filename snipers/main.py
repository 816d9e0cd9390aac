from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snipers.api.routes import api_router
from snipers.core.config import Settings, get_settings
from snipers.core.database import EntityStore
from snipers.core.errors import register_error_handlers
from snipers.core.logging import setup_logging
from snipers.services.bootstrap import seed_demo_data
from snipers.services.otp import OtpCache
from snipers.services.repository import Repository
from snipers.services.scheduler import start_scheduler, stop_scheduler
from snipers.services.sessions import SessionStore


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    store = EntityStore(settings.database_url)
    repository = Repository(store)
    otp_cache = OtpCache(ttl_seconds=settings.otp_ttl_seconds)
    sessions = SessionStore(ttl_seconds=settings.session_ttl_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.seed_demo_data:
            seed_demo_data(repository)
        app.state.scheduler = start_scheduler(settings, sessions, otp_cache) if settings.scheduler_enabled else None
        try:
            yield
        finally:
            if app.state.scheduler is not None:
                stop_scheduler(app.state.scheduler)
                app.state.scheduler = None
            store.dispose()

    app = FastAPI(
        title=settings.app_name,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.repository = repository
    app.state.otp_cache = otp_cache
    app.state.sessions = sessions
    app.state.scheduler = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()
