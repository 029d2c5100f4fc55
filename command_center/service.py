"""
Command Center Service Entrypoint

FastAPI application for the operations dashboard backend.
Includes all API routers, the live data refresher and startup initialization.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from command_center.api import health, metrics, servers, settings, tickets, users
from command_center.config import CORS_ORIGINS, LIVE_REFRESH_ENABLED
from command_center.database import SessionLocal, init_db
from command_center.live import LiveDataCache, LiveDataRefresher

logger = logging.getLogger(__name__)


def _install_error_handlers(app: FastAPI) -> None:
    # Every error leaves as {"error": ...}; details stay in the server log

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Server error"})


def create_app(
    enable_live_refresh: bool = LIVE_REFRESH_ENABLED,
    session_factory=SessionLocal,
    init_database: bool = True,
) -> FastAPI:
    """
    Build the API application.

    The live cache is created here, empty, and owned by the app; the
    refresher that fills it is started and stopped with the app.
    """
    app = FastAPI(title="Command Center API")

    app.state.live_cache = LiveDataCache()
    app.state.live_refresher = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    app.include_router(health.router)
    app.include_router(servers.router)
    app.include_router(tickets.router)
    app.include_router(metrics.router)
    app.include_router(users.router)
    app.include_router(settings.router)

    @app.on_event("startup")
    def startup_init():
        """Initialize database and start the live data refresher"""
        if init_database:
            init_db()

        if not enable_live_refresh:
            logger.info("Live data refresh disabled; reads are served from storage")
            return

        logger.info("Starting live data refresher...")
        refresher = LiveDataRefresher(app.state.live_cache, session_factory=session_factory)
        refresher.start()
        app.state.live_refresher = refresher

        logger.info("Command Center startup complete")

    @app.on_event("shutdown")
    def shutdown_cleanup():
        """Stop the live data refresher on shutdown"""
        refresher = app.state.live_refresher
        if refresher:
            logger.info("Stopping live data refresher...")
            refresher.stop()
            app.state.live_refresher = None

        logger.info("Command Center shutdown complete")

    return app


app = create_app()
