import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from visitorlog.config import settings
from visitorlog.controller import VisitorLogController
from visitorlog.engine.timestamps import resolve_timezone
from visitorlog.logging_config import configure_logging
from visitorlog.routes.auth import router as auth_router
from visitorlog.routes.pages import router as pages_router
from visitorlog.routes.visitors import router as visitors_router
from visitorlog.store.base import RecordStore
from visitorlog.store.factory import build_record_store
from visitorlog.utils.exceptions import AppException

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # Startup: connect the record store and the dashboard controller
    if app.state.record_store is None:
        app.state.record_store = build_record_store(settings)
    app.state.controller = VisitorLogController(
        app.state.record_store,
        page_size=settings.page_size,
        tz=resolve_timezone(settings.display_timezone),
    )
    logger.info("Record store ready")
    yield
    # Shutdown: drop the session subscription
    app.state.controller.close()
    logger.info("Application shutdown")


async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(record_store: Optional[RecordStore] = None) -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Visitor check-in and visitor log dashboard",
        version=APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )
    app.state.record_store = record_store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
    app.add_exception_handler(AppException, app_exception_handler)

    # Health check endpoint
    @app.get("/api/health")
    async def health_check():
        """Application health"""
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "version": APP_VERSION
        }

    # Routers
    app.include_router(auth_router)
    app.include_router(visitors_router)
    app.include_router(pages_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "visitorlog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
