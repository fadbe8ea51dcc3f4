# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.core.email_client import BrevoClient
from app.core.errors import register_exception_handlers
from app.core.request_logger import RequestLoggingMiddleware
from app.core.storage_utils import SupabaseStorage
from app.core.supabase_client import supabase_admin
from app.core.typesense_client import create_typesense_client, init_collections
from app.database import build_engine, create_db_and_tables, utcnow
from app.schemas.common import ok
from app.services.email_service import EmailService
from app.services.search_service import SearchService

# Routers
from app.routers.auth import router as auth_router
from app.routers.users import router as users_router
from app.routers.homeowners import router as homeowners_router
from app.routers.designers import router as designers_router
from app.routers.contractors import router as contractors_router
from app.routers.upload import router as upload_router
from app.routers.search import router as search_router
from app.routers.projects import router as projects_router
from app.routers.requests import router as requests_router
from app.routers.admin import router as admin_router
from app.routers.notifications import router as notifications_router

logger = logging.getLogger("uvicorn")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    `settings` defaults to the environment (.env). Tests pass their own
    instance (in-memory sqlite, test mode, search disabled).
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings)
    search_client = create_typesense_client(settings) if settings.TYPESENSE_ENABLED else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
          - Create tables and seed roles when DB_AUTO_CREATE is on.
          - Create the search collections when Typesense is enabled.

        Shutdown:
          - Dispose the engine's connection pool.
        """
        logger.info("Startup: %s %s (%s)", settings.PROJECT_NAME, settings.VERSION, settings.ENVIRONMENT)
        if settings.DB_AUTO_CREATE:
            try:
                create_db_and_tables(engine)
                logger.info("Startup: tables verified.")
            except Exception:
                logger.exception("Startup: DB initialization FAILED")
                raise
        if search_client is not None:
            init_collections(search_client)
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.email_service = EmailService(settings, BrevoClient(settings))
    app.state.search_service = SearchService(search_client)
    app.state.storage = SupabaseStorage(lambda: supabase_admin(settings), settings.STORAGE_BUCKET)

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # Versioned API prefix, e.g. /api/v1
    app.include_router(auth_router, prefix=settings.API_V1_STR)
    app.include_router(users_router, prefix=settings.API_V1_STR)
    app.include_router(homeowners_router, prefix=settings.API_V1_STR)
    app.include_router(designers_router, prefix=settings.API_V1_STR)
    app.include_router(contractors_router, prefix=settings.API_V1_STR)
    app.include_router(upload_router, prefix=settings.API_V1_STR)
    app.include_router(search_router, prefix=settings.API_V1_STR)
    app.include_router(projects_router, prefix=settings.API_V1_STR)
    app.include_router(requests_router, prefix=settings.API_V1_STR)
    app.include_router(admin_router, prefix=settings.API_V1_STR)
    app.include_router(notifications_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health():
        """Liveness check."""
        return ok(
            {"status": "healthy", "timestamp": utcnow().isoformat(), "version": settings.VERSION},
            "Finishd API is running",
        )

    return app


app = create_app()
