# storefront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from storefront.core.config import Settings, get_settings
from storefront.core.errors import register_exception_handlers
from storefront.database import Database

# Routers
from storefront.routers.products import router as products_router
from storefront.routers.cart import router as cart_router
from storefront.routers.orders import router as orders_router

logger = logging.getLogger("uvicorn")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    The Database handle is created here and opened/closed by the lifespan,
    so tests can pass their own Settings (e.g. an in-memory SQLite URL).
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
          - Verify DB connectivity and create tables.

        Shutdown:
          - Dispose the engine's connection pool.
        """
        logger.info("Startup: connecting to database...")
        try:
            app.state.database.create_db_and_tables()
            logger.info("Startup: DB connection OK, tables verified.")
        except Exception as e:
            logger.error(f"Startup: DB connection FAILED: {e}")
            raise
        yield
        app.state.database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)
    app.include_router(orders_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront-api"}

    return app
