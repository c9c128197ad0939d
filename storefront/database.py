# storefront/database.py
import logging

from fastapi import Request
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import Settings

logger = logging.getLogger(__name__)


def _build_url(settings: Settings) -> str:
    """
    Append sslmode=require to Postgres URLs when the deployment asks for it.
    """
    db_url = settings.DATABASE_URL
    if (
        settings.DATABASE_SSL_REQUIRE
        and db_url.startswith("postgres")
        and "sslmode=" not in db_url
    ):
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"
    return db_url


class Database:
    """
    Explicit store handle: owns the engine and hands out sessions.

    Lifecycle:
      - created by the application lifespan (or a script)
      - `create_db_and_tables()` once on startup
      - `dispose()` on shutdown

    SQLite URLs share a single connection across threads; an in-memory
    database (``sqlite://``) would otherwise be empty on every new connection.
    """

    def __init__(self, settings: Settings):
        url = _build_url(settings)

        if url.startswith("sqlite"):
            self.engine = create_engine(
                url,
                echo=settings.DATABASE_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                url,
                echo=settings.DATABASE_ECHO,
                pool_pre_ping=True,
                pool_size=settings.DATABASE_POOL_SIZE,
                max_overflow=settings.DATABASE_MAX_OVERFLOW,
            )

    def create_db_and_tables(self) -> None:
        """
        Create all tables defined in SQLModel metadata if they do not exist.
        """
        # Import models so SQLModel metadata is populated before create_all()
        from storefront.models import cart, order, product, user  # noqa: F401

        SQLModel.metadata.create_all(self.engine)

    def session(self) -> Session:
        return Session(self.engine)

    def dispose(self) -> None:
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session from the app's Database.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    database: Database = request.app.state.database
    with database.session() as session:
        yield session
