"""
Database configuration and session management
"""

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine
import structlog

from restaurant_booking.core.config import get_settings

logger = structlog.get_logger(__name__)
settings = get_settings()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine for the given URL"""
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
            **kwargs,
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(url, echo=echo, pool_pre_ping=True, **kwargs)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def init_db(bind: Engine = engine):
    """Initialize database tables"""
    # Models must be imported so they register on the metadata
    import restaurant_booking.models  # noqa: F401

    SQLModel.metadata.create_all(bind)
    logger.info("Database tables created")


def get_session():
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session
