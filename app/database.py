from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
import logging

from app.config.settings import settings

logger = logging.getLogger(__name__)


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine shared by every DAO in the process"""
    if settings.is_sqlite(database_url):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases only exist on their own connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        sqlite_engine = create_engine(database_url, echo=echo, **kwargs)

        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    if settings.is_postgresql(database_url):
        # If you're using PostgreSQL on Render or similar, keep sslmode=require
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"sslmode": settings.DB_SSLMODE}
        )

    return create_engine(database_url, echo=echo)


engine = make_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# One session per request, shared by that request's DAOs
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Create any missing tables"""
    # Importing the models registers their tables on Base.metadata
    from app.models import user, project, task  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info("Database schema ready (%s)", target.url.render_as_string(hide_password=True))
