import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_ECHO, DATABASE_URL

logger = logging.getLogger(__name__)

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA foreign_keys=ON;",
    "PRAGMA busy_timeout=30000;",
)


def normalize_database_url(url: str) -> str:
    """``mysql://`` in .env means the PyMySQL driver."""
    url = (url or "").strip()
    if url.startswith("mysql://"):
        return "mysql+pymysql://" + url[len("mysql://"):]
    return url


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Engine for ``url``; SQLite connections share threads and get the pragmas above."""
    url = normalize_database_url(url)
    is_sqlite = url.startswith("sqlite")

    kwargs = {"pool_pre_ping": True, "echo": echo}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
    new_engine = create_engine(url, **kwargs)

    if is_sqlite:
        @event.listens_for(new_engine, "connect")
        def _apply_pragmas(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            try:
                for pragma in SQLITE_PRAGMAS:
                    cursor.execute(pragma)
            except Exception as e:
                logger.warning("Failed to set SQLite pragmas: %s", e)
            finally:
                cursor.close()

    return new_engine


engine = create_db_engine(DATABASE_URL, echo=DATABASE_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    # SessionLocal is looked up per request; tests rebind it.
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    from . import models  # noqa: F401  registers the tables

    Base.metadata.create_all(bind=bind or engine)
