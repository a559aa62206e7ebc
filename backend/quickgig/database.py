import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL, SQLITE_FOREIGN_KEYS

logger = logging.getLogger(__name__)


def _normalize_database_url(url: str) -> str:
    # Accept the short `postgres://` form some hosts hand out.
    return url.replace("postgres://", "postgresql://", 1) if url.startswith("postgres://") else url


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _set_sqlite_pragmas(dbapi_connection, connection_record):  # noqa: ANN001
    try:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA busy_timeout=30000;")
        cursor.execute(f"PRAGMA foreign_keys={'ON' if SQLITE_FOREIGN_KEYS else 'OFF'};")
        cursor.close()
    except Exception as e:
        logger.warning("Failed to set SQLite pragmas: %s", e)


def make_engine(url: str):
    """Build an engine for `url`, applying the SQLite connection pragmas when relevant."""
    url = _normalize_database_url((url or "").strip())
    engine_kwargs = {"pool_pre_ping": True}
    if _is_sqlite(url):
        # FastAPI runs sync handlers in a thread pool.
        engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}

    new_engine = create_engine(url, **engine_kwargs)
    if _is_sqlite(url):
        event.listen(new_engine, "connect", _set_sqlite_pragmas)
    return new_engine


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create the users/jobs/applications tables if missing and seed the admin account.

    Safe to call on every startup: create_all skips existing tables and the seed
    only runs when no admin exists.
    """
    # Import models so they register with SQLAlchemy metadata before create_all.
    from . import models  # noqa: F401
    from .services.accounts import ensure_admin

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_admin(db)
    finally:
        db.close()
