from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Optional
from functools import lru_cache
from socialblog.core.config import get_settings

Base = declarative_base()


def _connect_args(url: str, statement_timeout_ms: int) -> dict:
    """Per-driver timeout options

    PostgreSQL gets a server-side statement_timeout. SQLite has no statement
    timeout, so ``timeout`` only bounds the wait for a database lock.
    """
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": statement_timeout_ms / 1000}
    if url.startswith("postgresql"):
        return {"options": f"-c statement_timeout={statement_timeout_ms}"}
    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str):
    """Create an engine for the given URL using the configured pool bounds"""
    settings = get_settings()
    engine = create_engine(
        url,
        connect_args=_connect_args(url, settings.db_statement_timeout_ms),
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )
    if url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache()
def get_engine():
    """Get the process-wide engine"""
    return build_engine(get_settings().database_url)


def get_session_maker():
    """Get a session factory bound to the process-wide engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_session():
    """Yield a database session for one request"""
    SessionLocal = get_session_maker()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def insert_or_ignore(session, model, rows: list[dict], index_elements: list[str]) -> None:
    """INSERT that skips rows colliding with an existing unique key

    Two writers racing on the same key both succeed. PostgreSQL and SQLite
    use ON CONFLICT DO NOTHING on ``index_elements``; MySQL uses INSERT IGNORE,
    which applies to every unique key of the table.
    """
    if not rows:
        return
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
        stmt = insert(model).values(rows).on_conflict_do_nothing(index_elements=index_elements)
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
        stmt = insert(model).values(rows).on_conflict_do_nothing(index_elements=index_elements)
    elif dialect in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert
        stmt = insert(model).values(rows).prefix_with("IGNORE")
    else:
        raise NotImplementedError(f"insert_or_ignore is not supported on {dialect}")
    session.execute(stmt)


def create_tables(db_engine: Optional[object] = None):
    """Create all tables

    Args:
        db_engine: optional engine, defaults to the process-wide engine
    """
    engine = db_engine or get_engine()
    Base.metadata.create_all(bind=engine)
