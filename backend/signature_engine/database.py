from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _is_sqlite(database_url: str) -> bool:
    return str(database_url).strip().lower().startswith("sqlite")


def _is_in_memory(database_url: str) -> bool:
    url = str(database_url).strip().lower()
    return url.endswith(":memory:") or url in ("sqlite://", "sqlite+pysqlite://")


def create_db_engine(database_url: str) -> Engine:
    """Build the engine for the audit store.

    SQLite needs ``check_same_thread`` disabled because FastAPI runs sync
    routes in a threadpool. In-memory databases also share a single
    connection so every session sees the same tables.
    """
    if _is_sqlite(database_url):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if _is_in_memory(database_url):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=3600,  # MySQL connection timeout handling
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create the audit tables if they do not exist yet."""
    from signature_engine import models  # noqa: F401  # ensure models are registered

    Base.metadata.create_all(bind=engine)
