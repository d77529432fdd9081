"""Database engine and per-request sessions."""
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings


def get_engine(url: str = None):
    url = url or settings.DATABASE_URL
    kwargs = {"echo": False, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # SQLite connections are shared with the threadpool FastAPI runs sync dependencies in
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
        })
    return create_engine(url, **kwargs)


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def init_db(bind=None) -> None:
    """Create tables if they do not exist."""
    from app import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
