"""
Database engine, sessions and table bootstrap
"""
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from .config import get_settings

settings = get_settings()

Base = declarative_base()


def create_db_engine(url: str, **options):
    """
    Engine for a database URL

    SQLite connections are shared across the threadpool FastAPI runs sync
    dependencies in, so same-thread checking is off; other backends get a
    pre-pinged connection pool. Extra options (poolclass, echo) override
    the defaults.
    """
    if url.startswith("sqlite"):
        defaults = {"connect_args": {"check_same_thread": False}}
    else:
        defaults = {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}
    defaults["echo"] = settings.DEBUG
    defaults.update(options)
    return create_engine(url, **defaults)


engine = create_db_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Request-scoped session dependency
    Usage:
        @router.get("/rooms")
        async def get_rooms(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(factory=SessionLocal):
    """Session for scripts: commits on success, rolls back on error"""
    db: Session = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind=None):
    """
    Create the rooms, bookings, staff and appointment tables
    """
    # Models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
