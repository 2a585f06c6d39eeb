"""
SQLAlchemy engine, session factory and the transaction primitive.

Every multi-row mutation of the engine runs inside ``transaction()``: it
commits on success, rolls back on any error and, when a day is given, holds
an in-process lock scoped to that date for the whole unit of work.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from datetime import date
from typing import Dict, Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from practice.config import settings
from practice.errors import StoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections get foreign keys and BEGIN IMMEDIATE"""
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {}
    if is_sqlite:
        connect_args = {"check_same_thread": False, "timeout": settings.sqlite_timeout}

    db_engine = create_engine(database_url, connect_args=connect_args)

    if is_sqlite:
        @event.listens_for(db_engine, "connect")
        def _configure_sqlite(dbapi_connection, connection_record):
            # Let SQLAlchemy emit BEGIN itself
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(db_engine, "begin")
        def _begin_immediate(conn):
            # Take the write lock up front so read-then-write paths serialize
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return db_engine


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def configure_engine(database_url: str) -> Engine:
    """Point SessionLocal at another database"""
    global engine
    engine = create_db_engine(database_url)
    SessionLocal.configure(bind=engine)
    return engine


def init_db(bind: Optional[Engine] = None):
    """Create all tables"""
    import practice.models  # noqa: F401  registers the mappers on Base

    Base.metadata.create_all(bind=bind or engine)


def drop_db(bind: Optional[Engine] = None):
    """Drop all tables"""
    import practice.models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)


# day -> [lock, number of transactions holding or waiting on it]
_day_locks: Dict[date, list] = {}
_day_locks_guard = threading.Lock()


@contextmanager
def _day_lock(day: date) -> Iterator[None]:
    """Serialize transactions on one date; the entry is dropped with its last user"""
    with _day_locks_guard:
        entry = _day_locks.setdefault(day, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _day_locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _day_locks[day]


@contextmanager
def transaction(session_factory=None, day: Optional[date] = None) -> Iterator[Session]:
    """
    Run one unit of work against the store.

    Args:
        session_factory: Session factory to use (defaults to SessionLocal)
        day: Calendar date whose assignment set the work reads or mutates

    Raises:
        StoreError: wrapping any SQLAlchemy failure, after rollback
    """
    factory = session_factory or SessionLocal
    lock = _day_lock(day) if day is not None else nullcontext()
    with lock:
        db = factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Store operation failed: %s", exc)
            raise StoreError(str(exc)) from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
