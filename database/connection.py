"""
Database connection utilities
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from common.errors import MarketplaceError, StorageFailure
from database.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Persistence handle passed to every component.

    Owns the engine and session factory. Call create_all() at startup and
    dispose() at shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        engine_kwargs = {"echo": echo, "pool_pre_ping": True, "connect_args": connect_args}
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_recycle=3600, pool_size=5, max_overflow=10)
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

    def create_all(self):
        """Create tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database schema ready ({self.engine.url.render_as_string(hide_password=True)})")

    def dispose(self):
        self.engine.dispose()

    @contextmanager
    def session(self):
        """
        Get database session with automatic commit/rollback.

        IntegrityError is re-raised unchanged so callers can map it to the
        right duplicate error; any other SQLAlchemy failure becomes
        StorageFailure.
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except (IntegrityError, MarketplaceError):
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error: {e}", exc_info=True)
            raise StorageFailure() from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
