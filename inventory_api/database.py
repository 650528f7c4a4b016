"""
Database engine and session management using SQLAlchemy.
"""

import logging
import time
from typing import Callable, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker

from inventory_api.config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database URL."""
    url = settings.sqlalchemy_url
    options = {}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True  # Verify connections before using

    return create_engine(url, echo=settings.debug, **options)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def wait_for_database(
    engine: Engine,
    interval: float = 2.0,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Block until the database accepts a connection.

    Retries on a fixed interval. With ``max_attempts`` unset the loop
    never gives up; otherwise the last connection error is re-raised.
    Returns the number of attempts it took.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            with engine.connect():
                pass
        except OperationalError:
            if max_attempts is not None and attempt >= max_attempts:
                logger.error(f"Database unreachable after {attempt} attempts")
                raise
            logger.info("Waiting for database...")
            sleep(interval)
            continue

        logger.info("Database connected")
        return attempt


def init_db(engine: Engine) -> None:
    """
    Create the inventory table if it does not exist.

    There are no migrations; existing tables are left untouched.
    """
    # Import models so they register with Base.metadata
    from inventory_api import db_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Inventory table ready")
