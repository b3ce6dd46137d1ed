"""
Database engine and session management for the lab workflow store

All state lives in an in-memory SQLite database that is shared by every
session of the process and disappears when the process exits.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .exceptions import DatabaseException

logger = logging.getLogger(__name__)

# Create declarative base
Base = declarative_base()


def create_database_engine(database_url: str = None, echo: bool = None) -> Engine:
    """Create an in-memory database engine based on configuration"""
    
    database_url = database_url or settings.database_url
    if echo is None:
        echo = settings.database_echo
    
    # A single shared connection keeps the in-memory database alive
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=echo
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory bound to the engine"""
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False
    )


def create_tables(engine: Engine):
    """Create all tables in the database"""
    # Import models so they register with Base.metadata
    from .. import models  # noqa: F401
    
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Failed to create tables: {str(e)}")
    
    logger.debug(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
