"""
Database connection settings
Local record store persistence through SQLAlchemy
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Model base class
Base = declarative_base()


def make_engine(database_url: str) -> Engine:
    """Create an engine, with SQLite specific connection options"""
    connect_args = {}
    engine_kwargs = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # In-memory databases live on a single connection
        if ":memory:" in database_url or database_url == "sqlite://":
            engine_kwargs = {"poolclass": StaticPool}

    return create_engine(database_url, connect_args=connect_args, **engine_kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the given engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine) -> None:
    """Create tables for the local record store"""
    # Import models so they register on Base.metadata
    from visitorlog.models import admin, visitor  # noqa: F401

    Base.metadata.create_all(bind=bind)
