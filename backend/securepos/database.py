"""
Database Engine & Session Management
SQLAlchemy engine construction for the ledger's persistence provider.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine for ``database_url``, creating the SQLite data directory if needed."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        db_path = database_url.split(":///", 1)[1] if ":///" in database_url else ""
        if db_path and db_path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        # Required for SQLite; concurrent writers wait instead of failing fast
        connect_args = {"check_same_thread": False, "timeout": 30}

    return create_engine(database_url, connect_args=connect_args, echo=echo)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine):
    """Create all tables. Called once when the ledger is built."""
    from securepos.models import identity as _identity_model          # noqa: F401
    from securepos.models import sales as _sales_model                # noqa: F401
    from securepos.models import audit as _audit_model                # noqa: F401
    from securepos.models import admin_action as _admin_action_model  # noqa: F401

    Base.metadata.create_all(bind=engine)
