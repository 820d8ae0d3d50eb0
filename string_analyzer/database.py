from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from fastapi import Request
import os

from string_analyzer.exceptions import StoreNotInitializedError

Base = declarative_base()


# ------------------------------------------------------------------------------
# ENGINE
# ------------------------------------------------------------------------------
def create_sqlite_engine(location: str) -> Engine:
    """Create an engine for the SQLite file at `location`, creating its directory."""
    directory = os.path.dirname(os.path.abspath(location))
    os.makedirs(directory, exist_ok=True)

    return create_engine(
        f"sqlite:///{location}",
        # Sync route handlers run in the threadpool
        connect_args={"check_same_thread": False},
    )


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request):
    """Dependency to provide the store created at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreNotInitializedError()
    return store
