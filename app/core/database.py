from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine
from app.core.config import get_settings
from typing import Optional
import logging
import os

settings = get_settings()
logger = logging.getLogger(__name__)

def _sqlite_file(database_url: str) -> Optional[str]:
    """Returns the database file of a file-backed SQLite URL, else None."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return url.database

# SQLite connections are handed across FastAPI's threadpool workers
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

def create_db_and_tables():
    """Creates the key-value table, and the SQLite file's directory if needed."""
    db_file = _sqlite_file(settings.DATABASE_URL)
    if db_file:
        db_dir = os.path.dirname(os.path.abspath(db_file))
        os.makedirs(db_dir, exist_ok=True)
        logger.info(f"Key-value store at {os.path.abspath(db_file)}")
    else:
        logger.info(f"Key-value store on {make_url(settings.DATABASE_URL).get_backend_name()} backend")

    # Registers KVEntry with SQLModel metadata
    from app.models import KVEntry
    SQLModel.metadata.create_all(engine, tables=[KVEntry.__table__])
