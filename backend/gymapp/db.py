from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from .settings import get_settings

def make_engine(url: str) -> Engine:
    # SQLite connections are handed between TestClient threads
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)

engine = make_engine(get_settings().DATABASE_URL)

class Base(DeclarativeBase):
    """Importing ``gymapp.models`` registers every table on ``Base.metadata``."""

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db() -> Iterator[Session]:
    """One session per request; repositories commit their own writes."""
    with SessionLocal() as db:
        yield db
