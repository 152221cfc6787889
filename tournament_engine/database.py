import os
from pathlib import Path
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tournament.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")


def make_engine(url: str) -> Engine:
    """SQLite files get their directory created; SQLite connections are shared with worker threads."""
    if not url.startswith("sqlite"):
        return create_engine(url, echo=SQL_ECHO)
    if ":memory:" not in url:
        Path(url.split(":///", 1)[-1]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=SQL_ECHO, connect_args={"check_same_thread": False})


engine = make_engine(DATABASE_URL)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Create the tournament, participant and match tables."""
    import tournament_engine.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
