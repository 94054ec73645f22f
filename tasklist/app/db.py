from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from tasklist.app.config import get_settings

DATABASE_URL = get_settings().database_url

# SQLite requires check_same_thread=False for usage across threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def ensure_task_columns(engine) -> None:
    """Add the completed column to a tasks table created before it existed (idempotent)."""

    inspector = inspect(engine)
    if not inspector.has_table("tasks"):
        return
    columns = {col["name"] for col in inspector.get_columns("tasks")}
    if "completed" in columns:
        return

    with engine.begin() as conn:
        conn.execute(
            text("ALTER TABLE tasks ADD COLUMN completed BOOLEAN NOT NULL DEFAULT FALSE")
        )


def get_db():
    from sqlalchemy.orm import Session

    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
