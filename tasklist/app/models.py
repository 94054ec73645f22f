from sqlalchemy import Boolean, Column, Integer, String

from .db import Base


class Task(Base):
    __tablename__ = "tasks"
    # never reuse the id of a deleted row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    title = Column(String(255), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} completed={self.completed}>"
