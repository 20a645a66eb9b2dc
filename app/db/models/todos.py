from sqlalchemy import CheckConstraint
from sqlmodel import Field

from .base import BaseModelDB

TITLE_MAX_LENGTH = 200


class Todo(BaseModelDB, table=True):
    """Une tâche : un titre et un drapeau de complétion."""

    __tablename__ = "todos"
    __table_args__ = (
        CheckConstraint(
            f"length(title) BETWEEN 1 AND {TITLE_MAX_LENGTH}",
            name="ck_todos_title_length",
        ),
        # SQLite réutilise sinon le plus grand id après suppression
        {"sqlite_autoincrement": True},
    )

    title: str = Field(max_length=TITLE_MAX_LENGTH, nullable=False)
    is_done: bool = Field(default=False, index=True)

    def __repr__(self):
        return f"Todo(id={self.id} title={self.title!r} is_done={self.is_done})"
