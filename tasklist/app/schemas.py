import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


_DIGITS_RE = re.compile(r"[0-9]+")

# largest value a signed 64-bit INTEGER column holds
MAX_TASK_ID = 2**63 - 1


def parse_task_id(value: Any) -> int:
    """Parse a task id from a path token or JSON value.

    Accepts integers and ASCII base-10 digit strings up to ``MAX_TASK_ID``.
    Booleans, floats, non-ASCII digits and anything else raise ValueError
    instead of being passed through unparsed.
    """

    task_id = None
    if isinstance(value, int) and not isinstance(value, bool):
        task_id = value
    elif isinstance(value, str):
        token = value.strip()
        if _DIGITS_RE.fullmatch(token):
            task_id = int(token)
    if task_id is None:
        raise ValueError(f"invalid task id: {value!r}")
    if not 0 <= task_id <= MAX_TASK_ID:
        raise ValueError(f"task id out of range: {value!r}")
    return task_id


class TaskCreate(BaseModel):
    title: StrictStr

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v


class TaskUpdate(BaseModel):
    """Partial update: only fields that survive validation are merged."""

    id: Optional[int] = None
    title: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Optional[int]:
        if v is None:
            return None
        return parse_task_id(v)

    @field_validator("title", mode="before")
    @classmethod
    def blank_title_is_absent(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("title must be a string")
        v = v.strip()
        return v or None

    @field_validator("completed", mode="before")
    @classmethod
    def strict_bool_or_absent(cls, v: Any) -> Optional[bool]:
        # "true", 1 and friends are ignored, never coerced
        return v if isinstance(v, bool) else None

    def patch(self) -> dict:
        patch: dict[str, Any] = {}
        if self.title is not None:
            patch["title"] = self.title
        if self.completed is not None:
            patch["completed"] = self.completed
        return patch


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str
    completed: bool = False
