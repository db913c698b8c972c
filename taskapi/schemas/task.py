from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from taskapi.models.tasks import TITLE_MAX_LENGTH
from taskapi.utils.sanitization import sanitize_optional, sanitize_string


class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("description", mode="before")
    @classmethod
    def sanitize_description(cls, v):
        return sanitize_optional(v)


# Unknown fields such as user_id are dropped here, before the service layer.
class TaskCreate(TaskBase):
    pass


class TaskUpdate(TaskBase):
    """Full replace of the mutable fields; an omitted description clears it."""


class Task(TaskBase):
    id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TaskEnvelope(BaseModel):
    task: Task


class TaskList(BaseModel):
    tasks: list[Task]
