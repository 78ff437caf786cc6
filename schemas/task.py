from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from domain.entities import Task


class TaskCreate(BaseModel):
    title: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    status: StrictBool = False


class TaskUpdate(BaseModel):
    """Partial update; keys outside the mutable fields (id, creationDate, ...) are dropped."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    status: Optional[StrictBool] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    status: bool
    creation_date: datetime = Field(alias="creationDate")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            creation_date=task.creation_date
        )


class MessageResponse(BaseModel):
    message: str
