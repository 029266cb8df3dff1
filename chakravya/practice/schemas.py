from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Camel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class SpiritualTaskOut(_Camel):
    id: str
    title: str
    description: str | None = None
    category: str
    default_target: int
    unit: str
    created_at: datetime | None = None


class ProgressUpsert(_Camel):
    task_id: str = Field(min_length=1)
    target: int = Field(ge=0)
    completed: int = Field(default=0, ge=0)


class ProgressOut(_Camel):
    id: str
    user_id: str
    task_id: str
    target: int
    completed: int
    date: datetime | None = None
    created_at: datetime | None = None


class ProgressWithTaskOut(ProgressOut):
    task: SpiritualTaskOut
