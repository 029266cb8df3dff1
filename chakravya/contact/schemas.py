from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from chakravya.contact.models import SubmissionStatus


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    message: str = Field(min_length=1, max_length=5000)


class ContactStatusUpdate(BaseModel):
    status: SubmissionStatus


class ContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
    id: str
    name: str
    email: str
    message: str
    status: SubmissionStatus
    created_at: datetime | None = None
