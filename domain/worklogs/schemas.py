from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def to_naive_utc(value: datetime) -> datetime:
    """Store aware datetimes as naive UTC; naive ones are kept as given."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class _CamelBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class WorkLogBase(_CamelBody):
    description: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    completed_at: datetime
    goal_id: int

    @field_validator("completed_at", mode="after")
    @classmethod
    def normalize_completed_at(cls, value):
        return to_naive_utc(value)


class WorkLogCreate(WorkLogBase):
    author_id: Optional[int] = None
    images: List[str] = []


class WorkLogUpdate(WorkLogBase):
    images_to_add: List[str] = []
    images_to_delete: List[int] = []
