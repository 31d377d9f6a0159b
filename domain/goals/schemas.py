from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _CamelBody(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class AssigneeIn(_CamelBody):
    user_id: int
    target: int = Field(ge=0)


class GoalUpdate(_CamelBody):
    title: str = Field(min_length=1, max_length=200)
    unit: str = Field(min_length=1, max_length=50)
    start_date: date
    end_date: date
    assignees: List[AssigneeIn]

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

    @property
    def total_target(self) -> int:
        return sum(a.target for a in self.assignees)

    def duplicate_user_ids(self):
        seen, duplicates = set(), set()
        for assignee in self.assignees:
            if assignee.user_id in seen:
                duplicates.add(assignee.user_id)
            seen.add(assignee.user_id)
        return sorted(duplicates)


class GoalCreate(GoalUpdate):
    assignees: List[AssigneeIn] = Field(min_length=1)
