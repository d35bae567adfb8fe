from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Literal, Optional

from utils.datetime_utils import days_in_month

MOOD_STEPS = 15


# Day records
class Day(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    date: int = Field(..., ge=1, le=31, frozen=True)
    checks: List[int] = Field(default_factory=list)
    anxiety: Optional[int] = Field(None, ge=0, le=3)
    hours_slept: Optional[int] = Field(None, alias="hoursSlept")
    comment: Optional[str] = None

    @field_validator('checks')
    def validate_checks(cls, v):
        for step in v:
            if not 0 <= step < MOOD_STEPS:
                raise ValueError(f'check {step} is outside 0..{MOOD_STEPS - 1}')
        if len(set(v)) != len(v):
            raise ValueError('checks must not contain duplicates')
        return v

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def blank_month(year: int, month: int) -> List[Day]:
    """One empty Day per calendar date of the zero-based month."""
    return [Day(date=date) for date in range(1, days_in_month(year, month) + 1)]


def check_month_record(year: int, month: int, days: List[Day]) -> None:
    expected = list(range(1, days_in_month(year, month) + 1))
    actual = [day.date for day in days]
    if actual != expected:
        raise ValueError(
            f'days must cover dates 1..{len(expected)} in order, got {len(actual)} entries'
        )


# Wire protocol
class MonthRef(BaseModel):
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=0, le=11)


class ImportRequest(MonthRef):
    pass


class ImportResponse(BaseModel):
    days: List[Day]


class ExportRequest(MonthRef):
    days: List[Day]

    @model_validator(mode='after')
    def validate_month_record(self):
        check_month_record(self.year, self.month, self.days)
        return self


class ExportResponse(BaseModel):
    ok: Literal[True]


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
