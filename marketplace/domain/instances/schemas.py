"""Instance domain schemas - dated, bookable runs of a retreat or program"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Instance dates are stored as naive UTC"""
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class InstanceCreate(BaseModel):
    """Schema for creating a retreat or program instance"""

    parentId: str
    startDate: datetime
    endDate: datetime
    duration: int = 0
    itinerary: str = "Bulleted list of items, end each point with a semicolon;"
    availableSlots: int = Field(..., ge=0)
    isFull: bool = False
    notes: Optional[str] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.endDate < self.startDate:
            raise ValueError("endDate must not be before startDate")
        return self


class InstanceUpdate(BaseModel):
    """Schema for updating an instance"""

    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    duration: Optional[int] = None
    itinerary: Optional[str] = None
    availableSlots: Optional[int] = Field(None, ge=0)
    isFull: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, v):
        return to_naive_utc(v)


class InstanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str
    start_date: datetime
    end_date: datetime
    duration: Optional[int] = None
    itinerary: Optional[str] = None
    available_slots: int
    is_full: bool
    notes: Optional[str] = None


class InstanceListResponse(BaseModel):
    """One page of instances, newest start date first"""

    instances: list[InstanceResponse]
    total_pages: int
    current_page: int
    total_instances: int
