from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from datetime import datetime
from strayspot.models.enums import AdopterStatus


class AdopterCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class AdopterRead(BaseModel):
    adopter_id: int
    email: EmailStr
    first_name: str
    last_name: str
    status: AdopterStatus
    status_notes: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StandingChange(BaseModel):
    notes: Optional[str] = None


class DeletionRequest(BaseModel):
    reason: str
