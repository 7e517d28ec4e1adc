from pydantic import BaseModel, EmailStr, ConfigDict, Field
from typing import Optional
from datetime import datetime
from strayspot.models.enums import VerificationStatus


class OrgCreate(BaseModel):
    org_name: str = Field(..., min_length=1)
    email: EmailStr
    verification_document: str = Field(..., min_length=1)


class OrgRead(BaseModel):
    org_id: int
    org_name: str
    email: EmailStr
    verification_status: VerificationStatus
    verification_document: str
    verification_notes: str
    resubmission_notes: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VerificationDecision(BaseModel):
    status: VerificationStatus
    notes: Optional[str] = None


class VerificationResubmission(BaseModel):
    verification_document: str
    additional_info: Optional[str] = None
