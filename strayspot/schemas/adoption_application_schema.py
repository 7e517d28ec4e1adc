from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from typing import Optional
from datetime import datetime
from strayspot.core import validation
from strayspot.core.errors import ValidationError
from strayspot.models.enums import ApplicationStatus, HousingStatus, YesNo


class ApplicationReference(BaseModel):
    name: str
    email: EmailStr
    phone: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _checked(validation.require_text, v, "reference name")

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: str) -> str:
        return _checked(validation.normalize_phone, v, "reference phone")


class AdoptionQuestionnaire(BaseModel):
    housing_status: HousingStatus
    pets_allowed: YesNo
    pet_location: str
    primary_caregiver: str
    other_pets: YesNo
    financially_prepared: YesNo
    emergency_pet_care: str
    reference: ApplicationReference

    @field_validator("pet_location", "primary_caregiver", "emergency_pet_care")
    @classmethod
    def _free_text(cls, v: str, info) -> str:
        return _checked(validation.require_text, v, info.field_name)

    def to_columns(self) -> dict:
        return {
            "housing_status": self.housing_status.value,
            "pets_allowed": self.pets_allowed.value,
            "pet_location": self.pet_location,
            "primary_caregiver": self.primary_caregiver,
            "other_pets": self.other_pets.value,
            "financially_prepared": self.financially_prepared.value,
            "emergency_pet_care": self.emergency_pet_care,
            "reference_name": self.reference.name,
            "reference_email": self.reference.email,
            "reference_phone": self.reference.phone,
        }


class AdoptionApplicationCreate(AdoptionQuestionnaire):
    pet_id: int
    terms_accepted: bool


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    notes: Optional[str] = None
    organization_notes: Optional[str] = None


class ApplicationNote(BaseModel):
    notes: str


class AdoptionApplicationRead(BaseModel):
    application_id: int
    pet_id: int
    adopter_id: int
    org_id: int
    status: ApplicationStatus
    housing_status: HousingStatus
    pets_allowed: YesNo
    pet_location: str
    primary_caregiver: str
    other_pets: YesNo
    financially_prepared: YesNo
    emergency_pet_care: str
    reference_name: str
    reference_email: str
    reference_phone: str
    terms_accepted: bool
    rejection_reason: str
    organization_notes: str
    reviewed_by: str
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


def _checked(check, value, field):
    try:
        return check(value, field)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc
