from pydantic import BaseModel, ConfigDict, Field
from strayspot.models.enums import PetStatus


class PetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    species: str = Field(..., min_length=1)


class PetRead(BaseModel):
    pet_id: int
    org_id: int
    name: str
    species: str
    status: PetStatus

    model_config = ConfigDict(from_attributes=True)
