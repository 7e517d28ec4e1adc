from sqlalchemy import Column, Text, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from strayspot.models.base import Base, IdType
from strayspot.models.enums import PetStatus


class Pet(Base):
    __tablename__ = "pet_tbl"

    pet_id = Column(IdType, primary_key=True, index=True)
    org_id = Column(IdType, nullable=False, index=True)
    name = Column(Text, nullable=False)
    species = Column(Text, nullable=False)
    status = Column(SAEnum(PetStatus, name="pet_status_enum"), nullable=False, default=PetStatus.AVAILABLE)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
