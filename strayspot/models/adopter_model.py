from sqlalchemy import Column, Integer, Text, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from strayspot.models.base import Base, IdType
from strayspot.models.enums import AdopterStatus


class Adopter(Base):
    __tablename__ = "adopter_tbl"

    adopter_id = Column(IdType, primary_key=True, index=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    status = Column(SAEnum(AdopterStatus, name="adopter_status_enum"), nullable=False, default=AdopterStatus.ACTIVE, index=True)
    status_notes = Column(Text, nullable=False, default="")
    version = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
