from sqlalchemy import Column, Integer, Text, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from strayspot.models.base import Base, IdType
from strayspot.models.enums import VerificationStatus


class Org(Base):
    __tablename__ = "org_tbl"

    org_id = Column(IdType, primary_key=True, index=True)
    org_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    verification_status = Column(
        SAEnum(VerificationStatus, name="verification_status_enum"),
        nullable=False,
        default=VerificationStatus.PENDING,
        index=True,
    )
    verification_document = Column(Text, nullable=False)
    verification_notes = Column(Text, nullable=False, default="")
    resubmission_notes = Column(Text, nullable=False, default="")
    version = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}
