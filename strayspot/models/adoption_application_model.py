from sqlalchemy import Column, Boolean, Index, Integer, Text, TIMESTAMP, Enum as SAEnum, text
from sqlalchemy.sql import func
from strayspot.models.base import Base, IdType
from strayspot.models.enums import ApplicationStatus, ACTIVE_APPLICATION_STATUSES

_ACTIVE_STATUS_CLAUSE = text(
    "status IN ({})".format(", ".join(f"'{s.name}'" for s in ACTIVE_APPLICATION_STATUSES))
)


class AdoptionApplication(Base):
    __tablename__ = "adoption_application_tbl"

    application_id = Column(IdType, primary_key=True, index=True)
    # Adopters, orgs and pets are referenced by id only so that audit history
    # and approved adoptions outlive account deletion.
    pet_id = Column(IdType, nullable=False, index=True)
    adopter_id = Column(IdType, nullable=False, index=True)
    org_id = Column(IdType, nullable=False, index=True)
    status = Column(SAEnum(ApplicationStatus, name="application_status_enum"), nullable=False, default=ApplicationStatus.PENDING, index=True)

    housing_status = Column(Text, nullable=False)
    pets_allowed = Column(Text, nullable=False)
    pet_location = Column(Text, nullable=False)
    primary_caregiver = Column(Text, nullable=False)
    other_pets = Column(Text, nullable=False)
    financially_prepared = Column(Text, nullable=False)
    emergency_pet_care = Column(Text, nullable=False)

    reference_name = Column(Text, nullable=False)
    reference_email = Column(Text, nullable=False)
    reference_phone = Column(Text, nullable=False)
    terms_accepted = Column(Boolean, nullable=False)

    rejection_reason = Column(Text, nullable=False, default="")
    organization_notes = Column(Text, nullable=False, default="")
    reviewed_by = Column(Text, nullable=False, default="")
    reviewed_at = Column(TIMESTAMP(timezone=True))

    version = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index(
            "uq_active_application_per_adopter_pet",
            "adopter_id",
            "pet_id",
            unique=True,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
        ),
        {"sqlite_autoincrement": True},
    )
