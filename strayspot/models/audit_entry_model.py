from sqlalchemy import Column, Boolean, Index, Text, TIMESTAMP, Enum as SAEnum
from strayspot.models.base import Base, IdType
from strayspot.models.enums import ActorRole, EntityType


class AuditEntry(Base):
    """One recorded status transition. Rows are only ever inserted."""

    __tablename__ = "audit_entry_tbl"

    entry_id = Column(IdType, primary_key=True, index=True)
    entity_type = Column(SAEnum(EntityType, name="entity_type_enum"), nullable=False)
    entity_id = Column(IdType, nullable=False)
    action = Column(Text, nullable=False)
    previous_status = Column(Text)
    new_status = Column(Text, nullable=False)
    actor_id = Column(IdType)
    actor_role = Column(SAEnum(ActorRole, name="actor_role_enum"))
    notes = Column(Text, nullable=False, default="")
    resubmission = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_audit_entry_entity", "entity_type", "entity_id"),
        Index("ix_audit_entry_actor", "actor_role", "actor_id"),
    )
