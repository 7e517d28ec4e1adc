from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select
from strayspot.models.audit_entry_model import AuditEntry
from strayspot.models.enums import ActorRole, EntityType


def append_entry(db: Session, **columns) -> AuditEntry:
    entry = AuditEntry(**columns, created_at=datetime.now(timezone.utc))
    db.add(entry)
    db.flush()
    return entry


def list_entries_for_entity(db: Session, entity_type: EntityType, entity_id: int) -> list[AuditEntry]:
    stmt = (
        select(AuditEntry)
        .where(AuditEntry.entity_type == entity_type, AuditEntry.entity_id == entity_id)
        .order_by(AuditEntry.created_at, AuditEntry.entry_id)
    )
    return list(db.execute(stmt).scalars().all())


def list_entries_for_actor(db: Session, actor_id: int, actor_role: ActorRole) -> list[AuditEntry]:
    stmt = (
        select(AuditEntry)
        .where(AuditEntry.actor_id == actor_id, AuditEntry.actor_role == actor_role)
        .order_by(AuditEntry.created_at, AuditEntry.entry_id)
    )
    return list(db.execute(stmt).scalars().all())
