"""Audit Trail Recorder.

``record`` appends inside the caller's transaction; the controller that owns
the transition commits the status change and its entry together.
"""

from sqlalchemy.orm import Session
from strayspot.core.collaborators import Actor
from strayspot.core.errors import ValidationError
from strayspot.models.audit_entry_model import AuditEntry
from strayspot.models.enums import AuditAction, EntityType, STATUS_ENUM_BY_ENTITY
from strayspot.repositories import audit_repo


def _status_value(entity_type: EntityType, status, field: str) -> str:
    status_enum = STATUS_ENUM_BY_ENTITY[entity_type]
    if isinstance(status, status_enum):
        return status.value
    try:
        return status_enum(status).value
    except ValueError:
        raise ValidationError(f"{field} {status!r} is not a valid {entity_type.value} status") from None


def record(
    db: Session,
    entity_type: EntityType,
    entity_id: int,
    previous_status,
    new_status,
    actor: Actor | None,
    notes: str | None = None,
    action: AuditAction = AuditAction.TRANSITION,
    resubmission: bool = False,
) -> AuditEntry:
    new_value = _status_value(entity_type, new_status, "new_status")
    previous_value = None
    if previous_status is not None:
        previous_value = _status_value(entity_type, previous_status, "previous_status")
    return audit_repo.append_entry(
        db,
        entity_type=entity_type,
        entity_id=entity_id,
        action=AuditAction(action).value,
        previous_status=previous_value,
        new_status=new_value,
        actor_id=actor.id if actor else None,
        actor_role=actor.role if actor else None,
        notes=(notes or "").strip(),
        resubmission=resubmission,
    )


def history(db: Session, entity_type: EntityType, entity_id: int) -> list[AuditEntry]:
    """Entries for one entity, oldest first."""
    return audit_repo.list_entries_for_entity(db, entity_type, entity_id)


def history_for_actor(db: Session, actor: Actor) -> list[AuditEntry]:
    return audit_repo.list_entries_for_actor(db, actor.id, actor.role)
