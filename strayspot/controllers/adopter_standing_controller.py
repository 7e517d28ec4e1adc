from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog
from strayspot.controllers import audit_controller
from strayspot.core.collaborators import (
    Actor,
    EventType,
    NotificationDispatcher,
    StatusChangedEvent,
    dispatch_all,
)
from strayspot.core.errors import HasActiveApplications, MissingReason, NotAuthorized, NotFound, ValidationError
from strayspot.core.transaction import transaction
from strayspot.core.transitions import check_standing_change, is_blank
from strayspot.models.adopter_model import Adopter
from strayspot.models.audit_entry_model import AuditEntry
from strayspot.models.enums import ActorRole, AdopterStatus, AuditAction, EntityType
from strayspot.repositories import adopter_repo, adoption_application_repo
from strayspot.schemas.adopter_schema import AdopterCreate

log = structlog.get_logger(__name__)


def _load(db: Session, adopter_id: int, for_update: bool = False) -> Adopter:
    adopter = adopter_repo.get_adopter_by_id(db, adopter_id, for_update=for_update)
    if not adopter:
        raise NotFound("Adopter not found")
    return adopter


def _event(adopter: Adopter) -> StatusChangedEvent:
    return StatusChangedEvent(
        type=EventType.ADOPTER_STATUS_CHANGED,
        entity_id=adopter.adopter_id,
        new_status=adopter.status.value,
    )


def register_adopter(db: Session, data: AdopterCreate) -> Adopter:
    if adopter_repo.get_adopter_by_email(db, data.email):
        raise ValidationError("An adopter with this email already exists")
    try:
        with transaction(db):
            adopter = adopter_repo.create_adopter(db, data)
            audit_controller.record(
                db,
                EntityType.ADOPTER,
                adopter.adopter_id,
                None,
                AdopterStatus.ACTIVE,
                actor=None,
                action=AuditAction.REGISTER,
            )
    except IntegrityError as exc:
        raise ValidationError("An adopter with this email already exists") from exc
    db.refresh(adopter)
    log.info("adopter_registered", adopter_id=adopter.adopter_id)
    return adopter


def get_adopter(db: Session, adopter_id: int, actor: Actor) -> Adopter:
    if not actor.is_admin and not (actor.role == ActorRole.ADOPTER and actor.id == adopter_id):
        raise NotAuthorized("Not authorized to view this adopter")
    return _load(db, adopter_id)


def list_adopters(db: Session, status: AdopterStatus | None = None) -> list[Adopter]:
    return adopter_repo.list_adopters(db, status=status)


def is_adopter_active(db: Session, adopter_id: int) -> bool:
    adopter = adopter_repo.get_adopter_by_id(db, adopter_id)
    return adopter is not None and adopter.status == AdopterStatus.ACTIVE


def suspend(
    db: Session,
    adopter_id: int,
    actor: Actor,
    notes: str | None,
    dispatcher: NotificationDispatcher | None = None,
) -> Adopter:
    """Suspend an adopter.

    Suspending an already suspended adopter is allowed: it replaces the
    reason and appends another history entry.
    """
    check_standing_change(AdopterStatus.SUSPENDED, actor.role, notes)
    with transaction(db):
        adopter = _load(db, adopter_id, for_update=True)
        previous = adopter.status
        adopter.status = AdopterStatus.SUSPENDED
        adopter.status_notes = notes.strip()
        audit_controller.record(
            db,
            EntityType.ADOPTER,
            adopter.adopter_id,
            previous,
            AdopterStatus.SUSPENDED,
            actor,
            notes,
            action=AuditAction.SUSPEND,
        )
    db.refresh(adopter)
    log.info("adopter_suspended", adopter_id=adopter_id, admin_id=actor.id, previous_status=previous.value)
    dispatch_all(dispatcher, [_event(adopter)])
    return adopter


def reactivate(
    db: Session,
    adopter_id: int,
    actor: Actor,
    notes: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> Adopter:
    """Reactivate an adopter.

    Never fails for an adopter that is already active; in that case the
    status is untouched and an entry is appended only when notes are given.
    """
    check_standing_change(AdopterStatus.ACTIVE, actor.role, notes)
    with transaction(db):
        adopter = _load(db, adopter_id, for_update=True)
        previous = adopter.status
        if previous == AdopterStatus.ACTIVE and is_blank(notes):
            log.info("adopter_already_active", adopter_id=adopter_id)
            return adopter
        adopter.status = AdopterStatus.ACTIVE
        adopter.status_notes = (notes or "").strip()
        audit_controller.record(
            db,
            EntityType.ADOPTER,
            adopter.adopter_id,
            previous,
            AdopterStatus.ACTIVE,
            actor,
            notes,
            action=AuditAction.REACTIVATE,
        )
    db.refresh(adopter)
    log.info("adopter_reactivated", adopter_id=adopter_id, admin_id=actor.id, previous_status=previous.value)
    if previous != AdopterStatus.ACTIVE:
        dispatch_all(dispatcher, [_event(adopter)])
    return adopter


def delete_adopter(db: Session, adopter_id: int, actor: Actor, reason: str | None) -> None:
    """Delete an adopter account.

    Blocked while the adopter has applications awaiting a decision. The
    deletion is recorded before the row is removed; approved and closed
    applications keep their adopter id.
    """
    if not actor.is_admin:
        raise NotAuthorized("Only an admin can delete adopters")
    if is_blank(reason):
        raise MissingReason("A reason is required to delete an adopter")
    with transaction(db):
        adopter = _load(db, adopter_id, for_update=True)
        open_apps = adoption_application_repo.list_open_applications_for_adopter(db, adopter_id)
        if open_apps:
            raise HasActiveApplications([a.application_id for a in open_apps])
        audit_controller.record(
            db,
            EntityType.ADOPTER,
            adopter.adopter_id,
            adopter.status,
            adopter.status,
            actor,
            f"Deleted adopter {adopter.first_name} {adopter.last_name} ({adopter.email}). Reason: {reason.strip()}",
            action=AuditAction.DELETE,
        )
        adopter_repo.delete_adopter(db, adopter)
    log.info("adopter_deleted", adopter_id=adopter_id, admin_id=actor.id)


def adopter_history(db: Session, adopter_id: int) -> list[AuditEntry]:
    return audit_controller.history(db, EntityType.ADOPTER, adopter_id)
