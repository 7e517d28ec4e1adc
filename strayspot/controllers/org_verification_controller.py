from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog
from strayspot.controllers import audit_controller
from strayspot.core.collaborators import (
    Actor,
    EventType,
    NotificationDispatcher,
    PetCatalog,
    StatusChangedEvent,
    dispatch_all,
)
from strayspot.core.errors import MissingReason, NotAuthorized, NotFound, ValidationError
from strayspot.core.transaction import transaction
from strayspot.core.transitions import (
    check_verification_decision,
    check_verification_resubmission,
    is_blank,
)
from strayspot.models.audit_entry_model import AuditEntry
from strayspot.models.enums import ActorRole, AuditAction, EntityType, VerificationStatus
from strayspot.models.org_model import Org
from strayspot.repositories import adoption_application_repo, org_repo
from strayspot.schemas.org_schema import OrgCreate

log = structlog.get_logger(__name__)

DEFAULT_RESUBMISSION_NOTE = "Document resubmitted"


def _load(db: Session, org_id: int, for_update: bool = False) -> Org:
    org = org_repo.get_org_by_id(db, org_id, for_update=for_update)
    if not org:
        raise NotFound("Organization not found")
    return org


def _event(org: Org) -> StatusChangedEvent:
    return StatusChangedEvent(
        type=EventType.ORGANIZATION_STATUS_CHANGED,
        entity_id=org.org_id,
        new_status=org.verification_status.value,
    )


def register_organization(db: Session, data: OrgCreate) -> Org:
    if org_repo.get_org_by_email(db, data.email):
        raise ValidationError("An organization with this email already exists")
    try:
        with transaction(db):
            org = org_repo.create_org(db, data)
            audit_controller.record(
                db,
                EntityType.ORGANIZATION,
                org.org_id,
                None,
                VerificationStatus.PENDING,
                actor=None,
                action=AuditAction.REGISTER,
            )
    except IntegrityError as exc:
        raise ValidationError("An organization with this email already exists") from exc
    db.refresh(org)
    log.info("organization_registered", org_id=org.org_id)
    return org


def get_organization(db: Session, org_id: int) -> Org:
    return _load(db, org_id)


def list_organizations(db: Session, status: VerificationStatus | None = None) -> list[Org]:
    return org_repo.get_orgs(db, status=status)


def can_act_as_verified_organization(db: Session, org_id: int) -> bool:
    org = org_repo.get_org_by_id(db, org_id)
    return org is not None and org.verification_status == VerificationStatus.VERIFIED


def require_verified_organization(db: Session, actor: Actor) -> None:
    if actor.role != ActorRole.ORG:
        raise NotAuthorized("Organization access required")
    if not can_act_as_verified_organization(db, actor.id):
        raise NotAuthorized("Only verified organizations can perform this action")


def decide(
    db: Session,
    org_id: int,
    actor: Actor,
    new_status: VerificationStatus,
    notes: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> Org:
    """Record an admin's verification decision for a pending organization."""
    if actor.role != ActorRole.ADMIN:
        raise NotAuthorized("Only an admin can decide on verification")
    with transaction(db):
        org = _load(db, org_id, for_update=True)
        previous = org.verification_status
        check_verification_decision(previous, new_status, actor.role, notes)
        org.verification_status = new_status
        org.verification_notes = (notes or "").strip()
        audit_controller.record(
            db,
            EntityType.ORGANIZATION,
            org.org_id,
            previous,
            new_status,
            actor,
            notes,
            action=AuditAction.DECIDE,
            resubmission=False,
        )
    db.refresh(org)
    log.info(
        "organization_verification_decided",
        org_id=org_id,
        admin_id=actor.id,
        previous_status=previous.value,
        new_status=new_status.value,
    )
    dispatch_all(dispatcher, [_event(org)])
    return org


def resubmit(
    db: Session,
    org_id: int,
    actor: Actor,
    new_document: str | None,
    additional_info: str | None = None,
    dispatcher: NotificationDispatcher | None = None,
) -> Org:
    """Send an organization in FOLLOWUP back to PENDING with a new document.

    The displayed notes are cleared; the admin's earlier instructions remain
    in the verification history.
    """
    if actor.role != ActorRole.ORG or actor.id != org_id:
        raise NotAuthorized("Only the organization itself can resubmit verification")
    if is_blank(new_document):
        raise ValidationError("A verification document is required")
    with transaction(db):
        org = _load(db, org_id, for_update=True)
        previous = org.verification_status
        check_verification_resubmission(previous, actor.role)
        org.verification_status = VerificationStatus.PENDING
        org.verification_document = new_document.strip()
        org.verification_notes = ""
        org.resubmission_notes = (additional_info or "").strip()
        audit_controller.record(
            db,
            EntityType.ORGANIZATION,
            org.org_id,
            previous,
            VerificationStatus.PENDING,
            actor,
            additional_info if not is_blank(additional_info) else DEFAULT_RESUBMISSION_NOTE,
            action=AuditAction.RESUBMIT,
            resubmission=True,
        )
    db.refresh(org)
    log.info("organization_verification_resubmitted", org_id=org_id)
    dispatch_all(dispatcher, [_event(org)])
    return org


def delete_organization(
    db: Session,
    org_id: int,
    actor: Actor,
    reason: str | None,
    catalog: PetCatalog,
) -> None:
    """Delete an organization together with its pets and applications.

    The audit history of the organization and of its applications is kept.
    """
    if not actor.is_admin:
        raise NotAuthorized("Only an admin can delete organizations")
    if is_blank(reason):
        raise MissingReason("A reason is required to delete an organization")
    with transaction(db):
        org = _load(db, org_id, for_update=True)
        audit_controller.record(
            db,
            EntityType.ORGANIZATION,
            org.org_id,
            org.verification_status,
            org.verification_status,
            actor,
            f"Deleted organization {org.org_name} ({org.email}). Reason: {reason.strip()}",
            action=AuditAction.DELETE,
        )
        removed_apps = adoption_application_repo.delete_applications_for_org(db, org_id)
        removed_pets = catalog.remove_pets_for_organization(org_id)
        org_repo.delete_org(db, org)
    log.info(
        "organization_deleted",
        org_id=org_id,
        admin_id=actor.id,
        applications_removed=removed_apps,
        pets_removed=removed_pets,
    )


def organization_history(db: Session, org_id: int) -> list[AuditEntry]:
    return audit_controller.history(db, EntityType.ORGANIZATION, org_id)
