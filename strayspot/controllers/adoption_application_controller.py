from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog
from strayspot.controllers import audit_controller
from strayspot.controllers.org_verification_controller import (
    can_act_as_verified_organization,
    require_verified_organization,
)
from strayspot.core.collaborators import (
    Actor,
    EventType,
    NotificationDispatcher,
    PetCatalog,
    StatusChangedEvent,
    dispatch_all,
)
from strayspot.core.errors import (
    AdopterSuspended,
    ApplicationLocked,
    DuplicateActiveApplication,
    IllegalTransition,
    NotAuthorized,
    NotFound,
    PetUnavailable,
    TermsNotAccepted,
    ValidationError,
)
from strayspot.core.transaction import transaction
from strayspot.core.transitions import check_application_transition, is_blank
from strayspot.core.validation import parse_model
from strayspot.models.adoption_application_model import AdoptionApplication
from strayspot.models.audit_entry_model import AuditEntry
from strayspot.models.enums import (
    ActorRole,
    AdopterStatus,
    ApplicationStatus,
    AuditAction,
    EntityType,
    OPEN_APPLICATION_STATUSES,
)
from strayspot.repositories import adopter_repo, adoption_application_repo, org_repo
from strayspot.schemas.adoption_application_schema import (
    AdoptionApplicationCreate,
    AdoptionQuestionnaire,
)

log = structlog.get_logger(__name__)

ADOPTED_BY_ANOTHER_REASON = "This pet has been adopted by another applicant."


def _event(app: AdoptionApplication) -> StatusChangedEvent:
    return StatusChangedEvent(
        type=EventType.APPLICATION_STATUS_CHANGED,
        entity_id=app.application_id,
        new_status=app.status.value,
    )


def _load(db: Session, application_id: int, for_update: bool = False) -> AdoptionApplication:
    app = adoption_application_repo.get_application_by_id(db, application_id, for_update=for_update)
    if not app:
        raise NotFound("Application not found")
    return app


def _is_owning_adopter(actor: Actor, app: AdoptionApplication) -> bool:
    return actor.role == ActorRole.ADOPTER and actor.id == app.adopter_id


def _is_owning_org(actor: Actor, app: AdoptionApplication) -> bool:
    return actor.role == ActorRole.ORG and actor.id == app.org_id


def _require_reviewer(db: Session, actor: Actor, app: AdoptionApplication) -> None:
    if actor.is_admin:
        return
    if not _is_owning_org(actor, app):
        raise NotAuthorized("Not authorized to update this application")
    if not can_act_as_verified_organization(db, actor.id):
        raise NotAuthorized("Only verified organizations can review applications")


def _reviewer_label(db: Session, actor: Actor) -> str:
    if actor.role == ActorRole.ORG:
        org = org_repo.get_org_by_id(db, actor.id)
        if org:
            return org.org_name
    return f"admin:{actor.id}"


def submit_application(
    db: Session,
    actor: Actor,
    payload: AdoptionApplicationCreate | dict,
    catalog: PetCatalog,
    dispatcher: NotificationDispatcher | None = None,
) -> AdoptionApplication:
    if actor.role != ActorRole.ADOPTER:
        raise NotAuthorized("Only adopters can submit adoption applications")
    adopter = adopter_repo.get_adopter_by_id(db, actor.id)
    if not adopter:
        raise NotFound("Adopter not found")
    if adopter.status == AdopterStatus.SUSPENDED:
        raise AdopterSuspended()
    terms = payload.get("terms_accepted") if isinstance(payload, dict) else payload.terms_accepted
    if terms is not True:
        raise TermsNotAccepted()
    data = parse_model(AdoptionApplicationCreate, payload)

    pet = catalog.get_pet(data.pet_id)
    if pet is None:
        raise NotFound("Pet not found")
    if not pet.available:
        raise PetUnavailable()

    existing = adoption_application_repo.get_active_application(db, actor.id, data.pet_id)
    if existing:
        log.info(
            "duplicate_application_rejected",
            adopter_id=actor.id,
            pet_id=data.pet_id,
            existing_application_id=existing.application_id,
        )
        raise DuplicateActiveApplication(existing.application_id)

    try:
        with transaction(db):
            app = adoption_application_repo.create_application(
                db,
                pet_id=pet.pet_id,
                adopter_id=actor.id,
                org_id=pet.org_id,
                status=ApplicationStatus.PENDING,
                terms_accepted=True,
                rejection_reason="",
                organization_notes="",
                reviewed_by="",
                **data.to_columns(),
            )
            audit_controller.record(
                db,
                EntityType.ADOPTION_APPLICATION,
                app.application_id,
                None,
                ApplicationStatus.PENDING,
                actor,
                action=AuditAction.SUBMIT,
            )
    except IntegrityError as exc:
        # Lost the race against a concurrent submission for the same pet.
        existing = adoption_application_repo.get_active_application(db, actor.id, data.pet_id)
        raise DuplicateActiveApplication(existing.application_id if existing else None) from exc

    db.refresh(app)
    log.info(
        "application_submitted",
        application_id=app.application_id,
        adopter_id=actor.id,
        pet_id=app.pet_id,
        org_id=app.org_id,
    )
    dispatch_all(dispatcher, [_event(app)])
    return app


def get_application(db: Session, application_id: int, actor: Actor) -> AdoptionApplication:
    app = _load(db, application_id)
    if not (actor.is_admin or _is_owning_adopter(actor, app) or _is_owning_org(actor, app)):
        raise NotAuthorized("Not authorized to view this application")
    return app


def list_for_adopter(db: Session, actor: Actor, status: ApplicationStatus | None = None) -> list[AdoptionApplication]:
    if actor.role != ActorRole.ADOPTER:
        raise NotAuthorized("Adopter access required")
    return adoption_application_repo.list_applications(db, adopter_id=actor.id, status=status)


def list_for_organization(db: Session, actor: Actor, status: ApplicationStatus | None = None) -> list[AdoptionApplication]:
    require_verified_organization(db, actor)
    return adoption_application_repo.list_applications(db, org_id=actor.id, status=status)


def list_all(db: Session, status: ApplicationStatus | None = None) -> list[AdoptionApplication]:
    return adoption_application_repo.list_applications(db, status=status)


def transition(
    db: Session,
    application_id: int,
    actor: Actor,
    new_status: ApplicationStatus,
    notes: str | None,
    catalog: PetCatalog,
    dispatcher: NotificationDispatcher | None = None,
    organization_notes: str | None = None,
) -> AdoptionApplication:
    """Move an application along its status graph.

    Approval closes every other open application for the same pet and tells
    the catalog the pet has been adopted, all in the same transaction.
    """
    if new_status == ApplicationStatus.WITHDRAWN:
        return withdraw(db, application_id, actor, dispatcher=dispatcher)

    events = []
    with transaction(db):
        app = _load(db, application_id, for_update=True)
        _require_reviewer(db, actor, app)
        previous = app.status
        check_application_transition(previous, new_status, actor.role, notes)

        now = datetime.now(timezone.utc)
        app.status = new_status
        if new_status == ApplicationStatus.REJECTED:
            app.rejection_reason = notes.strip()
        if not is_blank(organization_notes):
            app.organization_notes = organization_notes.strip()
        elif not is_blank(notes) and new_status != ApplicationStatus.REJECTED:
            app.organization_notes = notes.strip()
        app.reviewed_by = _reviewer_label(db, actor)
        if new_status in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
            app.reviewed_at = now
        audit_controller.record(
            db,
            EntityType.ADOPTION_APPLICATION,
            app.application_id,
            previous,
            new_status,
            actor,
            notes,
            action=AuditAction.TRANSITION,
        )
        events.append(_event(app))

        if new_status == ApplicationStatus.APPROVED:
            siblings = adoption_application_repo.list_open_applications_for_pet(
                db, app.pet_id, exclude_id=app.application_id
            )
            for sibling in siblings:
                sibling_previous = sibling.status
                sibling.status = ApplicationStatus.REJECTED
                sibling.rejection_reason = ADOPTED_BY_ANOTHER_REASON
                sibling.reviewed_by = app.reviewed_by
                sibling.reviewed_at = now
                audit_controller.record(
                    db,
                    EntityType.ADOPTION_APPLICATION,
                    sibling.application_id,
                    sibling_previous,
                    ApplicationStatus.REJECTED,
                    actor,
                    ADOPTED_BY_ANOTHER_REASON,
                    action=AuditAction.AUTO_REJECT,
                )
                events.append(_event(sibling))
            catalog.notify_application_approved(app.pet_id, app.application_id)

    db.refresh(app)
    log.info(
        "application_status_changed",
        application_id=application_id,
        actor_id=actor.id,
        actor_role=actor.role.value,
        previous_status=previous.value,
        new_status=new_status.value,
        auto_rejected=len(events) - 1,
    )
    dispatch_all(dispatcher, events)
    return app


def withdraw(
    db: Session,
    application_id: int,
    actor: Actor,
    dispatcher: NotificationDispatcher | None = None,
) -> AdoptionApplication:
    with transaction(db):
        app = _load(db, application_id, for_update=True)
        if not _is_owning_adopter(actor, app):
            raise NotAuthorized("Only the adopter who applied can withdraw this application")
        previous = app.status
        check_application_transition(previous, ApplicationStatus.WITHDRAWN, actor.role)
        app.status = ApplicationStatus.WITHDRAWN
        audit_controller.record(
            db,
            EntityType.ADOPTION_APPLICATION,
            app.application_id,
            previous,
            ApplicationStatus.WITHDRAWN,
            actor,
            action=AuditAction.WITHDRAW,
        )
    db.refresh(app)
    log.info("application_withdrawn", application_id=application_id, adopter_id=actor.id, previous_status=previous.value)
    dispatch_all(dispatcher, [_event(app)])
    return app


def annotate(db: Session, application_id: int, actor: Actor, notes: str | None) -> AdoptionApplication:
    """Append organization notes; allowed in every status."""
    if is_blank(notes):
        raise ValidationError("Notes are required")
    with transaction(db):
        app = _load(db, application_id, for_update=True)
        _require_reviewer(db, actor, app)
        existing = app.organization_notes.strip()
        app.organization_notes = f"{existing}\n{notes.strip()}" if existing else notes.strip()
        app.reviewed_by = _reviewer_label(db, actor)
    db.refresh(app)
    log.info("application_annotated", application_id=application_id, actor_id=actor.id)
    return app


def amend(
    db: Session,
    application_id: int,
    actor: Actor,
    questionnaire: AdoptionQuestionnaire | dict,
) -> AdoptionApplication:
    """Correct the questionnaire answers while the application is still open.

    Only the owning verified organization or an admin may do this.
    """
    data = parse_model(AdoptionQuestionnaire, questionnaire)
    with transaction(db):
        app = _load(db, application_id, for_update=True)
        _require_reviewer(db, actor, app)
        if app.status not in OPEN_APPLICATION_STATUSES:
            raise ApplicationLocked(app.status)
        for column, value in data.to_columns().items():
            setattr(app, column, value)
    db.refresh(app)
    log.info("application_amended", application_id=application_id, actor_id=actor.id)
    return app


def delete_application(db: Session, application_id: int, actor: Actor) -> None:
    """Remove a rejected application. Its audit history is kept."""
    with transaction(db):
        app = _load(db, application_id, for_update=True)
        _require_reviewer(db, actor, app)
        if app.status != ApplicationStatus.REJECTED:
            raise IllegalTransition(message="Only rejected applications can be deleted")
        audit_controller.record(
            db,
            EntityType.ADOPTION_APPLICATION,
            app.application_id,
            app.status,
            app.status,
            actor,
            f"Deleted application for pet {app.pet_id} by adopter {app.adopter_id}",
            action=AuditAction.DELETE,
        )
        adoption_application_repo.delete_application(db, app)
    log.info("application_deleted", application_id=application_id, actor_id=actor.id)


def application_history(db: Session, application_id: int, actor: Actor) -> list[AuditEntry]:
    get_application(db, application_id, actor)
    return audit_controller.history(db, EntityType.ADOPTION_APPLICATION, application_id)
