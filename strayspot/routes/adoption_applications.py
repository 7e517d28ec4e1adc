from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from strayspot.core.auth import get_current_actor, require_admin, require_adopter
from strayspot.core.collaborators import Actor, NotificationDispatcher, PetCatalog
from strayspot.core.db import get_db
from strayspot.core.deps import get_dispatcher, get_pet_catalog
from strayspot.models.enums import ApplicationStatus
from strayspot.controllers import adoption_application_controller as controller
from strayspot.schemas.adoption_application_schema import (
    AdoptionApplicationCreate,
    AdoptionApplicationRead,
    AdoptionQuestionnaire,
    ApplicationNote,
    ApplicationStatusUpdate,
)
from strayspot.schemas.audit_schema import AuditEntryRead

router = APIRouter(prefix="/adoption-applications", tags=["adoption-applications"])


@router.post("", response_model=AdoptionApplicationRead, status_code=status.HTTP_201_CREATED)
def submit_application_route(
    payload: AdoptionApplicationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_adopter),
    catalog: PetCatalog = Depends(get_pet_catalog),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.submit_application(db, actor, payload, catalog, dispatcher)


@router.get("", response_model=list[AdoptionApplicationRead])
def list_applications_route(
    status: ApplicationStatus | None = Query(default=None),
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.list_all(db, status=status)


@router.get("/mine", response_model=list[AdoptionApplicationRead])
def list_my_applications_route(
    status: ApplicationStatus | None = Query(default=None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_adopter),
):
    return controller.list_for_adopter(db, actor, status=status)


@router.get("/organization", response_model=list[AdoptionApplicationRead])
def list_organization_applications_route(
    status: ApplicationStatus | None = Query(default=None),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.list_for_organization(db, actor, status=status)


@router.get("/{application_id}", response_model=AdoptionApplicationRead)
def get_application_route(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.get_application(db, application_id, actor)


@router.patch("/{application_id}/status", response_model=AdoptionApplicationRead)
def transition_application_route(
    application_id: int,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    catalog: PetCatalog = Depends(get_pet_catalog),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.transition(
        db,
        application_id,
        actor,
        payload.status,
        payload.notes,
        catalog,
        dispatcher,
        organization_notes=payload.organization_notes,
    )


@router.post("/{application_id}/withdraw", response_model=AdoptionApplicationRead)
def withdraw_application_route(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_adopter),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.withdraw(db, application_id, actor, dispatcher)


@router.post("/{application_id}/notes", response_model=AdoptionApplicationRead)
def annotate_application_route(
    application_id: int,
    payload: ApplicationNote,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.annotate(db, application_id, actor, payload.notes)


@router.put("/{application_id}/answers", response_model=AdoptionApplicationRead)
def amend_application_route(
    application_id: int,
    payload: AdoptionQuestionnaire,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.amend(db, application_id, actor, payload)


@router.delete("/{application_id}")
def delete_application_route(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    controller.delete_application(db, application_id, actor)
    return {"status": "ok"}


@router.get("/{application_id}/history", response_model=list[AuditEntryRead])
def application_history_route(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.application_history(db, application_id, actor)
