from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from strayspot.core.auth import get_current_actor, require_admin
from strayspot.core.collaborators import Actor, NotificationDispatcher
from strayspot.core.db import get_db
from strayspot.core.deps import get_dispatcher
from strayspot.models.enums import AdopterStatus
from strayspot.controllers import adopter_standing_controller as controller
from strayspot.schemas.adopter_schema import AdopterCreate, AdopterRead, DeletionRequest, StandingChange
from strayspot.schemas.audit_schema import AuditEntryRead

router = APIRouter(prefix="/adopters", tags=["adopters"])


@router.post("", response_model=AdopterRead, status_code=status.HTTP_201_CREATED)
def register_adopter_route(payload: AdopterCreate, db: Session = Depends(get_db)):
    return controller.register_adopter(db, payload)


@router.get("", response_model=list[AdopterRead])
def list_adopters_route(
    status: AdopterStatus | None = Query(default=None),
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.list_adopters(db, status=status)


@router.get("/{adopter_id}", response_model=AdopterRead)
def get_adopter_route(
    adopter_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    return controller.get_adopter(db, adopter_id, actor)


@router.post("/{adopter_id}/suspend", response_model=AdopterRead)
def suspend_adopter_route(
    adopter_id: int,
    payload: StandingChange,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.suspend(db, adopter_id, actor, payload.notes, dispatcher)


@router.post("/{adopter_id}/reactivate", response_model=AdopterRead)
def reactivate_adopter_route(
    adopter_id: int,
    payload: StandingChange,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.reactivate(db, adopter_id, actor, payload.notes, dispatcher)


@router.delete("/{adopter_id}")
def delete_adopter_route(
    adopter_id: int,
    payload: DeletionRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
):
    controller.delete_adopter(db, adopter_id, actor, payload.reason)
    return {"status": "ok"}


@router.get("/{adopter_id}/history", response_model=list[AuditEntryRead])
def adopter_history_route(
    adopter_id: int,
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.adopter_history(db, adopter_id)
