from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from strayspot.core.auth import require_admin, require_org
from strayspot.core.collaborators import Actor, NotificationDispatcher, PetCatalog
from strayspot.core.db import get_db
from strayspot.core.deps import get_dispatcher, get_pet_catalog
from strayspot.models.enums import VerificationStatus
from strayspot.controllers import org_verification_controller as controller
from strayspot.schemas.adopter_schema import DeletionRequest
from strayspot.schemas.audit_schema import AuditEntryRead
from strayspot.schemas.org_schema import OrgCreate, OrgRead, VerificationDecision, VerificationResubmission

router = APIRouter(prefix="/orgs", tags=["orgs"])


@router.post("", response_model=OrgRead, status_code=status.HTTP_201_CREATED)
def register_org_route(payload: OrgCreate, db: Session = Depends(get_db)):
    return controller.register_organization(db, payload)


@router.get("", response_model=list[OrgRead])
def list_orgs_route(
    status: VerificationStatus | None = Query(default=None),
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.list_organizations(db, status=status)


@router.get("/me", response_model=OrgRead)
def get_my_org_route(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_org),
):
    return controller.get_organization(db, actor.id)


@router.post("/me/verification/resubmit", response_model=OrgRead)
def resubmit_verification_route(
    payload: VerificationResubmission,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_org),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.resubmit(
        db,
        actor.id,
        actor,
        payload.verification_document,
        payload.additional_info,
        dispatcher,
    )


@router.get("/{org_id}", response_model=OrgRead)
def get_org_route(
    org_id: int,
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.get_organization(db, org_id)


@router.patch("/{org_id}/verification", response_model=OrgRead)
def decide_verification_route(
    org_id: int,
    payload: VerificationDecision,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    return controller.decide(db, org_id, actor, payload.status, payload.notes, dispatcher)


@router.delete("/{org_id}")
def delete_org_route(
    org_id: int,
    payload: DeletionRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
    catalog: PetCatalog = Depends(get_pet_catalog),
):
    controller.delete_organization(db, org_id, actor, payload.reason, catalog)
    return {"status": "ok"}


@router.get("/{org_id}/history", response_model=list[AuditEntryRead])
def org_history_route(
    org_id: int,
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    return controller.organization_history(db, org_id)
