from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from strayspot.core.auth import require_admin
from strayspot.core.collaborators import Actor
from strayspot.core.db import get_db
from strayspot.controllers.audit_controller import history_for_actor
from strayspot.controllers.stats_controller import compute_stats
from strayspot.schemas.audit_schema import AuditEntryRead
from strayspot.schemas.stats_schema import StatsRead

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=StatsRead)
def stats_route(
    response: Response,
    db: Session = Depends(get_db),
    _actor: Actor = Depends(require_admin),
):
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    return compute_stats(db)


@router.get("/activity", response_model=list[AuditEntryRead])
def activity_route(
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_admin),
):
    return history_for_actor(db, actor)
