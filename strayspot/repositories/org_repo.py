from sqlalchemy.orm import Session
from sqlalchemy import func, select
from strayspot.models.org_model import Org
from strayspot.models.enums import VerificationStatus
from strayspot.schemas.org_schema import OrgCreate


def get_org_by_id(db: Session, org_id: int, for_update: bool = False) -> Org | None:
    stmt = select(Org).where(Org.org_id == org_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def get_org_by_email(db: Session, email: str) -> Org | None:
    stmt = select(Org).where(func.lower(Org.email) == email.lower())
    return db.execute(stmt).scalars().first()


def get_orgs(db: Session, status: VerificationStatus | None = None) -> list[Org]:
    stmt = select(Org)
    if status:
        stmt = stmt.where(Org.verification_status == status)
    return list(db.execute(stmt.order_by(Org.org_id)).scalars().all())


def create_org(db: Session, data: OrgCreate) -> Org:
    org = Org(
        **data.model_dump(),
        verification_status=VerificationStatus.PENDING,
        verification_notes="",
        resubmission_notes="",
    )
    db.add(org)
    db.flush()
    return org


def delete_org(db: Session, org: Org) -> None:
    db.delete(org)
    db.flush()


def count_orgs_by_status(db: Session) -> dict[VerificationStatus, int]:
    stmt = select(Org.verification_status, func.count()).group_by(Org.verification_status)
    return {status: count for status, count in db.execute(stmt).all()}
