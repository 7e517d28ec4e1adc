from sqlalchemy.orm import Session
from sqlalchemy import delete, func, select
from strayspot.models.adoption_application_model import AdoptionApplication
from strayspot.models.enums import ApplicationStatus, ACTIVE_APPLICATION_STATUSES, OPEN_APPLICATION_STATUSES


def create_application(db: Session, **columns) -> AdoptionApplication:
    app = AdoptionApplication(**columns)
    db.add(app)
    db.flush()
    return app


def get_application_by_id(db: Session, application_id: int, for_update: bool = False) -> AdoptionApplication | None:
    stmt = select(AdoptionApplication).where(AdoptionApplication.application_id == application_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def get_active_application(db: Session, adopter_id: int, pet_id: int) -> AdoptionApplication | None:
    stmt = select(AdoptionApplication).where(
        AdoptionApplication.adopter_id == adopter_id,
        AdoptionApplication.pet_id == pet_id,
        AdoptionApplication.status.in_(ACTIVE_APPLICATION_STATUSES),
    )
    return db.execute(stmt).scalars().first()


def list_open_applications_for_pet(db: Session, pet_id: int, exclude_id: int | None = None) -> list[AdoptionApplication]:
    stmt = (
        select(AdoptionApplication)
        .where(
            AdoptionApplication.pet_id == pet_id,
            AdoptionApplication.status.in_(OPEN_APPLICATION_STATUSES),
        )
        .order_by(AdoptionApplication.application_id)
        .with_for_update()
    )
    if exclude_id is not None:
        stmt = stmt.where(AdoptionApplication.application_id != exclude_id)
    return list(db.execute(stmt).scalars().all())


def list_open_applications_for_adopter(db: Session, adopter_id: int) -> list[AdoptionApplication]:
    stmt = select(AdoptionApplication).where(
        AdoptionApplication.adopter_id == adopter_id,
        AdoptionApplication.status.in_(OPEN_APPLICATION_STATUSES),
    )
    return list(db.execute(stmt).scalars().all())


def list_applications(
    db: Session,
    adopter_id: int | None = None,
    org_id: int | None = None,
    status: ApplicationStatus | None = None,
) -> list[AdoptionApplication]:
    stmt = select(AdoptionApplication)
    if adopter_id is not None:
        stmt = stmt.where(AdoptionApplication.adopter_id == adopter_id)
    if org_id is not None:
        stmt = stmt.where(AdoptionApplication.org_id == org_id)
    if status:
        stmt = stmt.where(AdoptionApplication.status == status)
    stmt = stmt.order_by(AdoptionApplication.created_at.desc(), AdoptionApplication.application_id.desc())
    return list(db.execute(stmt).scalars().all())


def delete_application(db: Session, app: AdoptionApplication) -> None:
    db.delete(app)
    db.flush()


def delete_applications_for_org(db: Session, org_id: int) -> int:
    result = db.execute(delete(AdoptionApplication).where(AdoptionApplication.org_id == org_id))
    return result.rowcount or 0


def count_applications_by_status(db: Session) -> dict[ApplicationStatus, int]:
    stmt = select(AdoptionApplication.status, func.count()).group_by(AdoptionApplication.status)
    return {status: count for status, count in db.execute(stmt).all()}
