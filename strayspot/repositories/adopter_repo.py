from sqlalchemy.orm import Session
from sqlalchemy import func, select
from strayspot.models.adopter_model import Adopter
from strayspot.models.enums import AdopterStatus
from strayspot.schemas.adopter_schema import AdopterCreate


def get_adopter_by_id(db: Session, adopter_id: int, for_update: bool = False) -> Adopter | None:
    stmt = select(Adopter).where(Adopter.adopter_id == adopter_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def get_adopter_by_email(db: Session, email: str) -> Adopter | None:
    stmt = select(Adopter).where(func.lower(Adopter.email) == email.lower())
    return db.execute(stmt).scalars().first()


def list_adopters(db: Session, status: AdopterStatus | None = None) -> list[Adopter]:
    stmt = select(Adopter)
    if status:
        stmt = stmt.where(Adopter.status == status)
    return list(db.execute(stmt.order_by(Adopter.adopter_id)).scalars().all())


def create_adopter(db: Session, data: AdopterCreate) -> Adopter:
    adopter = Adopter(**data.model_dump(), status=AdopterStatus.ACTIVE, status_notes="")
    db.add(adopter)
    db.flush()
    return adopter


def delete_adopter(db: Session, adopter: Adopter) -> None:
    db.delete(adopter)
    db.flush()


def count_adopters_by_status(db: Session) -> dict[AdopterStatus, int]:
    stmt = select(Adopter.status, func.count()).group_by(Adopter.status)
    return {status: count for status, count in db.execute(stmt).all()}
