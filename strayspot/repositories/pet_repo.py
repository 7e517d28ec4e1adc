from sqlalchemy.orm import Session
from sqlalchemy import delete, select
import structlog
from strayspot.core.collaborators import PetListing
from strayspot.models.pet_model import Pet
from strayspot.models.enums import PetStatus
from strayspot.schemas.pet_schema import PetCreate

log = structlog.get_logger(__name__)


def create_pet(db: Session, org_id: int, data: PetCreate) -> Pet:
    pet = Pet(**data.model_dump(), org_id=org_id, status=PetStatus.AVAILABLE)
    db.add(pet)
    db.flush()
    return pet


def get_pet_by_id(db: Session, pet_id: int) -> Pet | None:
    stmt = select(Pet).where(Pet.pet_id == pet_id)
    return db.execute(stmt).scalars().first()


class SqlPetCatalog:
    """Pet catalog backed by ``pet_tbl``, sharing the caller's session.

    Writes are flushed, not committed, so they land in the same transaction
    as the engine operation that triggered them.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_pet(self, pet_id: int) -> PetListing | None:
        pet = get_pet_by_id(self.db, pet_id)
        if pet is None:
            return None
        return PetListing(pet_id=pet.pet_id, org_id=pet.org_id, available=pet.status == PetStatus.AVAILABLE)

    def notify_application_approved(self, pet_id: int, application_id: int) -> None:
        pet = get_pet_by_id(self.db, pet_id)
        if pet is None:
            log.warning("approved_pet_missing", pet_id=pet_id, application_id=application_id)
            return
        pet.status = PetStatus.ADOPTED
        self.db.flush()

    def remove_pets_for_organization(self, org_id: int) -> int:
        result = self.db.execute(delete(Pet).where(Pet.org_id == org_id))
        return result.rowcount or 0
