from __future__ import annotations

import structlog
from sqlalchemy.orm import Session

from strayspot.controllers import adopter_standing_controller, org_verification_controller
from strayspot.core.collaborators import Actor
from strayspot.core.db import SessionLocal, init_db
from strayspot.core.transaction import transaction
from strayspot.models.enums import ActorRole, VerificationStatus
from strayspot.models.org_model import Org
from strayspot.repositories import adopter_repo, org_repo, pet_repo
from strayspot.schemas.adopter_schema import AdopterCreate
from strayspot.schemas.org_schema import OrgCreate
from strayspot.schemas.pet_schema import PetCreate

log = structlog.get_logger(__name__)

SEED_ADMIN = Actor(id=1, role=ActorRole.ADMIN)

SEED_ORGS = [
    {
        "org_name": "Paws Haven Rescue",
        "email": "hello@pawshaven.example.com",
        "verification_document": "seed/paws-haven-registration.pdf",
        "decision": VerificationStatus.VERIFIED,
        "notes": "",
        "pets": [("Biscuit", "dog"), ("Miso", "cat")],
    },
    {
        "org_name": "Northside Animal Shelter",
        "email": "contact@northside.example.com",
        "verification_document": "seed/northside-permit.pdf",
        "decision": VerificationStatus.FOLLOWUP,
        "notes": "Please upload a permit that shows the current year.",
        "pets": [],
    },
    {
        "org_name": "Second Chance Strays",
        "email": "team@secondchance.example.com",
        "verification_document": "seed/second-chance-certificate.pdf",
        "decision": None,
        "notes": "",
        "pets": [],
    },
]

SEED_ADOPTERS = [
    {"email": "maria.santos@seed.example.com", "first_name": "Maria", "last_name": "Santos"},
    {"email": "jun.reyes@seed.example.com", "first_name": "Jun", "last_name": "Reyes"},
]


def seed_organizations(db: Session) -> list[Org]:
    created_orgs: list[Org] = []
    for item in SEED_ORGS:
        if org_repo.get_org_by_email(db, item["email"]):
            continue

        org = org_verification_controller.register_organization(
            db,
            OrgCreate(
                org_name=item["org_name"],
                email=item["email"],
                verification_document=item["verification_document"],
            ),
        )
        if item["decision"] is not None:
            org = org_verification_controller.decide(db, org.org_id, SEED_ADMIN, item["decision"], item["notes"])
        with transaction(db):
            for name, species in item["pets"]:
                pet_repo.create_pet(db, org.org_id, PetCreate(name=name, species=species))
        created_orgs.append(org)
    return created_orgs


def seed_adopters(db: Session) -> int:
    created = 0
    for item in SEED_ADOPTERS:
        if adopter_repo.get_adopter_by_email(db, item["email"]):
            continue
        adopter_standing_controller.register_adopter(db, AdopterCreate(**item))
        created += 1
    return created


def run_seed() -> None:
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    init_db()
    db = SessionLocal()
    try:
        orgs = seed_organizations(db)
        adopters = seed_adopters(db)
        log.info("seed_complete", organizations=len(orgs), adopters=adopters)
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
