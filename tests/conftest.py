import itertools
import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from strayspot.controllers import adopter_standing_controller, org_verification_controller
from strayspot.controllers import adoption_application_controller
from strayspot.core.collaborators import Actor
from strayspot.core.db import get_db, init_db
from strayspot.core.security import create_access_token
from strayspot.core.transaction import transaction
from strayspot.main import app
from strayspot.models.enums import ActorRole, VerificationStatus
from strayspot.repositories import pet_repo
from strayspot.schemas.adopter_schema import AdopterCreate
from strayspot.schemas.org_schema import OrgCreate
from strayspot.schemas.pet_schema import PetCreate


class RecordingDispatcher:
    def __init__(self):
        self.events = []

    def dispatch(self, event):
        self.events.append(event)


def questionnaire(**overrides):
    base = {
        "housing_status": "own",
        "pets_allowed": "yes",
        "pet_location": "Indoors, with a fenced yard",
        "primary_caregiver": "Myself",
        "other_pets": "no",
        "financially_prepared": "yes",
        "emergency_pet_care": "My sister lives next door",
        "reference": {
            "name": "Ana Cruz",
            "email": "ana.cruz@example.com",
            "phone": "0917-123-4567",
        },
    }
    base.update(overrides)
    return base


def application_payload(pet_id, **overrides):
    payload = questionnaire(**overrides)
    payload.setdefault("pet_id", pet_id)
    payload.setdefault("terms_accepted", True)
    return payload


def auth_headers(actor: Actor) -> dict:
    token = create_access_token(subject=str(actor.id), role=actor.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    init_db(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin():
    return Actor(id=900, role=ActorRole.ADMIN)


@pytest.fixture()
def catalog(db_session):
    return pet_repo.SqlPetCatalog(db_session)


@pytest.fixture()
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture()
def make_adopter(db_session):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {"email": f"adopter{n}@example.com", "first_name": "Test", "last_name": f"Adopter{n}"}
        data.update(overrides)
        adopter = adopter_standing_controller.register_adopter(db_session, AdopterCreate(**data))
        return Actor(id=adopter.adopter_id, role=ActorRole.ADOPTER)

    return _make


@pytest.fixture()
def make_org(db_session, admin):
    counter = itertools.count(1)

    def _make(status=VerificationStatus.VERIFIED, notes=None):
        n = next(counter)
        org = org_verification_controller.register_organization(
            db_session,
            OrgCreate(
                org_name=f"Shelter {n}",
                email=f"shelter{n}@example.com",
                verification_document=f"docs/shelter-{n}.pdf",
            ),
        )
        if notes is None and status in (VerificationStatus.FOLLOWUP, VerificationStatus.REJECTED):
            notes = "Please send a clearer permit"
        if status != VerificationStatus.PENDING:
            org_verification_controller.decide(db_session, org.org_id, admin, status, notes)
        return Actor(id=org.org_id, role=ActorRole.ORG)

    return _make


@pytest.fixture()
def make_pet(db_session):
    def _make(org: Actor, name="Biscuit", species="dog"):
        with transaction(db_session):
            pet = pet_repo.create_pet(db_session, org.id, PetCreate(name=name, species=species))
        return pet.pet_id

    return _make


@pytest.fixture()
def submit(db_session, catalog, dispatcher):
    def _submit(adopter: Actor, pet_id: int, **overrides):
        return adoption_application_controller.submit_application(
            db_session, adopter, application_payload(pet_id, **overrides), catalog, dispatcher
        )

    return _submit
