from fastapi import Depends
from sqlalchemy.orm import Session
from strayspot.core.collaborators import LoggingDispatcher, NotificationDispatcher, PetCatalog
from strayspot.core.db import get_db
from strayspot.repositories.pet_repo import SqlPetCatalog


def get_pet_catalog(db: Session = Depends(get_db)) -> PetCatalog:
    return SqlPetCatalog(db)


def get_dispatcher() -> NotificationDispatcher:
    return LoggingDispatcher()
