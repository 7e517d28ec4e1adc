from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from strayspot.core.auth import require_org
from strayspot.core.collaborators import Actor
from strayspot.core.db import get_db
from strayspot.controllers.org_verification_controller import require_verified_organization
from strayspot.core.transaction import transaction
from strayspot.repositories.pet_repo import create_pet, get_pet_by_id
from strayspot.schemas.pet_schema import PetCreate, PetRead

router = APIRouter(prefix="/pets", tags=["pets"])


@router.post("", response_model=PetRead, status_code=status.HTTP_201_CREATED)
def list_pet_route(
    payload: PetCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_org),
):
    require_verified_organization(db, actor)
    with transaction(db):
        pet = create_pet(db, actor.id, payload)
    db.refresh(pet)
    return pet


@router.get("/{pet_id}", response_model=PetRead)
def get_pet_route(pet_id: int, db: Session = Depends(get_db)):
    pet = get_pet_by_id(db, pet_id)
    if not pet:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pet not found")
    return pet
