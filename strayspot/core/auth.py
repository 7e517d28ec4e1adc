from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from strayspot.core.collaborators import Actor
from strayspot.core.security import decode_access_token
from strayspot.models.enums import ActorRole

security = HTTPBearer()


def get_current_actor(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Actor:
    token = credentials.credentials
    try:
        payload = decode_access_token(token)
        subject = payload.get("sub")
        role = payload.get("role")
        if subject is None or role is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        return Actor(id=int(subject), role=ActorRole(role))
    except (JWTError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role != ActorRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return actor


def require_org(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role != ActorRole.ORG:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Organization access required")
    return actor


def require_adopter(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role != ActorRole.ADOPTER:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Adopter access required")
    return actor
