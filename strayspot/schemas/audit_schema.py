from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from strayspot.models.enums import ActorRole, EntityType


class AuditEntryRead(BaseModel):
    entry_id: int
    entity_type: EntityType
    entity_id: int
    action: str
    previous_status: Optional[str] = None
    new_status: str
    actor_id: Optional[int] = None
    actor_role: Optional[ActorRole] = None
    notes: str
    resubmission: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
