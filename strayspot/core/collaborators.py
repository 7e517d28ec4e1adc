"""Interfaces to the parts of the platform the engine does not own.

The engine trusts the ``Actor`` it is handed, looks pets up through a
``PetCatalog`` and hands status-change events to a ``NotificationDispatcher``
once the transaction that produced them has committed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import structlog

from strayspot.models.enums import ActorRole

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    id: int
    role: ActorRole

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN


@dataclass(frozen=True)
class PetListing:
    pet_id: int
    org_id: int
    available: bool


class PetCatalog(Protocol):
    def get_pet(self, pet_id: int) -> PetListing | None: ...

    def notify_application_approved(self, pet_id: int, application_id: int) -> None: ...

    def remove_pets_for_organization(self, org_id: int) -> int: ...


class EventType(str, Enum):
    APPLICATION_STATUS_CHANGED = "ApplicationStatusChanged"
    ORGANIZATION_STATUS_CHANGED = "OrganizationStatusChanged"
    ADOPTER_STATUS_CHANGED = "AdopterStatusChanged"


@dataclass(frozen=True)
class StatusChangedEvent:
    type: EventType
    entity_id: int
    new_status: str


class NotificationDispatcher(Protocol):
    def dispatch(self, event: StatusChangedEvent) -> None: ...


class LoggingDispatcher:
    """Default dispatcher: records that a notification should fire."""

    def dispatch(self, event: StatusChangedEvent) -> None:
        log.info(
            "notification_requested",
            event_type=event.type.value,
            entity_id=event.entity_id,
            new_status=event.new_status,
        )


def dispatch_all(dispatcher: NotificationDispatcher | None, events: list[StatusChangedEvent]) -> None:
    # Runs after commit; dispatch failures are logged, not raised.
    target = dispatcher or LoggingDispatcher()
    for event in events:
        try:
            target.dispatch(event)
        except Exception:
            log.warning(
                "notification_dispatch_failed",
                event_type=event.type.value,
                entity_id=event.entity_id,
                exc_info=True,
            )
