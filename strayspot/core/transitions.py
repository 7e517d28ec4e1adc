"""Status graphs for the three lifecycles.

The checks here are pure: they look only at the current status, the
requested status and the caller's role, and raise one of the engine errors
when the move is not allowed. Ownership and persistence are handled by the
controllers.
"""

from strayspot.core.errors import IllegalTransition, MissingReason, NotAuthorized
from strayspot.models.enums import (
    ActorRole,
    AdopterStatus,
    ApplicationStatus,
    VerificationStatus,
)

APPLICATION_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset(
        {ApplicationStatus.REVIEWING, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.REVIEWING: frozenset(
        {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}

VERIFICATION_TRANSITIONS: dict[VerificationStatus, frozenset[VerificationStatus]] = {
    VerificationStatus.PENDING: frozenset(
        {VerificationStatus.VERIFIED, VerificationStatus.FOLLOWUP, VerificationStatus.REJECTED}
    ),
    VerificationStatus.FOLLOWUP: frozenset({VerificationStatus.PENDING}),
    VerificationStatus.VERIFIED: frozenset(),
    VerificationStatus.REJECTED: frozenset(),
}

# Targets an admin may choose when deciding on a verification request.
ADMIN_VERIFICATION_DECISIONS = frozenset(
    {VerificationStatus.VERIFIED, VerificationStatus.FOLLOWUP, VerificationStatus.REJECTED}
)

# Decisions that must carry instructions or a reason.
VERIFICATION_STATUSES_REQUIRING_NOTES = frozenset(
    {VerificationStatus.FOLLOWUP, VerificationStatus.REJECTED}
)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_terminal(status: ApplicationStatus) -> bool:
    return not APPLICATION_TRANSITIONS[status]


def check_application_transition(
    current: ApplicationStatus,
    requested: ApplicationStatus,
    role: ActorRole,
    notes: str | None = None,
) -> None:
    """Validate one application move.

    Withdrawal belongs to the adopter; every other move belongs to the
    organization or an admin. A rejection without a reason fails with
    ``MissingReason`` whatever the current status is.
    """
    if requested == ApplicationStatus.WITHDRAWN:
        if role != ActorRole.ADOPTER:
            raise NotAuthorized("Only the adopter can withdraw an application")
    elif role not in (ActorRole.ORG, ActorRole.ADMIN):
        raise NotAuthorized("Only the organization or an admin can update an application")

    if requested == ApplicationStatus.REJECTED and is_blank(notes):
        raise MissingReason("A rejection reason is required")

    if requested not in APPLICATION_TRANSITIONS[current]:
        raise IllegalTransition(current, requested)


def check_verification_decision(
    current: VerificationStatus,
    requested: VerificationStatus,
    role: ActorRole,
    notes: str | None = None,
) -> None:
    if role != ActorRole.ADMIN:
        raise NotAuthorized("Only an admin can decide on verification")
    if requested not in ADMIN_VERIFICATION_DECISIONS:
        raise IllegalTransition(current, requested)
    if requested in VERIFICATION_STATUSES_REQUIRING_NOTES and is_blank(notes):
        raise MissingReason(f"Notes are required when setting {requested.value}")
    if requested not in VERIFICATION_TRANSITIONS[current]:
        raise IllegalTransition(current, requested)


def check_verification_resubmission(current: VerificationStatus, role: ActorRole) -> None:
    if role != ActorRole.ORG:
        raise NotAuthorized("Only the organization can resubmit verification")
    if VerificationStatus.PENDING not in VERIFICATION_TRANSITIONS[current]:
        raise IllegalTransition(
            current,
            VerificationStatus.PENDING,
            message=f"Verification can only be resubmitted from FOLLOWUP, not {current.value}",
        )


def check_standing_change(requested: AdopterStatus, role: ActorRole, notes: str | None = None) -> None:
    if role != ActorRole.ADMIN:
        raise NotAuthorized("Only an admin can change adopter standing")
    if requested == AdopterStatus.SUSPENDED and is_blank(notes):
        raise MissingReason("A reason is required to suspend an adopter")
