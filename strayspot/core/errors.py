"""Typed failures raised by the lifecycle engine.

Every rejected request surfaces as one of these. None of them is retried by
the engine; ``ConcurrentUpdate`` is the only one a caller should retry.
"""

from fastapi import status


class EngineError(Exception):
    """Base class for all business-rule failures."""

    code = "engine_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = ""):
        self.message = message or self.code.replace("_", " ").capitalize()
        super().__init__(self.message)


class ValidationError(EngineError):
    code = "validation_error"
    status_code = 422


class TermsNotAccepted(ValidationError):
    code = "terms_not_accepted"

    def __init__(self, message: str = "Terms and conditions must be accepted"):
        super().__init__(message)


class IllegalTransition(EngineError):
    code = "illegal_transition"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current=None, requested=None, message: str = ""):
        self.current = current
        self.requested = requested
        if not message and current is not None and requested is not None:
            message = f"Cannot move from {_label(current)} to {_label(requested)}"
        super().__init__(message)


class ApplicationLocked(IllegalTransition):
    code = "application_locked"

    def __init__(self, current):
        super().__init__(
            current=current,
            message=f"Application answers cannot change once {_label(current)}",
        )


class MissingReason(EngineError):
    code = "missing_reason"
    status_code = 422


class DuplicateActiveApplication(EngineError):
    code = "duplicate_active_application"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, application_id: int | None = None):
        self.application_id = application_id
        if application_id is not None:
            message = f"You already have an active application #{application_id} for this pet"
        else:
            message = "You already have an active application for this pet"
        super().__init__(message)


class AdopterSuspended(EngineError):
    code = "adopter_suspended"
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Your account is suspended and cannot submit applications"):
        super().__init__(message)


class NotAuthorized(EngineError):
    code = "not_authorized"
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(EngineError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class HasActiveApplications(EngineError):
    code = "has_active_applications"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, application_ids: list[int]):
        self.application_ids = application_ids
        ids = ", ".join(f"#{i}" for i in application_ids)
        super().__init__(f"Adopter still has applications in progress: {ids}")


class PetUnavailable(EngineError):
    code = "pet_unavailable"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "This pet is not available for adoption"):
        super().__init__(message)


class ConcurrentUpdate(EngineError):
    code = "concurrent_update"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str = "The record was changed by another request; retry"):
        super().__init__(message)


def _label(value) -> str:
    return getattr(value, "value", str(value))
