import enum


class ActorRole(enum.Enum):
    ADMIN = "ADMIN"
    ORG = "ORG"
    ADOPTER = "ADOPTER"


class ApplicationStatus(enum.Enum):
    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class VerificationStatus(enum.Enum):
    PENDING = "PENDING"
    FOLLOWUP = "FOLLOWUP"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class AdopterStatus(enum.Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class PetStatus(enum.Enum):
    AVAILABLE = "AVAILABLE"
    ADOPTED = "ADOPTED"


class EntityType(enum.Enum):
    ADOPTION_APPLICATION = "ADOPTION_APPLICATION"
    ORGANIZATION = "ORGANIZATION"
    ADOPTER = "ADOPTER"


class AuditAction(str, enum.Enum):
    REGISTER = "register"
    SUBMIT = "submit"
    TRANSITION = "transition"
    WITHDRAW = "withdraw"
    AUTO_REJECT = "auto_reject"
    DECIDE = "decide"
    RESUBMIT = "resubmit"
    SUSPEND = "suspend"
    REACTIVATE = "reactivate"
    DELETE = "delete"


class HousingStatus(str, enum.Enum):
    OWN = "own"
    RENT = "rent"
    LIVE_WITH_FRIENDS_OR_RELATIVES = "live with friends/relatives"
    OTHER = "other"


class YesNo(str, enum.Enum):
    YES = "yes"
    NO = "no"


# Statuses that count against the one-active-application-per-pet rule.
ACTIVE_APPLICATION_STATUSES = (
    ApplicationStatus.PENDING,
    ApplicationStatus.REVIEWING,
    ApplicationStatus.APPROVED,
)

# Still awaiting a decision from the organization.
OPEN_APPLICATION_STATUSES = (
    ApplicationStatus.PENDING,
    ApplicationStatus.REVIEWING,
)

STATUS_ENUM_BY_ENTITY = {
    EntityType.ADOPTION_APPLICATION: ApplicationStatus,
    EntityType.ORGANIZATION: VerificationStatus,
    EntityType.ADOPTER: AdopterStatus,
}
