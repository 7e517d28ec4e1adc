import re

from pydantic import ValidationError as PydanticValidationError

from strayspot.core.errors import ValidationError

PHONE_STRIP_PATTERN = re.compile(r"[\s\-().]")
PHONE_DIGITS = 11


def require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def normalize_phone(value: str | None, field: str = "phone") -> str:
    """Return the bare digits of a phone number: 11 digits, leading 0."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    digits = PHONE_STRIP_PATTERN.sub("", value.strip())
    if not (digits.isascii() and digits.isdigit()) or len(digits) != PHONE_DIGITS or not digits.startswith("0"):
        raise ValidationError(f"{field} must be {PHONE_DIGITS} digits starting with 0")
    return digits


def parse_model(model_cls, data):
    """Build ``model_cls`` from a dict or pass an instance through.

    Pydantic failures are re-raised as the engine's ``ValidationError``.
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(problems) from exc
