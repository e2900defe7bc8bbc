"""Validator/normalizer — turn a raw record into a ``ValidatedUser``.

Fields are checked in declaration order and the first violated rule wins,
so the same bad input always produces the same message.  Numeric and format
fields (age, email, phone) are strict; gender and country are normalized
forgivingly.  Nothing here performs I/O.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from user_intake.errors import MissingFieldError, ValidationError
from user_intake.schemas.user import EMAIL_PATTERN, FIELDS, RawRecord, ValidatedUser

logger = logging.getLogger(__name__)

MIN_AGE = 0
MAX_AGE = 120
MIN_PHONE_DIGITS = 10

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_AGE_RE = re.compile(r"^[+-]?[0-9]+$")

_GENDER_ALIASES: dict[str, str] = {
    "m": "Male",
    "male": "Male",
    "f": "Female",
    "female": "Female",
}


# ---------------------------------------------------------------------------
# Per-field normalizers
# ---------------------------------------------------------------------------

def normalize_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValidationError("Invalid name", field="name")
    return name


def normalize_age(value: str) -> int:
    text = value.strip()
    # int() alone would also accept "1_000" and non-ASCII digits.
    if not _AGE_RE.match(text):
        raise ValidationError("Invalid age", field="age")
    age = int(text)
    if age < MIN_AGE or age > MAX_AGE:
        raise ValidationError("Invalid age", field="age")
    return age


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email", field="email")
    return email


def normalize_phone(value: str) -> str:
    """Strip everything but ASCII digits; require at least ten of them."""
    digits = _NON_DIGIT_RE.sub("", value)
    if len(digits) < MIN_PHONE_DIGITS:
        raise ValidationError("Invalid phone", field="phone")
    return digits


def normalize_gender(value: str) -> str:
    """Bucket free text into Male/Female/Other.  Never fails."""
    return _GENDER_ALIASES.get(value.strip().lower(), "Other")


def normalize_country(value: str) -> str:
    """``" united states"`` -> ``"United states"`` (not title case)."""
    country = value.strip()
    if not country:
        raise ValidationError("Invalid country", field="country")
    return country[0].upper() + country[1:].lower()


def normalize_dob(value: str) -> str:
    return value


_NORMALIZERS: dict[str, Callable[[str], object]] = {
    "name": normalize_name,
    "age": normalize_age,
    "email": normalize_email,
    "phone": normalize_phone,
    "gender": normalize_gender,
    "country": normalize_country,
    "dob": normalize_dob,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate(raw: RawRecord) -> ValidatedUser:
    """Validate and normalize *raw*, raising on the first violated rule.

    Raises
    ------
    MissingFieldError
        A field is absent from *raw* or its value is ``None``.
    ValidationError
        A present field breaks its rule; ``reason`` is operator-readable.
    """
    values: dict[str, object] = {}
    for field in FIELDS:
        value = raw.get(field)
        if value is None:
            raise MissingFieldError(field)
        values[field] = _NORMALIZERS[field](value)
    return ValidatedUser(**values)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of :func:`check` — exactly one of ``user``/``error`` is set."""

    user: ValidatedUser | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check(raw: RawRecord) -> ValidationResult:
    """Like :func:`validate`, but return the rejection instead of raising it."""
    try:
        user = validate(raw)
    except ValidationError as exc:
        logger.debug("Rejected %r: %s", exc.field, exc.reason)
        return ValidationResult(error=exc)
    return ValidationResult(user=user)
