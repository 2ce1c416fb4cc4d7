"""Shared building blocks: UUID identifiers, UTC dates and text checks."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from keepintouch.domain.errors import (
    RULE_EMPTY,
    RULE_INVALID_FORMAT,
    RULE_TOO_LONG,
    ValidationError,
)

# Null identifier shared by every aggregate's null id.
NIL_UUID = "00000000-0000-0000-0000-000000000000"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _canonical_uuid(value: object) -> str | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return None
    canonical = str(parsed)
    if canonical != value.lower():
        return None
    return canonical


@dataclass(frozen=True)
class UuidValueObject:
    """
    Identifier wrapping a canonical UUID string.
    Subclasses are distinct types: a ContactId never equals a CategoryId.
    """

    value: str

    def __post_init__(self):
        canonical = _canonical_uuid(self.value)
        if canonical is None:
            name = type(self).__name__
            raise ValidationError(name, RULE_INVALID_FORMAT, f"Invalid {name} format")
        object.__setattr__(self, "value", canonical)

    @classmethod
    def new(cls):
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str):
        return cls(value)

    def is_nil(self) -> bool:
        return self.value == NIL_UUID

    def __str__(self) -> str:
        return self.value


def to_utc_millis(value: object, field: str) -> datetime:
    """Return value as an aware UTC datetime truncated to milliseconds.

    Naive datetimes are taken as UTC; a plain date becomes midnight UTC.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time(), tzinfo=timezone.utc)
    else:
        raise ValidationError(field, RULE_INVALID_FORMAT, "Invalid date")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        try:
            moment = moment.astimezone(timezone.utc)
        except OverflowError:
            # e.g. 0001-01-01 at a positive offset falls before datetime.min in UTC
            raise ValidationError(field, RULE_INVALID_FORMAT, "Invalid date") from None
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


def require_text(
    raw: object,
    field: str,
    label: str,
    max_length: int | None = None,
    *,
    empty_message: str | None = None,
) -> str:
    """Trim raw and check it is a non-empty string of at most max_length chars."""
    if not isinstance(raw, str):
        raise ValidationError(field, RULE_INVALID_FORMAT, f"{label} must be a string")
    text = raw.strip()
    if not text:
        raise ValidationError(field, RULE_EMPTY, empty_message or f"{label} cannot be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(
            field, RULE_TOO_LONG, f"{label} must be {max_length} characters or less"
        )
    return text
