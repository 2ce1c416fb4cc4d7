"""CheckIn aggregate: a scheduled touch-point with one contact."""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import NewType

from keepintouch.domain.collection import Collection
from keepintouch.domain.contact import (
    ContactId,
    contact_id_equals,
    create_null_contact_id,
)
from keepintouch.domain.errors import (
    RULE_INVALID_CHOICE,
    RULE_INVALID_FORMAT,
    RULE_OUT_OF_RANGE,
    ValidationError,
)
from keepintouch.domain.shared import EPOCH, NIL_UUID, UuidValueObject, require_text, to_utc_millis

CHECK_IN_NOTES_MAX_LENGTH = 2000

ScheduledDate = NewType("ScheduledDate", datetime)
CompletionDate = NewType("CompletionDate", datetime)
CheckInNotes = NewType("CheckInNotes", str)


class CheckInId(UuidValueObject):
    """Identifier of a CheckIn."""


class CheckInStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    SKIPPED = "Skipped"


@dataclass(frozen=True)
class CheckIn:
    id: CheckInId
    contact_id: ContactId
    scheduled_date: ScheduledDate
    completion_date: CompletionDate
    status: CheckInStatus
    notes: CheckInNotes


class CheckInCollection(Collection[CheckIn]):
    def for_contact(self, contact_id: ContactId) -> "CheckInCollection":
        return self.filter(lambda check_in: check_in.contact_id == contact_id)

    def with_status(self, status: CheckInStatus) -> "CheckInCollection":
        return self.filter(lambda check_in: check_in.status == status)

    def scheduled_between(self, start: datetime, end: datetime) -> "CheckInCollection":
        """Check-ins scheduled within [start, end]."""
        low = to_utc_millis(start, "start")
        high = to_utc_millis(end, "end")
        return self.filter(lambda check_in: low <= check_in.scheduled_date <= high)

    def overdue(self, now: datetime) -> "CheckInCollection":
        return self.filter(lambda check_in: is_overdue(check_in, now))

    def sorted_by_schedule(self) -> "CheckInCollection":
        return self._new(sorted(self, key=lambda check_in: check_in.scheduled_date))


def create_check_in_collection(items=()) -> CheckInCollection:
    return CheckInCollection(items)


# --- identifiers ---

NULL_CHECK_IN_ID = CheckInId(NIL_UUID)


def create_check_in_id() -> CheckInId:
    return CheckInId.new()


def check_in_id_from_string(value: str) -> CheckInId:
    return CheckInId.from_string(value)


def check_in_id_equals(a: CheckInId, b: CheckInId) -> bool:
    return a == b


def is_null_check_in_id(check_in_id: CheckInId) -> bool:
    return check_in_id.is_nil()


# --- dates ---

# The epoch is rejected by the date factories, so it only ever marks "not set".
NULL_SCHEDULED_DATE = ScheduledDate(EPOCH)
NULL_COMPLETION_DATE = CompletionDate(EPOCH)


def _after_epoch(value: object, field: str, label: str) -> datetime:
    moment = to_utc_millis(value, field)
    if moment <= EPOCH:
        raise ValidationError(field, RULE_OUT_OF_RANGE, f"{label} must be after 1970-01-01")
    return moment


def create_scheduled_date(value: datetime) -> ScheduledDate:
    return ScheduledDate(_after_epoch(value, "scheduled_date", "Scheduled date"))


def scheduled_date_equals(a: ScheduledDate, b: ScheduledDate) -> bool:
    return a == b


def create_null_scheduled_date() -> ScheduledDate:
    return NULL_SCHEDULED_DATE


def is_null_scheduled_date(value: ScheduledDate) -> bool:
    return value == EPOCH


def create_completion_date(value: datetime) -> CompletionDate:
    return CompletionDate(_after_epoch(value, "completion_date", "Completion date"))


def completion_date_equals(a: CompletionDate, b: CompletionDate) -> bool:
    return a == b


def create_null_completion_date() -> CompletionDate:
    return NULL_COMPLETION_DATE


def is_null_completion_date(value: CompletionDate) -> bool:
    return value == EPOCH


# --- notes ---

NULL_CHECK_IN_NOTES = CheckInNotes("")


def create_check_in_notes(value: str) -> CheckInNotes:
    return CheckInNotes(
        require_text(value, "notes", "Check-in notes", CHECK_IN_NOTES_MAX_LENGTH)
    )


def check_in_notes_equals(a: CheckInNotes, b: CheckInNotes) -> bool:
    return a == b


def create_null_check_in_notes() -> CheckInNotes:
    return NULL_CHECK_IN_NOTES


def is_null_check_in_notes(notes: CheckInNotes) -> bool:
    return notes == NULL_CHECK_IN_NOTES


# --- status ---


def to_check_in_status(value: object) -> CheckInStatus:
    try:
        return CheckInStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in CheckInStatus)
        raise ValidationError(
            "status", RULE_INVALID_CHOICE, f"Check-in status must be one of: {allowed}"
        ) from None


# --- entity ---


def create_check_in(
    id: CheckInId,
    contact_id: ContactId,
    scheduled_date: ScheduledDate,
    status: CheckInStatus | str = CheckInStatus.SCHEDULED,
    notes: CheckInNotes | None = NULL_CHECK_IN_NOTES,
    completion_date: CompletionDate | None = NULL_COMPLETION_DATE,
) -> CheckIn:
    """Validate and build a CheckIn. A completed check-in needs a completion date."""
    if not isinstance(id, CheckInId):
        raise ValidationError("id", RULE_INVALID_FORMAT, "Invalid CheckInId format")
    if not isinstance(contact_id, ContactId):
        raise ValidationError("contact_id", RULE_INVALID_FORMAT, "Invalid ContactId format")
    scheduled_date = create_scheduled_date(scheduled_date)
    status = to_check_in_status(status)
    notes = create_check_in_notes(notes) if notes else NULL_CHECK_IN_NOTES
    if completion_date is None or is_null_completion_date(
        to_utc_millis(completion_date, "completion_date")
    ):
        completion_date = NULL_COMPLETION_DATE
    else:
        completion_date = create_completion_date(completion_date)
    if status is CheckInStatus.COMPLETED and completion_date is NULL_COMPLETION_DATE:
        raise ValidationError(
            "completion_date",
            RULE_INVALID_FORMAT,
            "Completed check-in requires a completion date",
        )
    if status is not CheckInStatus.COMPLETED and completion_date is not NULL_COMPLETION_DATE:
        raise ValidationError(
            "completion_date",
            RULE_INVALID_FORMAT,
            "Only completed check-ins have a completion date",
        )
    return CheckIn(
        id=id,
        contact_id=contact_id,
        scheduled_date=scheduled_date,
        completion_date=completion_date,
        status=status,
        notes=notes,
    )


def rebuild_check_in(check_in: CheckIn, **changes) -> CheckIn:
    """Return a new CheckIn with changes applied; invariants are re-checked."""
    values = {f.name: getattr(check_in, f.name) for f in fields(check_in)}
    values.update(changes)
    return create_check_in(**values)


def complete_check_in(
    check_in: CheckIn, completed_at: datetime, notes: str | None = None
) -> CheckIn:
    changes = {"status": CheckInStatus.COMPLETED, "completion_date": completed_at}
    if notes is not None and notes.strip():
        changes["notes"] = create_check_in_notes(notes)
    return rebuild_check_in(check_in, **changes)


def skip_check_in(check_in: CheckIn) -> CheckIn:
    return rebuild_check_in(
        check_in, status=CheckInStatus.SKIPPED, completion_date=NULL_COMPLETION_DATE
    )


def reschedule_check_in(check_in: CheckIn, new_date: datetime) -> CheckIn:
    return rebuild_check_in(
        check_in,
        scheduled_date=new_date,
        status=CheckInStatus.SCHEDULED,
        completion_date=NULL_COMPLETION_DATE,
    )


def is_overdue(check_in: CheckIn, now: datetime) -> bool:
    """Scheduled (not completed or skipped) and due before now."""
    return (
        check_in.status is CheckInStatus.SCHEDULED
        and check_in.scheduled_date < to_utc_millis(now, "now")
    )


def check_in_equals(a: CheckIn, b: CheckIn) -> bool:
    return (
        check_in_id_equals(a.id, b.id)
        and contact_id_equals(a.contact_id, b.contact_id)
        and scheduled_date_equals(a.scheduled_date, b.scheduled_date)
        and completion_date_equals(a.completion_date, b.completion_date)
        and a.status == b.status
        and check_in_notes_equals(a.notes, b.notes)
    )


NULL_CHECK_IN = CheckIn(
    id=NULL_CHECK_IN_ID,
    contact_id=create_null_contact_id(),
    scheduled_date=NULL_SCHEDULED_DATE,
    completion_date=NULL_COMPLETION_DATE,
    status=CheckInStatus.SCHEDULED,
    notes=NULL_CHECK_IN_NOTES,
)


def create_null_check_in() -> CheckIn:
    return NULL_CHECK_IN


def is_null_check_in(check_in: CheckIn) -> bool:
    return check_in is NULL_CHECK_IN
