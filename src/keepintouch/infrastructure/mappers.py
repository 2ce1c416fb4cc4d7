"""Map entities to and from JSON-compatible dicts (camelCase wire names).

Absent optional fields are written as null. On read, null and "" both map
back to the field's null sentinel, so older backups that stored empty strings
still load. Dates are left as datetimes; JsonSerializer renders them.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from keepintouch.domain.category import (
    Category,
    CategoryId,
    create_category,
    create_check_in_frequency,
    create_null_category_id,
)
from keepintouch.domain.checkin import (
    CheckIn,
    CheckInId,
    CheckInStatus,
    create_check_in,
    is_null_completion_date,
)
from keepintouch.domain.contact import (
    Contact,
    ContactId,
    create_contact,
    create_email_address,
    create_important_date,
    create_important_date_collection,
    create_location,
    create_phone_number,
    create_relationship_context,
    is_null_location,
)
from keepintouch.infrastructure.serializer import SerializationError, format_datetime


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SerializationError(f"{what} must be an object")
    return value


def _require(data: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in data:
        raise SerializationError(f"{what} is missing '{key}'")
    return data[key]


def _text(value: Any) -> Any:
    """Undo date revival on a text field: user text may look like a timestamp."""
    if isinstance(value, datetime):
        return format_datetime(value)
    return value


def _optional(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        return None
    return value


def _to_datetime(value: Any, what: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise SerializationError(f"{what} is not a valid date: {value!r}") from e
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise SerializationError(f"{what} must be a date")


# --- category ---


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id.value,
        "name": category.name,
        "frequency": {
            "value": category.frequency.value,
            "unit": category.frequency.unit.value,
        },
    }


def category_from_dict(data: Any) -> Category:
    data = _mapping(data, "category")
    frequency = _mapping(_require(data, "frequency", "category"), "category frequency")
    return create_category(
        id=CategoryId(_require(data, "id", "category")),
        name=_text(_require(data, "name", "category")),
        frequency=create_check_in_frequency(
            _require(frequency, "value", "category frequency"),
            _require(frequency, "unit", "category frequency"),
        ),
    )


# --- contact ---


def contact_to_dict(contact: Contact) -> dict[str, Any]:
    location = None
    if not is_null_location(contact.location):
        location = {
            "city": contact.location.city,
            "state": contact.location.state,
            "country": contact.location.country,
            "timezone": contact.location.timezone,
        }
    return {
        "id": contact.id.value,
        "name": contact.name,
        "phone": contact.phone or None,
        "email": contact.email or None,
        "location": location,
        "relationshipContext": contact.relationship_context or None,
        "importantDates": [
            {"date": entry.date, "description": entry.description}
            for entry in contact.important_dates
        ],
        "categoryId": contact.category_id.value,
    }


def _important_dates_from(value: Any) -> list:
    if value is None:
        return []
    # Collections dumped as objects carry their entries under "items".
    if isinstance(value, Mapping):
        value = value.get("items") or []
    if not isinstance(value, list):
        raise SerializationError("contact importantDates must be an array")
    entries = []
    for raw in value:
        raw = _mapping(raw, "important date")
        entries.append(
            create_important_date(
                _to_datetime(_require(raw, "date", "important date"), "important date"),
                _text(_require(raw, "description", "important date")),
            )
        )
    return entries


def contact_from_dict(data: Any) -> Contact:
    data = _mapping(data, "contact")
    phone = _text(_optional(data, "phone"))
    email = _text(_optional(data, "email"))
    context = _text(_optional(data, "relationshipContext"))
    location = _optional(data, "location")
    if location is not None:
        location = _mapping(location, "contact location")
        if location.get("city"):
            location = create_location(
                city=_text(location.get("city")),
                country=_text(location.get("country")),
                timezone=_text(location.get("timezone")),
                state=_text(location.get("state")),
            )
        else:
            location = None
    category_id = _optional(data, "categoryId")
    return create_contact(
        id=ContactId(_require(data, "id", "contact")),
        name=_text(_require(data, "name", "contact")),
        phone=create_phone_number(phone) if phone else None,
        email=create_email_address(email) if email else None,
        location=location,
        relationship_context=create_relationship_context(context) if context else None,
        category_id=CategoryId(category_id) if category_id else create_null_category_id(),
        important_dates=create_important_date_collection(
            _important_dates_from(data.get("importantDates"))
        ),
    )


# --- check-in ---


def check_in_to_dict(check_in: CheckIn) -> dict[str, Any]:
    completion_date = None
    if not is_null_completion_date(check_in.completion_date):
        completion_date = check_in.completion_date
    return {
        "id": check_in.id.value,
        "contactId": check_in.contact_id.value,
        "scheduledDate": check_in.scheduled_date,
        "completionDate": completion_date,
        "status": check_in.status.value,
        "notes": check_in.notes or None,
    }


def check_in_from_dict(data: Any) -> CheckIn:
    data = _mapping(data, "check-in")
    completion_date = _optional(data, "completionDate")
    if completion_date is not None:
        completion_date = _to_datetime(completion_date, "check-in completionDate")
        if is_null_completion_date(completion_date):
            completion_date = None
    status = data.get("status") or CheckInStatus.SCHEDULED.value
    if status == "Overdue":
        # Overdue is derived from the schedule, not stored.
        status = CheckInStatus.SCHEDULED.value
    if status == CheckInStatus.SCHEDULED.value and completion_date is not None:
        status = CheckInStatus.COMPLETED.value
    return create_check_in(
        id=CheckInId(_require(data, "id", "check-in")),
        contact_id=ContactId(_require(data, "contactId", "check-in")),
        scheduled_date=_to_datetime(
            _require(data, "scheduledDate", "check-in"), "check-in scheduledDate"
        ),
        status=status,
        notes=_text(_optional(data, "notes")),
        completion_date=completion_date,
    )
