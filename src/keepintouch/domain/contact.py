"""Contact aggregate and its value objects.

Optional fields (phone, email, location, relationship context) always hold
either a validated value or their null sentinel, never None. The null forms
are empty values that the validating factories reject, so is_null_* can test
the value itself and still recognize a sentinel decoded from storage.
"""

import re
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import NewType

from keepintouch.domain.category import (
    CategoryId,
    category_id_equals,
    create_null_category_id,
)
from keepintouch.domain.collection import Collection
from keepintouch.domain.errors import RULE_INVALID_FORMAT, ValidationError
from keepintouch.domain.phone import DEFAULT_REGION, normalize_phone
from keepintouch.domain.shared import NIL_UUID, UuidValueObject, require_text, to_utc_millis

CONTACT_NAME_MAX_LENGTH = 100
RELATIONSHIP_CONTEXT_MAX_LENGTH = 2000

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PhoneNumber = NewType("PhoneNumber", str)
EmailAddress = NewType("EmailAddress", str)
RelationshipContext = NewType("RelationshipContext", str)


class ContactId(UuidValueObject):
    """Identifier of a Contact."""


@dataclass(frozen=True)
class Location:
    city: str
    country: str
    timezone: str
    state: str | None = None


@dataclass(frozen=True)
class ImportantDate:
    """A dated entry on a contact (birthday, anniversary, ...)."""

    date: datetime
    description: str


class ImportantDateCollection(Collection[ImportantDate]):
    def upcoming(self, after: datetime) -> "ImportantDateCollection":
        """Entries dated on or after the given moment."""
        moment = to_utc_millis(after, "after")
        return self.filter(lambda entry: entry.date >= moment)


def create_important_date_collection(items=()) -> ImportantDateCollection:
    return ImportantDateCollection(items)


@dataclass(frozen=True)
class Contact:
    id: ContactId
    name: str
    phone: PhoneNumber
    email: EmailAddress
    location: Location
    relationship_context: RelationshipContext
    category_id: CategoryId
    important_dates: ImportantDateCollection = field(
        default_factory=ImportantDateCollection
    )


class ContactCollection(Collection[Contact]):
    def search(self, query: str) -> "ContactCollection":
        """Contacts whose name, email or phone contains query (case-insensitive)."""
        needle = (query or "").strip().lower()
        if not needle:
            return self
        return self.filter(lambda contact: _matches(contact, needle))


def _matches(contact: Contact, needle: str) -> bool:
    return (
        needle in contact.name.lower()
        or needle in contact.email.lower()
        or needle in contact.phone.lower()
    )


def create_contact_collection(items=()) -> ContactCollection:
    return ContactCollection(items)


# --- identifiers ---

NULL_CONTACT_ID = ContactId(NIL_UUID)


def create_contact_id() -> ContactId:
    return ContactId.new()


def contact_id_from_string(value: str) -> ContactId:
    return ContactId.from_string(value)


def contact_id_equals(a: ContactId, b: ContactId) -> bool:
    return a == b


def create_null_contact_id() -> ContactId:
    return NULL_CONTACT_ID


def is_null_contact_id(contact_id: ContactId) -> bool:
    return contact_id.is_nil()


# --- phone ---

NULL_PHONE_NUMBER = PhoneNumber("")


def create_phone_number(value: str, region: str | None = DEFAULT_REGION) -> PhoneNumber:
    """Normalize to E.164; numbers without a country code use region."""
    normalized = normalize_phone(value, default_region=region) if isinstance(value, str) else None
    if normalized is None:
        raise ValidationError("phone", RULE_INVALID_FORMAT, "Invalid phone number format")
    return PhoneNumber(normalized)


def phone_number_equals(a: PhoneNumber, b: PhoneNumber) -> bool:
    return a == b


def create_null_phone_number() -> PhoneNumber:
    return NULL_PHONE_NUMBER


def is_null_phone_number(phone: PhoneNumber) -> bool:
    return phone == NULL_PHONE_NUMBER


# --- email ---

NULL_EMAIL_ADDRESS = EmailAddress("")


def create_email_address(value: str) -> EmailAddress:
    normalized = value.strip().lower() if isinstance(value, str) else ""
    if not _EMAIL_PATTERN.match(normalized):
        raise ValidationError("email", RULE_INVALID_FORMAT, "Invalid email address format")
    return EmailAddress(normalized)


def email_address_equals(a: EmailAddress, b: EmailAddress) -> bool:
    return a == b


def create_null_email_address() -> EmailAddress:
    return NULL_EMAIL_ADDRESS


def is_null_email_address(email: EmailAddress) -> bool:
    return email == NULL_EMAIL_ADDRESS


# --- location ---

NULL_LOCATION = Location(city="", country="", timezone="")


def create_location(
    city: str, country: str, timezone: str, state: str | None = None
) -> Location:
    city = require_text(city, "location.city", "City", empty_message="City is required")
    country = require_text(
        country, "location.country", "Country", empty_message="Country is required"
    )
    timezone = require_text(
        timezone, "location.timezone", "Timezone", empty_message="Timezone is required"
    )
    if state is not None and not isinstance(state, str):
        raise ValidationError("location.state", RULE_INVALID_FORMAT, "State must be a string")
    state = (state or "").strip() or None
    return Location(city=city, country=country, timezone=timezone, state=state)


def location_equals(a: Location, b: Location) -> bool:
    return (
        a.city == b.city
        and a.state == b.state
        and a.country == b.country
        and a.timezone == b.timezone
    )


def create_null_location() -> Location:
    return NULL_LOCATION


def is_null_location(location: Location) -> bool:
    return location is NULL_LOCATION or not location.city


# --- relationship context ---

NULL_RELATIONSHIP_CONTEXT = RelationshipContext("")


def create_relationship_context(value: str) -> RelationshipContext:
    return RelationshipContext(
        require_text(
            value,
            "relationship_context",
            "Relationship context",
            RELATIONSHIP_CONTEXT_MAX_LENGTH,
        )
    )


def relationship_context_equals(a: RelationshipContext, b: RelationshipContext) -> bool:
    return a == b


def create_null_relationship_context() -> RelationshipContext:
    return NULL_RELATIONSHIP_CONTEXT


def is_null_relationship_context(context: RelationshipContext) -> bool:
    return context == NULL_RELATIONSHIP_CONTEXT


# --- important dates ---


def create_important_date(date: datetime, description: str) -> ImportantDate:
    return ImportantDate(
        date=to_utc_millis(date, "important_date.date"),
        description=require_text(
            description,
            "important_date.description",
            "Description",
            empty_message="Description is required",
        ),
    )


def important_date_equals(a: ImportantDate, b: ImportantDate) -> bool:
    return a.date == b.date and a.description == b.description


# --- entity ---


def create_contact(
    id: ContactId,
    name: str,
    phone: PhoneNumber | None = NULL_PHONE_NUMBER,
    email: EmailAddress | None = NULL_EMAIL_ADDRESS,
    location: Location | None = NULL_LOCATION,
    relationship_context: RelationshipContext | None = NULL_RELATIONSHIP_CONTEXT,
    category_id: CategoryId | None = None,
    important_dates: ImportantDateCollection | None = None,
) -> Contact:
    """Validate and build a Contact. Omitted optional fields get their null form."""
    if not isinstance(id, ContactId):
        raise ValidationError("id", RULE_INVALID_FORMAT, "Invalid ContactId format")
    name = require_text(
        name, "name", "Name", CONTACT_NAME_MAX_LENGTH, empty_message="Name is required"
    )
    phone = phone or NULL_PHONE_NUMBER
    email = email or NULL_EMAIL_ADDRESS
    relationship_context = relationship_context or NULL_RELATIONSHIP_CONTEXT
    if location is None:
        location = NULL_LOCATION
    if category_id is None:
        category_id = create_null_category_id()
    elif not isinstance(category_id, CategoryId):
        raise ValidationError("category_id", RULE_INVALID_FORMAT, "Invalid CategoryId format")
    if important_dates is None:
        important_dates = create_important_date_collection()
    elif not isinstance(important_dates, ImportantDateCollection):
        important_dates = create_important_date_collection(important_dates)
    return Contact(
        id=id,
        name=name,
        phone=phone,
        email=email,
        location=location,
        relationship_context=relationship_context,
        category_id=category_id,
        important_dates=important_dates,
    )


def rebuild_contact(contact: Contact, **changes) -> Contact:
    """Return a new Contact with changes applied; invariants are re-checked."""
    values = {f.name: getattr(contact, f.name) for f in fields(contact)}
    values.update(changes)
    return create_contact(**values)


def assign_contact_to_category(contact: Contact, category_id: CategoryId) -> Contact:
    return rebuild_contact(contact, category_id=category_id)


def contact_equals(a: Contact, b: Contact) -> bool:
    return (
        contact_id_equals(a.id, b.id)
        and a.name == b.name
        and phone_number_equals(a.phone, b.phone)
        and email_address_equals(a.email, b.email)
        and location_equals(a.location, b.location)
        and relationship_context_equals(a.relationship_context, b.relationship_context)
        and category_id_equals(a.category_id, b.category_id)
        and a.important_dates.size == b.important_dates.size
        and all(
            important_date_equals(x, y)
            for x, y in zip(a.important_dates, b.important_dates)
        )
    )


NULL_CONTACT = Contact(
    id=NULL_CONTACT_ID,
    name="",
    phone=NULL_PHONE_NUMBER,
    email=NULL_EMAIL_ADDRESS,
    location=NULL_LOCATION,
    relationship_context=NULL_RELATIONSHIP_CONTEXT,
    category_id=create_null_category_id(),
    important_dates=ImportantDateCollection(),
)


def create_null_contact() -> Contact:
    return NULL_CONTACT


def is_null_contact(contact: Contact) -> bool:
    return contact is NULL_CONTACT
