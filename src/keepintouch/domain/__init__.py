"""Domain layer: value objects, entities and collections. No dependencies on outer layers."""

from keepintouch.domain.category import (
    Category,
    CategoryCollection,
    CategoryId,
    CheckInFrequency,
    FrequencyUnit,
    create_category,
    create_category_collection,
    create_category_id,
    create_category_name,
    create_check_in_frequency,
    create_default_categories,
    create_null_category,
    is_null_category,
)
from keepintouch.domain.checkin import (
    CheckIn,
    CheckInCollection,
    CheckInId,
    CheckInStatus,
    create_check_in,
    create_check_in_collection,
    create_check_in_id,
    create_null_check_in,
    is_null_check_in,
)
from keepintouch.domain.collection import Collection
from keepintouch.domain.contact import (
    Contact,
    ContactCollection,
    ContactId,
    ImportantDateCollection,
    Location,
    create_contact,
    create_contact_collection,
    create_contact_id,
    create_null_contact,
    is_null_contact,
)
from keepintouch.domain.errors import ValidationError

__all__ = [
    "Category",
    "CategoryCollection",
    "CategoryId",
    "CheckIn",
    "CheckInCollection",
    "CheckInFrequency",
    "CheckInId",
    "CheckInStatus",
    "Collection",
    "Contact",
    "ContactCollection",
    "ContactId",
    "FrequencyUnit",
    "ImportantDateCollection",
    "Location",
    "ValidationError",
    "create_category",
    "create_category_collection",
    "create_category_id",
    "create_category_name",
    "create_check_in",
    "create_check_in_collection",
    "create_check_in_frequency",
    "create_check_in_id",
    "create_contact",
    "create_contact_collection",
    "create_contact_id",
    "create_default_categories",
    "create_null_category",
    "create_null_check_in",
    "create_null_contact",
    "is_null_category",
    "is_null_check_in",
    "is_null_contact",
]
