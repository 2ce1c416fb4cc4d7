"""Category aggregate: id, name and check-in frequency."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import NewType

from keepintouch.domain.collection import Collection
from keepintouch.domain.errors import (
    RULE_INVALID_CHOICE,
    RULE_INVALID_FORMAT,
    RULE_NOT_INTEGER,
    RULE_OUT_OF_RANGE,
    ValidationError,
)
from keepintouch.domain.shared import NIL_UUID, UuidValueObject, require_text

CATEGORY_NAME_MAX_LENGTH = 50
FREQUENCY_MIN = 1
FREQUENCY_MAX = 365

CategoryName = NewType("CategoryName", str)


class CategoryId(UuidValueObject):
    """Identifier of a Category."""


class FrequencyUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


@dataclass(frozen=True)
class CheckInFrequency:
    """How often contacts in a category should be checked in with."""

    value: int
    unit: FrequencyUnit


@dataclass(frozen=True)
class Category:
    id: CategoryId
    name: CategoryName
    frequency: CheckInFrequency


# --- identifiers ---

NULL_CATEGORY_ID = CategoryId(NIL_UUID)


def create_category_id() -> CategoryId:
    return CategoryId.new()


def category_id_from_string(value: str) -> CategoryId:
    return CategoryId.from_string(value)


def category_id_equals(a: CategoryId, b: CategoryId) -> bool:
    return a == b


def create_null_category_id() -> CategoryId:
    return NULL_CATEGORY_ID


def is_null_category_id(category_id: CategoryId) -> bool:
    return category_id.is_nil()


# --- name ---


def create_category_name(value: str) -> CategoryName:
    """Trim and validate a category name (1..50 chars)."""
    return CategoryName(
        require_text(value, "name", "Category name", CATEGORY_NAME_MAX_LENGTH)
    )


def category_name_equals(a: CategoryName, b: CategoryName) -> bool:
    return a == b


# --- frequency ---


def _to_unit(unit: object) -> FrequencyUnit:
    try:
        return FrequencyUnit(unit)
    except ValueError:
        allowed = ", ".join(u.value for u in FrequencyUnit)
        raise ValidationError(
            "frequency.unit",
            RULE_INVALID_CHOICE,
            f"Frequency unit must be one of: {allowed}",
        ) from None


def _check_frequency_value(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            "frequency.value", RULE_NOT_INTEGER, "Frequency value must be a whole number"
        )
    if value < FREQUENCY_MIN:
        raise ValidationError(
            "frequency.value",
            RULE_OUT_OF_RANGE,
            "Frequency value must be greater than 0",
        )
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(
            "frequency.value", RULE_NOT_INTEGER, "Frequency value must be a whole number"
        )
    if value > FREQUENCY_MAX:
        raise ValidationError(
            "frequency.value",
            RULE_OUT_OF_RANGE,
            f"Frequency value cannot exceed {FREQUENCY_MAX}",
        )
    return int(value)


def create_check_in_frequency(value: int, unit: FrequencyUnit | str) -> CheckInFrequency:
    """Validate value (whole number 1..365) and unit; return a frozen frequency."""
    return CheckInFrequency(value=_check_frequency_value(value), unit=_to_unit(unit))


def check_in_frequency_equals(a: CheckInFrequency, b: CheckInFrequency) -> bool:
    return a.value == b.value and a.unit == b.unit


# Value 0 is below the valid range, so the validator can never produce it.
NULL_CHECK_IN_FREQUENCY = CheckInFrequency(value=0, unit=FrequencyUnit.DAYS)


def create_null_check_in_frequency() -> CheckInFrequency:
    return NULL_CHECK_IN_FREQUENCY


def is_null_check_in_frequency(frequency: CheckInFrequency) -> bool:
    return frequency.value == 0


# --- entity ---


def create_category(
    id: CategoryId, name: CategoryName | str, frequency: CheckInFrequency
) -> Category:
    if not isinstance(id, CategoryId):
        raise ValidationError("id", RULE_INVALID_FORMAT, "Invalid CategoryId format")
    if not isinstance(frequency, CheckInFrequency):
        raise ValidationError(
            "frequency", RULE_INVALID_FORMAT, "Category frequency must be a CheckInFrequency"
        )
    return Category(
        id=id,
        name=create_category_name(name),
        frequency=create_check_in_frequency(frequency.value, frequency.unit),
    )


def rebuild_category(category: Category, **changes) -> Category:
    """Return a new Category with changes applied; invariants are re-checked."""
    values = {f.name: getattr(category, f.name) for f in fields(category)}
    values.update(changes)
    return create_category(**values)


def category_equals(a: Category, b: Category) -> bool:
    return (
        category_id_equals(a.id, b.id)
        and category_name_equals(a.name, b.name)
        and check_in_frequency_equals(a.frequency, b.frequency)
    )


NULL_CATEGORY = Category(
    id=NULL_CATEGORY_ID,
    name=CategoryName("Uncategorized"),
    frequency=NULL_CHECK_IN_FREQUENCY,
)


def create_null_category() -> Category:
    return NULL_CATEGORY


def is_null_category(category: Category) -> bool:
    return category is NULL_CATEGORY


_DEFAULT_CATEGORY_CONFIGS = (
    ("Family", 1, FrequencyUnit.WEEKS),
    ("Close Friends", 2, FrequencyUnit.WEEKS),
    ("Friends", 1, FrequencyUnit.MONTHS),
    ("Colleagues", 2, FrequencyUnit.MONTHS),
    ("Acquaintances", 3, FrequencyUnit.MONTHS),
)


def create_default_categories() -> list[Category]:
    """Starter categories for a fresh dataset, each with a new id."""
    return [
        create_category(
            id=create_category_id(),
            name=create_category_name(name),
            frequency=create_check_in_frequency(value, unit),
        )
        for name, value, unit in _DEFAULT_CATEGORY_CONFIGS
    ]


class CategoryCollection(Collection[Category]):
    def find_by_name(self, name: str) -> Category | None:
        """Case-insensitive lookup by trimmed name."""
        needle = (name or "").strip().lower()
        return self.find(lambda category: category.name.lower() == needle)


def create_category_collection(items) -> CategoryCollection:
    return CategoryCollection(items)
