"""Full-dataset export and import (backup and restore).

Import validates the whole payload and decodes every record before the first
write. Writes then run in order (contacts, categories, check-ins) through the
repositories' save(). Nothing is rolled back: a failure while writing leaves
the records already saved in place and is reported as PartialImportError.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from keepintouch.application.ports import (
    CategoryRepository,
    CheckInRepository,
    ContactRepository,
)
from keepintouch.domain import Category, CheckIn, Contact
from keepintouch.domain.shared import to_utc_millis
from keepintouch.infrastructure.mappers import (
    category_from_dict,
    category_to_dict,
    check_in_from_dict,
    check_in_to_dict,
    contact_from_dict,
    contact_to_dict,
)
from keepintouch.infrastructure.serializer import JsonSerializer, SerializationError

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = "1.0"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MalformedImportError(ValueError):
    """The import payload was rejected before any write."""


class PartialImportError(RuntimeError):
    """A write failed part way through an import. Earlier writes were kept."""

    def __init__(self, contacts: int, categories: int, check_ins: int) -> None:
        super().__init__(
            "Import stopped after writing "
            f"{contacts} contacts, {categories} categories, {check_ins} check-ins"
        )
        self.contacts = contacts
        self.categories = categories
        self.check_ins = check_ins


@dataclass(frozen=True)
class Snapshot:
    """Complete exported state of all three aggregates plus metadata."""

    contacts: tuple[Contact, ...]
    categories: tuple[Category, ...]
    check_ins: tuple[CheckIn, ...]
    version: str = SNAPSHOT_VERSION
    exported_at: datetime = field(default_factory=lambda: to_utc_millis(_utc_now(), "exported_at"))


@dataclass(frozen=True)
class ImportResult:
    contacts: int
    categories: int
    check_ins: int


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "version": snapshot.version,
        "exportedAt": snapshot.exported_at,
        "contacts": [contact_to_dict(c) for c in snapshot.contacts],
        "categories": [category_to_dict(c) for c in snapshot.categories],
        "checkIns": [check_in_to_dict(c) for c in snapshot.check_ins],
    }


class JsonExporter:
    """Assembles a Snapshot from find_all() on each repository."""

    def __init__(
        self,
        contact_repository: ContactRepository,
        category_repository: CategoryRepository,
        check_in_repository: CheckInRepository,
        *,
        json_serializer: JsonSerializer | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._contacts = contact_repository
        self._categories = category_repository
        self._check_ins = check_in_repository
        self._json = json_serializer or JsonSerializer()
        self._clock = clock

    def export(self) -> Snapshot:
        snapshot = Snapshot(
            contacts=self._contacts.find_all().to_array(),
            categories=self._categories.find_all().to_array(),
            check_ins=self._check_ins.find_all().to_array(),
            version=SNAPSHOT_VERSION,
            exported_at=to_utc_millis(self._clock(), "exported_at"),
        )
        logger.info(
            "Exported %d contacts, %d categories, %d check-ins",
            len(snapshot.contacts),
            len(snapshot.categories),
            len(snapshot.check_ins),
        )
        return snapshot

    def export_as_dict(self) -> dict[str, Any]:
        return snapshot_to_dict(self.export())

    def export_as_string(self) -> str:
        return self._json.serialize(self.export_as_dict(), indent=2)


# (field, wire type) in validation order.
_REQUIRED_FIELDS = (
    ("version", "string"),
    ("contacts", "array"),
    ("categories", "array"),
    ("checkIns", "array"),
)


def validate_snapshot_data(data: Any) -> None:
    """Raise MalformedImportError naming the first missing or mistyped field."""
    if not isinstance(data, Mapping):
        raise MalformedImportError("Invalid import data: must be an object")
    for name, kind in _REQUIRED_FIELDS:
        if name not in data:
            suffix = " array" if kind == "array" else ""
            raise MalformedImportError(f"Invalid import data: missing {name}{suffix}")
        if kind == "array" and not isinstance(data[name], list):
            raise MalformedImportError(f"Invalid import data: {name} must be an array")
        if kind == "string" and not isinstance(data[name], str):
            raise MalformedImportError(f"Invalid import data: {name} must be a string")


def _decode_all(records: list, decode: Callable[[Any], Any], name: str) -> tuple:
    decoded = []
    for index, record in enumerate(records):
        try:
            decoded.append(decode(record))
        except ValueError as e:
            raise MalformedImportError(f"Invalid import data: {name}[{index}]: {e}") from e
    return tuple(decoded)


def snapshot_from_dict(data: Any) -> Snapshot:
    """Validate a parsed payload and decode it into a Snapshot."""
    validate_snapshot_data(data)
    exported_at = data.get("exportedAt")
    return Snapshot(
        contacts=_decode_all(data["contacts"], contact_from_dict, "contacts"),
        categories=_decode_all(data["categories"], category_from_dict, "categories"),
        check_ins=_decode_all(data["checkIns"], check_in_from_dict, "checkIns"),
        version=data["version"],
        exported_at=to_utc_millis(exported_at, "exportedAt")
        if isinstance(exported_at, datetime)
        else to_utc_millis(_utc_now(), "exportedAt"),
    )


class JsonImporter:
    """Restores a Snapshot (or its JSON form) through the repositories' save()."""

    def __init__(
        self,
        contact_repository: ContactRepository,
        category_repository: CategoryRepository,
        check_in_repository: CheckInRepository,
        *,
        json_serializer: JsonSerializer | None = None,
    ) -> None:
        self._contacts = contact_repository
        self._categories = category_repository
        self._check_ins = check_in_repository
        self._json = json_serializer or JsonSerializer()

    def import_snapshot(self, data: Snapshot | Mapping[str, Any] | str) -> ImportResult:
        """Import a Snapshot, a parsed snapshot mapping, or raw JSON text."""
        if isinstance(data, str):
            return self.import_from_string(data)
        if not isinstance(data, Snapshot):
            try:
                data = snapshot_from_dict(data)
            except MalformedImportError as e:
                logger.warning("Import rejected: %s", e)
                raise
        return self._write(data)

    def import_from_string(self, text: str) -> ImportResult:
        try:
            parsed = self._json.deserialize(text)
        except SerializationError as e:
            logger.warning("Import rejected: invalid JSON")
            raise MalformedImportError("Invalid JSON format") from e
        return self.import_snapshot(parsed)

    def _write(self, snapshot: Snapshot) -> ImportResult:
        written = {"contacts": 0, "categories": 0, "check_ins": 0}
        try:
            for contact in snapshot.contacts:
                self._contacts.save(contact)
                written["contacts"] += 1
            for category in snapshot.categories:
                self._categories.save(category)
                written["categories"] += 1
            for check_in in snapshot.check_ins:
                self._check_ins.save(check_in)
                written["check_ins"] += 1
        except Exception as e:
            logger.warning("Import failed part way: %s (written: %s)", e, written)
            raise PartialImportError(**written) from e
        logger.info(
            "Imported %d contacts, %d categories, %d check-ins",
            written["contacts"],
            written["categories"],
            written["check_ins"],
        )
        return ImportResult(**written)
