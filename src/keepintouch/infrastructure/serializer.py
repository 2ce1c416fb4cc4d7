"""JSON serialization with date revival.

Datetimes are written as YYYY-MM-DDTHH:MM:SS.sssZ (UTC). On load, any string
in exactly that shape is turned back into an aware UTC datetime while the
document is being parsed, at every nesting depth.
"""

import json
import re
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_ISO_DATE_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z"
)
_ISO_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class SerializationError(ValueError):
    """Text could not be decoded into the expected value."""


def format_datetime(value: datetime) -> str:
    """Render value in UTC with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def is_iso_date_string(value: object) -> bool:
    return isinstance(value, str) and _ISO_DATE_PATTERN.fullmatch(value) is not None


def _revive(value: Any) -> Any:
    if is_iso_date_string(value):
        try:
            return datetime.strptime(value, _ISO_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            # Right shape, impossible calendar date: keep the string.
            return value
    if isinstance(value, list):
        return [_revive(item) for item in value]
    return value


def _revive_object(obj: dict[str, Any]) -> dict[str, Any]:
    return {key: _revive(value) for key, value in obj.items()}


class _DateAwareEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, datetime):
            return format_datetime(o)
        return super().default(o)


class JsonSerializer:
    """Structural JSON dump/load for JSON-compatible values plus datetimes."""

    def serialize(self, obj: Any, *, indent: int | None = None) -> str:
        return json.dumps(obj, cls=_DateAwareEncoder, ensure_ascii=False, indent=indent)

    def deserialize(self, text: str) -> Any:
        try:
            return self._parse(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise SerializationError(f"Failed to deserialize JSON: {e}") from e

    def serialize_collection(self, items, *, indent: int | None = None) -> str:
        return self.serialize(list(items), indent=indent)

    def deserialize_collection(self, text: str) -> list[Any]:
        try:
            parsed = self._parse(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise SerializationError(f"Failed to deserialize JSON collection: {e}") from e
        if not isinstance(parsed, list):
            raise SerializationError(
                "Failed to deserialize JSON collection: expected a list"
            )
        return parsed

    def _parse(self, text: str) -> Any:
        return _revive(json.loads(text, object_hook=_revive_object))


class EntitySerializer(Generic[T]):
    """Serializer for one entity type: a JsonSerializer plus a to_dict/from_dict pair."""

    def __init__(
        self,
        to_dict: Callable[[T], dict[str, Any]],
        from_dict: Callable[[Any], T],
        json_serializer: JsonSerializer | None = None,
    ) -> None:
        self._to_dict = to_dict
        self._from_dict = from_dict
        self._json = json_serializer or JsonSerializer()

    def serialize(self, entity: T) -> str:
        return self._json.serialize(self._to_dict(entity))

    def deserialize(self, text: str) -> T:
        return self._from_dict(self._json.deserialize(text))

    def serialize_collection(self, entities) -> str:
        return self._json.serialize_collection(self._to_dict(e) for e in entities)

    def deserialize_collection(self, text: str) -> list[T]:
        return [self._from_dict(item) for item in self._json.deserialize_collection(text)]
