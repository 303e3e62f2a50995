"""Domain helpers for greeting records: the record type, typed inputs and validation."""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Iterable, List, Mapping, Optional

from greetings_api.core.errors import InvalidArgumentError

ID_PATTERN = re.compile(r"[+-]?\d+")
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

REQUIRED_FIELDS_MESSAGE = "Language and greeting are required fields"
INVALID_ID_MESSAGE = "Invalid ID format"


@dataclass(frozen=True)
class Greeting:
    id: int
    language: str
    greeting: str
    formal: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> "Greeting":
        """Build a record from its stored form, raising ValueError when it is not fully valid."""
        if not isinstance(raw, Mapping):
            raise ValueError(f"record must be an object, got {type(raw).__name__}")
        record_id = raw.get("id")
        if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 1:
            raise ValueError(f"record id must be a positive integer, got {record_id!r}")
        for field in ("language", "greeting"):
            value = raw.get(field)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"record {record_id}: {field} must be a non-empty string")
        formal = raw.get("formal")
        if not isinstance(formal, bool):
            raise ValueError(f"record {record_id}: formal must be a boolean")
        return cls(id=record_id, language=raw["language"], greeting=raw["greeting"], formal=formal)


def language_key(value: str) -> str:
    """Key under which languages are compared for uniqueness."""
    return value.strip().casefold()


def parse_id(raw: Any) -> int:
    """Parse a path/CLI id, raising InvalidArgumentError when it is not an integer."""
    if isinstance(raw, bool):
        raise InvalidArgumentError(INVALID_ID_MESSAGE)
    if isinstance(raw, int):
        return raw
    text = str(raw if raw is not None else "").strip()
    if not ID_PATTERN.fullmatch(text):
        raise InvalidArgumentError(INVALID_ID_MESSAGE)
    return int(text)


def parse_formal(value: Any) -> Optional[bool]:
    """Coerce a body ``formal`` value; ``None`` means the field was omitted."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise InvalidArgumentError("formal must be a boolean")


def _required_text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(REQUIRED_FIELDS_MESSAGE)
    return value.strip()


@dataclass(frozen=True)
class GreetingInput:
    """Validated arguments of a service create or update call. Text fields are already trimmed."""

    language: str
    greeting: str
    formal: Optional[bool] = None

    @classmethod
    def build(cls, language: Any, greeting: Any, formal: Any = None) -> "GreetingInput":
        return cls(
            language=_required_text(language),
            greeting=_required_text(greeting),
            formal=parse_formal(formal),
        )


@dataclass(frozen=True)
class GreetingFilter:
    language: Optional[str] = None
    formal: Optional[bool] = None

    @classmethod
    def from_query(cls, language: Optional[str] = None, formal: Optional[str] = None) -> "GreetingFilter":
        # Only the exact string "true" selects formal greetings; any other present value selects informal ones.
        return cls(
            language=language or None,
            formal=None if formal is None else formal == "true",
        )

    def matches(self, record: Greeting) -> bool:
        if self.language and self.language.casefold() not in record.language.casefold():
            return False
        if self.formal is not None and record.formal is not self.formal:
            return False
        return True


def validate_collection(items: Any) -> List[Greeting]:
    """Turn a stored document into records, raising ValueError on any broken invariant."""
    if not isinstance(items, list):
        raise ValueError(f"collection must be an array, got {type(items).__name__}")
    records = [Greeting.from_dict(item) for item in items]
    seen_ids = set()
    seen_languages = set()
    for record in records:
        if record.id in seen_ids:
            raise ValueError(f"duplicate id {record.id}")
        key = language_key(record.language)
        if key in seen_languages:
            raise ValueError(f"duplicate language {record.language!r}")
        seen_ids.add(record.id)
        seen_languages.add(key)
    return records


def next_id(records: Iterable[Greeting]) -> int:
    return max((record.id for record in records), default=0) + 1
