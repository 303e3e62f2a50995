"""Greeting use cases: list, lookup, create, update and delete over the stored collection."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional

from greetings_api.core.errors import (
    GreetingConflictError,
    GreetingNotFoundError,
    InvalidArgumentError,
    StorageWriteError,
)
from greetings_api.domain.greetings import (
    Greeting,
    GreetingFilter,
    GreetingInput,
    language_key,
    next_id,
    parse_id,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Greeting not found"
CONFLICT_MESSAGE = "Greeting for this language already exists"


class GreetingService:
    """Business rules layered on top of a collection store.

    Every operation reloads the whole collection; writes run as a single
    load-mutate-save transaction under the store's lock, so two requests can
    never interleave their read and write halves.
    """

    def __init__(self, store) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_all(self, filters: Optional[GreetingFilter] = None) -> List[Greeting]:
        records = self.store.load()
        if filters is None:
            return records
        return [record for record in records if filters.matches(record)]

    def get_by_id(self, record_id: Any) -> Greeting:
        wanted = parse_id(record_id)
        for record in self.store.load():
            if record.id == wanted:
                return record
        raise GreetingNotFoundError(NOT_FOUND_MESSAGE)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, language: Any, greeting: Any, formal: Any = None) -> Greeting:
        data = GreetingInput.build(language, greeting, formal)
        with self.store.lock:
            records = self.store.load()
            key = language_key(data.language)
            if any(language_key(record.language) == key for record in records):
                raise GreetingConflictError(CONFLICT_MESSAGE)
            created = Greeting(
                id=next_id(records),
                language=data.language,
                greeting=data.greeting,
                formal=True if data.formal is None else data.formal,
            )
            records.append(created)
            self._persist(records, "create")
        logger.info("Created greeting %s (%s)", created.id, created.language)
        return created

    def update(self, record_id: Any, language: Any, greeting: Any, formal: Any = None) -> Greeting:
        wanted = parse_id(record_id)
        data = GreetingInput.build(language, greeting, formal)
        with self.store.lock:
            records = self.store.load()
            index = self._index_of(records, wanted)
            key = language_key(data.language)
            if any(language_key(record.language) == key and record.id != wanted for record in records):
                raise GreetingConflictError(CONFLICT_MESSAGE)
            current = records[index]
            updated = replace(
                current,
                language=data.language,
                greeting=data.greeting,
                formal=current.formal if data.formal is None else data.formal,
            )
            records[index] = updated
            self._persist(records, "update")
        logger.info("Updated greeting %s (%s)", updated.id, updated.language)
        return updated

    def delete(self, record_id: Any) -> Greeting:
        try:
            wanted = parse_id(record_id)
        except InvalidArgumentError:
            # No record can carry a malformed id.
            raise GreetingNotFoundError(NOT_FOUND_MESSAGE) from None
        with self.store.lock:
            records = self.store.load()
            removed = records.pop(self._index_of(records, wanted))
            self._persist(records, "delete")
        logger.info("Deleted greeting %s (%s)", removed.id, removed.language)
        return removed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _index_of(records: List[Greeting], record_id: int) -> int:
        for index, record in enumerate(records):
            if record.id == record_id:
                return index
        raise GreetingNotFoundError(NOT_FOUND_MESSAGE)

    def _persist(self, records: List[Greeting], action: str) -> None:
        if not self.store.save(records):
            raise StorageWriteError(f"Failed to {action} greeting")
