"""SQL persistence for the greeting collection, backed by SQLAlchemy."""
from __future__ import annotations

import logging
import threading
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from greetings_api.core.errors import StorageReadError
from greetings_api.db.create_tables import create_all
from greetings_api.db.models import GreetingRow
from greetings_api.db.session import get_session, make_engine
from greetings_api.domain.greetings import Greeting, validate_collection

logger = logging.getLogger(__name__)


class SQLCollectionStore:
    """Same contract as the JSON store; ``save`` swaps every row in one transaction."""

    def __init__(self, database_url: str) -> None:
        self.engine = make_engine(database_url)
        self.lock = threading.RLock()

    def initialize(self) -> None:
        create_all(self.engine)

    def load(self) -> List[Greeting]:
        try:
            with get_session(self.engine) as session:
                rows = session.execute(select(GreetingRow).order_by(GreetingRow.position)).scalars().all()
                raw = [
                    {"id": row.id, "language": row.language, "greeting": row.greeting, "formal": row.formal}
                    for row in rows
                ]
        except SQLAlchemyError as exc:
            raise StorageReadError(f"Could not read greetings table: {exc}") from exc
        try:
            return validate_collection(raw)
        except ValueError as exc:
            raise StorageReadError(f"greetings table does not hold a valid collection: {exc}") from exc

    def save(self, records: List[Greeting]) -> bool:
        with get_session(self.engine) as session:
            try:
                session.execute(delete(GreetingRow))
                session.add_all(
                    GreetingRow(
                        id=record.id,
                        position=position,
                        language=record.language,
                        greeting=record.greeting,
                        formal=record.formal,
                    )
                    for position, record in enumerate(records)
                )
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception("Failed to write greeting collection to the database")
                return False
        return True
