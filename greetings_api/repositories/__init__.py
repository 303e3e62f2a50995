"""
Persistence adapters.

Each store loads the whole greeting collection and writes it back as a unit
(JSON file by default, SQL database when DATABASE_URL is set). Services depend
on the store interface (``initialize``/``load``/``save``/``lock``) rather than
touching the file or the database.
"""
from __future__ import annotations

from greetings_api.core.config import Settings
from greetings_api.repositories.json_storage import JsonCollectionStore


def build_store(settings: Settings):
    """Pick the backend configured for this process."""
    if settings.database_url:
        from greetings_api.repositories.sql_repository import SQLCollectionStore

        return SQLCollectionStore(settings.database_url)
    return JsonCollectionStore(settings.data_file)


__all__ = ["JsonCollectionStore", "build_store"]
