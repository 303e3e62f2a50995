"""Error taxonomy shared by the persistence layer, services and routers."""
from __future__ import annotations


class GreetingsError(Exception):
    """Base error; carries the HTTP status the router should answer with."""

    code = "error"
    status_code = 500

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class InvalidArgumentError(GreetingsError):
    """Raised when an id or a request field is malformed or missing."""

    code = "invalid_argument"
    status_code = 400


class GreetingNotFoundError(GreetingsError):
    """Raised when no record carries the requested id."""

    code = "not_found"
    status_code = 404


class GreetingConflictError(GreetingsError):
    """Raised when another record already uses the same language."""

    code = "conflict"
    status_code = 409


class StorageError(GreetingsError):
    code = "storage"
    status_code = 500


class StorageReadError(StorageError):
    """Raised when the backing store exists but does not hold a valid collection."""

    code = "storage_read"


class StorageWriteError(StorageError):
    """Raised when the collection could not be persisted."""

    code = "storage_write"
