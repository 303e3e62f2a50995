"""
Pydantic schemas for greeting request bodies.

``GreetingPayload`` is the body of ``POST /api/greetings`` and
``PUT /api/greetings/{id}``. It is filled either from a JSON object or from
form-encoded fields; both go through the same validators, which trim the text
fields and reject blank values.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from greetings_api.domain.greetings import REQUIRED_FIELDS_MESSAGE


class GreetingPayload(BaseModel):
    """Schema for creating or replacing a greeting."""

    language: str = Field(..., description="Language name, unique regardless of case")
    greeting: str = Field(..., description="Greeting text")
    formal: Optional[bool] = Field(
        None,
        description="Formal register; defaults to true on create and to the stored value on update",
    )

    @field_validator("language", "greeting")
    @classmethod
    def strip_and_require(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("formal", mode="before")
    @classmethod
    def null_is_false(cls, value: Any) -> Any:
        # Only runs for a provided value: an explicit null means informal, an omitted field keeps the default.
        return False if value is None else value


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Collapse validation errors into the single message returned to clients."""
    errors = list(errors)
    if any(err.get("type") == "json_invalid" for err in errors):
        return "Malformed JSON body"
    if any("formal" in err.get("loc", ()) for err in errors):
        return "formal must be a boolean"
    return REQUIRED_FIELDS_MESSAGE
