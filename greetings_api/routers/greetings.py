from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from greetings_api.core.errors import GreetingsError, StorageError
from greetings_api.domain.greetings import GreetingFilter
from greetings_api.schemas.greeting import GreetingPayload
from greetings_api.services.greeting_service import GreetingService

router = APIRouter(prefix="/api/greetings", tags=["greetings"])
logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPES = {"application/x-www-form-urlencoded", "multipart/form-data"}


def _get_service(request: Request) -> GreetingService:
    svc = getattr(getattr(request.app, "state", None), "greeting_service", None)
    if not svc:
        raise RuntimeError("GreetingService not configured")
    return svc


def _error_response(err: GreetingsError, failure: str) -> JSONResponse:
    if isinstance(err, StorageError):
        logger.error("%s: %s", failure, err.message)
        return JSONResponse({"error": failure}, status_code=err.status_code)
    return JSONResponse({"error": err.message}, status_code=err.status_code)


async def greeting_payload(request: Request) -> GreetingPayload:
    """Read the body as form fields or as JSON and validate it as a GreetingPayload."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in _FORM_CONTENT_TYPES:
        form = await request.form()
        data = dict(form.items())
    elif (await request.body()).strip():
        try:
            data = await request.json()
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": f"JSON decode error: {exc}", "input": {}}]
            ) from exc
    else:
        data = {}
    try:
        return GreetingPayload.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


@router.get("")
def list_greetings(
    request: Request,
    language: Optional[str] = Query(None),
    formal: Optional[str] = Query(None),
):
    try:
        greetings = _get_service(request).list_all(GreetingFilter.from_query(language, formal))
    except GreetingsError as exc:
        return _error_response(exc, "Failed to retrieve greetings")
    return {"success": True, "count": len(greetings), "data": [g.to_dict() for g in greetings]}


@router.get("/{greeting_id}")
def get_greeting(greeting_id: str, request: Request):
    try:
        greeting = _get_service(request).get_by_id(greeting_id)
    except GreetingsError as exc:
        return _error_response(exc, "Failed to retrieve greeting")
    return {"success": True, "data": greeting.to_dict()}


@router.post("", status_code=201)
def create_greeting(request: Request, body: GreetingPayload = Depends(greeting_payload)):
    svc = _get_service(request)
    try:
        greeting = svc.create(body.language, body.greeting, body.formal)
    except GreetingsError as exc:
        return _error_response(exc, "Failed to create greeting")
    return {"message": "Greeting created successfully", "data": greeting.to_dict()}


@router.put("/{greeting_id}")
def update_greeting(greeting_id: str, request: Request, body: GreetingPayload = Depends(greeting_payload)):
    svc = _get_service(request)
    try:
        greeting = svc.update(greeting_id, body.language, body.greeting, body.formal)
    except GreetingsError as exc:
        return _error_response(exc, "Failed to update greeting")
    return {"message": "Greeting updated successfully", "data": greeting.to_dict()}


@router.delete("/{greeting_id}")
def delete_greeting(greeting_id: str, request: Request):
    try:
        greeting = _get_service(request).delete(greeting_id)
    except GreetingsError as exc:
        return _error_response(exc, "Failed to delete greeting")
    return {"success": True, "message": "Greeting deleted successfully", "data": greeting.to_dict()}
