"""Request helpers shared by the blueprints."""

from __future__ import annotations

from typing import Any, TypeVar

from flask import current_app, request
from pydantic import BaseModel

from dress_studio.app_services import AppServices
from dress_studio.domain.models import UNSET

EXTENSION_KEY = "dress_studio"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_services() -> AppServices:
    return current_app.extensions[EXTENSION_KEY]


def parse_body(schema: type[SchemaT]) -> SchemaT:
    """Validate the JSON body; a missing or non-JSON body counts as empty."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    return schema.model_validate(payload)


def provided(body: BaseModel, name: str) -> Any:
    """Return the field value, or ``UNSET`` when the request body omitted it."""
    return getattr(body, name) if name in body.model_fields_set else UNSET
