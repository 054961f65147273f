"""Inbound event payloads.

Wire names are camelCase; every payload is validated here before any store
access so a bad shape fails as MalformedRequest instead of deep inside the
session services.
"""

import math
from typing import List, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from scoreroom.errors import MalformedRequest


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class CategoryIn(Payload):
    id: str
    name: str


class CreateSession(Payload):
    session_name: str
    facilitator_name: str
    categories: List[CategoryIn]


class JoinSession(Payload):
    session_id: str
    member_name: str


class LeaveSession(Payload):
    session_id: str
    member_id: str


class SubmitScore(Payload):
    session_id: str
    category_id: str
    member_id: str
    member_name: str
    score: Union[StrictInt, StrictFloat]

    @field_validator('score')
    @classmethod
    def score_is_finite(cls, value):
        if not math.isfinite(value):
            raise ValueError('must be a finite number')
        return value


class AdvanceCategory(Payload):
    session_id: str


def parse_payload(model, data):
    """Validate ``data`` against ``model`` or raise MalformedRequest."""
    if not isinstance(data, dict):
        raise MalformedRequest('Malformed request: payload must be an object')
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = '.'.join(str(part) for part in first['loc']) or 'payload'
        raise MalformedRequest(f"Malformed request: {where} {first['msg']}") from exc
