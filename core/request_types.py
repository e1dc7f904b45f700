"""Shared request data types."""

import json
from dataclasses import dataclass
from typing import Any

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"


@dataclass(frozen=True)
class InboundRequest:
    """Method and raw body of one proxied call."""

    method: str
    body: str | bytes | None


@dataclass(frozen=True)
class PreparedRequest:
    """Prepared data for an upstream request."""

    target_url: str
    headers: dict[str, str]
    body: Any


@dataclass(frozen=True)
class ProxyResponse:
    """Status code and serialized body returned to the caller."""

    status_code: int
    body: str
    media_type: str = JSON_MEDIA_TYPE

    @classmethod
    def json(cls, status_code: int, payload: Any) -> "ProxyResponse":
        return cls(status_code, json.dumps(payload, allow_nan=False), JSON_MEDIA_TYPE)

    @classmethod
    def text(cls, status_code: int, content: str) -> "ProxyResponse":
        return cls(status_code, content, TEXT_MEDIA_TYPE)
