"""Pass-through proxy for chat-completion requests.

Forwards the caller's JSON body to the upstream API with the server-held key
attached as a bearer credential, and relays the upstream answer. Every call is
independent: the handler keeps no state between invocations.
"""

import json
from collections.abc import Callable
from typing import Any

from core.config import Config
from core.exceptions import ConfigurationError, MethodNotAllowed, UpstreamError
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import InboundRequest, PreparedRequest, ProxyResponse
from services.upstream import UpstreamClient

MISSING_KEY_MESSAGE = "OpenAI API key is not set in environment variables."


class ProxyHandler:
    """Turn one inbound request into exactly one response."""

    def __init__(
        self,
        config: Config,
        upstream: UpstreamClient,
        logger: RequestLogger,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._target_url = config.upstream.chat_url
        self._api_key = config.upstream.api_key
        self._upstream = upstream
        self._logger = logger
        self._headers = header_builder or HeaderBuilder()

    async def handle(self, request: InboundRequest) -> ProxyResponse:
        """Forward a POST upstream; any other method is rejected with 405.

        Failures never escape: upstream errors keep their status code and raw
        text, everything else becomes a 500 carrying the exception message.
        """
        try:
            self._ensure_post(request.method)
        except MethodNotAllowed:
            return ProxyResponse.text(405, "Method Not Allowed")

        try:
            return await self._forward(request)
        except UpstreamError as e:
            self._log_quietly(self._logger.log_upstream_error, e.status_code, e.details)
            return ProxyResponse.json(e.status_code, {"error": str(e), "details": e.details})
        except Exception as e:
            message = str(e) or type(e).__name__
            response = ProxyResponse.json(500, {"error": message})
            self._log_quietly(self._logger.log_error, message)
            return response

    async def _forward(self, request: InboundRequest) -> ProxyResponse:
        body = _strict_loads(request.body)
        api_key = self._require_api_key()

        model = _model_name(body)
        self._logger.log_request(model, body)

        prepared = PreparedRequest(
            target_url=self._target_url,
            headers=self._headers.build_upstream_headers(api_key),
            body=body,
        )
        response = await self._upstream.post_chat_completion(prepared)

        if not response.is_success:
            raise UpstreamError(
                f"OpenAI API request failed: {response.reason_phrase}",
                status_code=response.status_code,
                details=response.text,
            )

        data = _strict_loads(response.content)
        self._logger.log_success(model)
        return ProxyResponse.json(200, data)

    @staticmethod
    def _log_quietly(log: Callable[..., None], *args: Any) -> None:
        # A failing logger must not replace the JSON error envelope
        try:
            log(*args)
        except Exception:
            pass

    def _require_api_key(self) -> str:
        if not self._api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        return self._api_key

    @staticmethod
    def _ensure_post(method: str) -> None:
        if method != "POST":
            raise MethodNotAllowed(method)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def _strict_loads(raw: str | bytes | None) -> Any:
    """Parse JSON, refusing the NaN and Infinity extensions."""
    return json.loads(raw, parse_constant=_reject_constant)


def _model_name(body: Any) -> str:
    if isinstance(body, dict):
        return str(body.get("model", "unknown"))
    return "unknown"
