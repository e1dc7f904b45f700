"""FastAPI route handlers."""

from fastapi import Request, Response

from core.config import Config
from core.request_types import InboundRequest
from services.proxy_handler import ProxyHandler

# Every method reaches the proxy handler so it can answer 405 itself
PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


async def handle_proxy(request: Request) -> Response:
    """Adapt the HTTP request to the proxy handler and back."""
    raw_body = await request.body()
    handler: ProxyHandler = request.app.state.proxy_handler

    result = await handler.handle(InboundRequest(method=request.method, body=raw_body))
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.media_type,
    )


async def handle_health(_request: Request, config: Config) -> dict[str, object]:
    """Report liveness and whether a key is configured (never the key itself)."""
    return {
        "status": "ok",
        "upstream": config.upstream.chat_url,
        "api_key_configured": bool(config.upstream.api_key),
    }
