"""HTTP client for the upstream chat-completion API."""

import httpx

from core.request_types import PreparedRequest


class UpstreamClient:
    """Post prepared requests to the upstream API over a shared client."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def post_chat_completion(self, prepared: PreparedRequest) -> httpx.Response:
        """Send the request and read the full (non-streaming) response."""
        return await self._client.post(
            prepared.target_url,
            json=prepared.body,
            headers=prepared.headers,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
