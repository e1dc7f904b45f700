"""Header construction for upstream requests."""


class HeaderBuilder:
    """Build upstream headers for the chat-completion API."""

    def build_upstream_headers(self, api_key: str) -> dict[str, str]:
        """Inject the server-held key as a bearer credential."""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
