"""HTTP client for the external contact form relay."""

import logging
from dataclasses import dataclass

import httpx

from makeup_studio.errors import ContactRelayError
from makeup_studio.services.bookings import ContactRelay

logger = logging.getLogger(__name__)


@dataclass
class HttpxContactRelayClient(ContactRelay):
    """HTTPX-backed form relay client."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxContactRelayClient":
        """Create a relay client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def submit(self, fields: dict[str, str]) -> None:
        """Post form fields to the relay endpoint.

        The relay answers with JSON; a non-JSON body (captcha or redirect
        page) or a body carrying ``ok: false`` or errors is a rejection.
        """
        try:
            response = await self.http_client.post(
                self.url,
                data=fields,
                headers={"Accept": "application/json"},
                timeout=15,
            )
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception("Contact relay rejected submission")
            raise ContactRelayError(
                "Your message could not be sent. Please try again."
            ) from exc
        if not _is_success(body):
            logger.error("Contact relay reported failure: %s", body)
            raise ContactRelayError("Your message could not be sent. Please try again.")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _is_success(body: object) -> bool:
    if not isinstance(body, dict):
        return False
    if body.get("ok") is False:
        return False
    return not body.get("error") and not body.get("errors")
