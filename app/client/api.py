import logging
from typing import Any, Optional

import httpx

from app.client.config import ClientSettings

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Check your connection."
GENERIC_ERROR_MESSAGE = "Something went wrong on the server."


class ApiError(Exception):
    """An API call failed; message is safe to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_error_message(response: httpx.Response, fallback: str) -> str:
    """Use the server's {"error": ...} text for client errors, else the fallback."""
    if not response.is_client_error:
        return fallback
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return fallback


class ApiClient:
    """Thin async wrapper around the AgroMarket REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        settings = ClientSettings()
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    @property
    def authorization(self) -> Optional[str]:
        return self._client.headers.get("Authorization")

    def set_token(self, token: str) -> None:
        """Send the bearer token with every subsequent request."""
        self._client.headers["Authorization"] = f"Bearer {token}"

    def clear_token(self) -> None:
        self._client.headers.pop("Authorization", None)

    async def request(
        self,
        method: str,
        url: str,
        json: Any = None,
        fallback_message: str = GENERIC_ERROR_MESSAGE,
    ) -> Any:
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.TransportError as e:
            logger.warning(f"{method} {url} failed: {str(e)}")
            raise ApiError(NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            logger.info(f"{method} {url} returned {response.status_code}")
            raise ApiError(extract_error_message(response, fallback_message), response.status_code)

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        return response.json()

    async def get(self, url: str, **kwargs) -> Any:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("POST", url, json=json, **kwargs)

    async def put(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("PUT", url, json=json, **kwargs)

    async def delete(self, url: str, json: Any = None, **kwargs) -> Any:
        return await self.request("DELETE", url, json=json, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
