"""Base client for the hospital backend services."""

from typing import Any, ClassVar

import httpx
from pydantic import ValidationError

from hms_console.config import ConsoleConfig, get_config
from hms_console.errors import FALLBACK_ERROR_MESSAGE, ApiError
from hms_console.models.envelope import ApiEnvelope
from hms_console.utils.logging import get_logger

logger = get_logger(__name__)

ACTOR_HEADER = "X-User-Id"


def normalize_error_message(response: httpx.Response | None = None, error: BaseException | None = None) -> str:
    """Reduce a failed call to one human-readable message.

    Picks the first non-empty of: the envelope's `message`, the HTTP status
    text, the transport error text, a fixed fallback.
    """
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])

        if response.reason_phrase:
            return response.reason_phrase

    if error is not None and str(error):
        return str(error)

    return FALLBACK_ERROR_MESSAGE


def clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop query parameters that carry no value."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None and value != ""}


class ServiceClient:
    """Client for one backend, scoped to the backend's path prefix.

    Every method returns the unwrapped `data` of the response envelope or
    raises `ApiError` with a normalized message. Calls are fire-once.
    """

    service: ClassVar[str]

    def __init__(self, http: httpx.AsyncClient | None = None, config: ConsoleConfig | None = None):
        """Initialize the client.

        Args:
            http: Shared HTTP client (one is created against the gateway when omitted)
            config: Console configuration (defaults to the global instance)
        """
        self.config = config or get_config()
        self.prefix = self.config.service_prefix(self.service)
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=self.config.gateway_url, timeout=self.config.timeout)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, body: Any = None, actor: str | None = None) -> Any:
        return await self._request("POST", path, json=body, actor=actor or self.config.default_actor)

    async def _put(self, path: str, body: Any = None, actor: str | None = None) -> Any:
        return await self._request("PUT", path, json=body, actor=actor or self.config.default_actor)

    async def _patch(
        self,
        path: str,
        body: Any = None,
        actor: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self._request("PATCH", path, json=body, params=params, actor=actor or self.config.default_actor)

    async def _delete(self, path: str, actor: str | None = None) -> Any:
        return await self._request("DELETE", path, actor=actor or self.config.default_actor)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        actor: str | None = None,
    ) -> Any:
        """Issue one request and unwrap the envelope.

        Args:
            method: HTTP verb
            path: Path below the service prefix
            params: Query parameters (empty values are dropped)
            json: JSON body
            actor: Caller identity forwarded for audit attribution

        Returns:
            The envelope's `data`

        Raises:
            ApiError: On transport failure, non-2xx status or unusable body
        """
        url = f"{self.prefix}{path}"
        headers = {ACTOR_HEADER: actor} if actor else None
        query = clean_params(params)

        logger.debug(f"{method} {url} params={query} actor={actor}")

        try:
            response = await self.http.request(method, url, params=query or None, json=json, headers=headers)
        except httpx.HTTPError as e:
            message = normalize_error_message(error=e)
            logger.warning(f"{method} {url} failed before a response arrived: {message}")
            raise ApiError(message) from e

        if not response.is_success:
            message = normalize_error_message(response=response)
            logger.warning(f"{method} {url} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        return self._unwrap(method, url, response)

    def _unwrap(self, method: str, url: str, response: httpx.Response) -> Any:
        if not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f"{method} {url} returned a body that is not JSON")
            raise ApiError(FALLBACK_ERROR_MESSAGE, status_code=response.status_code) from e

        if not isinstance(body, dict):
            logger.warning(f"{method} {url} returned a body without an envelope")
            raise ApiError(FALLBACK_ERROR_MESSAGE, status_code=response.status_code)

        try:
            envelope = ApiEnvelope.model_validate(body)
        except ValidationError as e:
            logger.warning(f"{method} {url} returned a malformed envelope")
            raise ApiError(FALLBACK_ERROR_MESSAGE, status_code=response.status_code) from e

        if not envelope.success:
            message = envelope.message or FALLBACK_ERROR_MESSAGE
            logger.warning(f"{method} {url} reported failure: {message}")
            raise ApiError(message, status_code=response.status_code)

        return envelope.data
