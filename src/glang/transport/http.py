"""HTTP transport built on requests.

Authenticates either with an API key (``key`` query parameter) or an
OAuth2 access token (``Authorization: Bearer``) and maps HTTP failures to
TransportError.
"""

from typing import Any

import requests

from glang.config.profile import TransportConfig
from glang.exceptions import ConfigError, ResponseParseError, TransportError
from glang.logger import get_logger, mask_sensitive
from glang.transport.base import BaseTransport, HttpMethod, QueryParams

logger = get_logger(__name__)


def _provider_message(response: requests.Response) -> str:
    """Extract Google's ``error.message`` from a failure body, if any."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason or "no response body"
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return str(payload["error"].get("message", payload["error"]))
    return str(payload)[:200]


class RequestsTransport(BaseTransport):
    """Authenticated transport using a pooled requests.Session.

    Attributes:
        timeout_seconds: Per-request timeout.
    """

    def __init__(
        self,
        api_key: str | None = None,
        access_token: str | None = None,
        timeout_seconds: float = 60.0,
        session: requests.Session | None = None,
    ):
        """Initialize the transport.

        Args:
            api_key: API key; sent as the ``key`` query parameter.
            access_token: OAuth2 bearer token.
            timeout_seconds: Per-request timeout.
            session: Optional preconfigured session.

        Raises:
            ConfigError: If neither credential is supplied.
        """
        if not api_key and not access_token:
            raise ConfigError(
                "An api_key or access_token is required",
                field_path="transport.api_key",
            )

        self._api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        if access_token:
            self._session.headers["Authorization"] = f"Bearer {access_token}"

        logger.debug(
            "Transport ready: auth=%s",
            f"key {mask_sensitive(api_key)}" if api_key else "bearer token",
        )

    @classmethod
    def from_config(cls, config: TransportConfig) -> "RequestsTransport":
        """Create a transport from configuration.

        Args:
            config: Transport settings.

        Returns:
            Configured transport.
        """
        return cls(
            api_key=config.api_key,
            access_token=config.access_token,
            timeout_seconds=config.timeout_seconds,
        )

    def call(
        self,
        method: HttpMethod,
        url: str,
        params: QueryParams | None = None,
        body: Any | None = None,
    ) -> Any:
        query: dict[str, Any] = dict(params or {})
        if self._api_key:
            query["key"] = self._api_key

        logger.debug("Calling API: %s %s", method, url)

        try:
            response = self._session.request(
                method,
                url,
                params=query,
                json=body,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("Request failed: %s %s", method, url)
            logger.debug("Request error details: %s", e, exc_info=True)
            raise TransportError(
                f"{method} {url} failed", url=url, cause=e
            ) from e

        if not response.ok:
            message = _provider_message(response)
            logger.error(
                "API returned %d for %s %s: %s",
                response.status_code,
                method,
                url,
                message,
            )
            raise TransportError(
                f"{method} {url} returned an error: {message}",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"Response from {url} is not valid JSON", cause=e
            ) from e

    def close(self) -> None:
        self._session.close()
