"""Abstract base class for authenticated API transports.

A transport performs one authenticated HTTP call and returns the decoded
JSON body. Services depend only on this contract, so tests can substitute
an in-memory fake.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Literal

HttpMethod = Literal["GET", "POST"]
QueryParams = Mapping[str, str | Sequence[str]]


class BaseTransport(ABC):
    """Contract for performing authenticated REST calls."""

    @abstractmethod
    def call(
        self,
        method: HttpMethod,
        url: str,
        params: QueryParams | None = None,
        body: Any | None = None,
    ) -> Any:
        """Perform an HTTP call and return the decoded JSON response.

        Args:
            method: HTTP verb.
            url: Fully qualified endpoint URL.
            params: Query parameters; sequence values repeat the key.
            body: JSON-serialisable request body.

        Returns:
            Decoded JSON value.

        Raises:
            TransportError: On non-2xx response or network failure.
            ResponseParseError: If the body is not valid JSON.
        """
        pass

    def close(self) -> None:
        """Release any held connections."""
        return None

    def __enter__(self) -> "BaseTransport":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
