"""Shared plumbing for the REST services.

Every service holds a rate gate and a transport. Character-bearing calls
pass through ``pause`` and ``admit`` before reaching the transport.
"""

from abc import ABC
from collections.abc import Sequence
from typing import Any

from glang.exceptions import InvalidArgumentError, ResponseParseError
from glang.ratelimit.gate import RateGate
from glang.transport.base import BaseTransport, HttpMethod, QueryParams


def as_string_list(strings: str | Sequence[str], argument: str = "strings") -> list[str]:
    """Normalise a string or sequence of strings to a non-empty list.

    Raises:
        InvalidArgumentError: If the input is empty or holds non-strings.
    """
    if isinstance(strings, str):
        texts = [strings]
    else:
        texts = list(strings)

    if not texts:
        raise InvalidArgumentError("At least one string is required", argument=argument)
    if not all(isinstance(t, str) for t in texts):
        raise InvalidArgumentError("All inputs must be strings", argument=argument)
    return texts


def extract(response: Any, *keys: str) -> Any:
    """Walk nested response keys, e.g. ``extract(r, "data", "translations")``.

    Raises:
        ResponseParseError: If any key is missing.
    """
    current = response
    for depth, key in enumerate(keys):
        if not isinstance(current, dict) or key not in current:
            path = ".".join(keys[: depth + 1])
            raise ResponseParseError(f"Response is missing '{path}'")
        current = current[key]
    return current


class BaseService(ABC):
    """Common base for services sharing a gate and a transport.

    Attributes:
        gate: Rate gate consulted before each outbound call.
        transport: Authenticated HTTP transport.
    """

    def __init__(self, gate: RateGate, transport: BaseTransport):
        self.gate = gate
        self.transport = transport

    def _gated_call(
        self,
        characters: int,
        method: HttpMethod,
        url: str,
        params: QueryParams | None = None,
        body: Any | None = None,
    ) -> Any:
        self.gate.pause()
        self.gate.admit(characters)
        return self.transport.call(method, url, params=params, body=body)

    def _paused_call(
        self,
        method: HttpMethod,
        url: str,
        params: QueryParams | None = None,
        body: Any | None = None,
    ) -> Any:
        self.gate.pause()
        return self.transport.call(method, url, params=params, body=body)
