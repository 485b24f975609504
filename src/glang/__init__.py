"""glang - rate-limited client for Google's language REST APIs.

This package forwards text and audio to the Translation, Natural Language
and Speech-to-Text APIs, throttling outbound calls with a client-side
character-volume rate gate.
"""

__version__ = "0.1.0"

from glang.client import LanguageClient
from glang.exceptions import (
    ConfigError,
    ConfigOverrideError,
    GateCancelledError,
    GLangError,
    InvalidArgumentError,
    OperationError,
    ResponseParseError,
    TransportError,
)
from glang.ratelimit.gate import RateGate

__all__ = [
    "__version__",
    "LanguageClient",
    "RateGate",
    "GLangError",
    "InvalidArgumentError",
    "ConfigError",
    "ConfigOverrideError",
    "TransportError",
    "ResponseParseError",
    "OperationError",
    "GateCancelledError",
]
