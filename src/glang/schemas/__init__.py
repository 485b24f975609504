"""Data models for glang.

This package defines the rate gate's observable state and the result
types returned by the Natural Language and Speech services.
"""

from glang.schemas.ratelimit import GateEvent, QuotaSnapshot
from glang.schemas.results import NlpResult, SpeechOperation, SpeechResult

__all__ = [
    "GateEvent",
    "QuotaSnapshot",
    "NlpResult",
    "SpeechOperation",
    "SpeechResult",
]
