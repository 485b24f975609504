"""Rate gate data models.

This module defines the observable state of the quota window and the
structured events the rate gate emits while admitting requests.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

GateEventKind = Literal["pause", "batch", "limited", "waiting", "ready"]


class QuotaSnapshot(BaseModel):
    """Point-in-time copy of a rate gate's quota window.

    Attributes:
        accumulated_characters: Characters admitted since window_start.
        window_start: Clock reading at which the current window began.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    accumulated_characters: int = Field(..., ge=0)
    window_start: float = Field(...)


class GateEvent(BaseModel):
    """Structured record of a rate gate state change.

    Kinds:
        pause: fixed per-request delay applied.
        batch: characters added to a window still under the limit.
        limited: the character limit was exceeded and the caller will block.
        waiting: one poll iteration while blocked.
        ready: the window elapsed and was reset.

    Attributes:
        kind: Event kind.
        accumulated_characters: Window total after the event.
        request_characters: Size of the request being admitted.
        elapsed_seconds: Time since the window started.
        remaining_seconds: Time left before the window may reset.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    kind: GateEventKind = Field(..., description="Event kind")
    accumulated_characters: int = Field(default=0, ge=0)
    request_characters: int = Field(default=0, ge=0)
    elapsed_seconds: float = Field(default=0.0)
    remaining_seconds: float = Field(default=0.0, ge=0.0)
