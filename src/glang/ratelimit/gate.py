"""Character-volume rate gate for quota-bound API calls.

The gate keeps a single quota window: a running character total and the
clock reading at which the window began. Admitting a request adds its size
to the total; once the total exceeds the character limit the caller blocks
until the window is at least ``delay_limit_seconds`` old, after which the
window is reset. Requests are never rejected, only delayed.

A separate fixed pause (``pause``) is applied before every request as a
coarse requests-per-window throttle.
"""

import asyncio
import numbers
import threading
import time
from collections.abc import Awaitable, Callable, Iterable

from glang.config.profile import RateGateConfig
from glang.exceptions import GateCancelledError, InvalidArgumentError
from glang.logger import get_logger
from glang.schemas.ratelimit import GateEvent, GateEventKind, QuotaSnapshot

logger = get_logger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], None]
AsyncSleeper = Callable[[float], Awaitable[None]]
GateObserver = Callable[[GateEvent], None]

# Interval at which an async admit retries the thread lock held by a sync admit
LOCK_RETRY_SECONDS = 0.01


def log_gate_event(event: GateEvent) -> None:
    """Default observer: write gate events to the package logger."""
    extra = {"gate": event.model_dump()}
    if event.kind == "limited":
        logger.info(
            "Limiting API: %d characters over limit, window %.1fs old",
            event.accumulated_characters,
            event.elapsed_seconds,
            extra=extra,
        )
    elif event.kind == "waiting":
        logger.info("Waiting for %.0fs", event.remaining_seconds, extra=extra)
    elif event.kind == "ready":
        logger.debug("Ready to call API again", extra=extra)
    elif event.kind == "batch":
        logger.debug(
            "Current character batch: %d", event.accumulated_characters, extra=extra
        )
    else:
        logger.debug("Pausing %.2fs before request", event.remaining_seconds, extra=extra)


class RateGate:
    """Blocking two-tier throttle shared by every outbound request.

    State is guarded by one thread lock shared by ``admit`` and
    ``admit_async``, so concurrent admits serialize: the read-modify-write
    of the character total and any wait it triggers form one critical
    section, whichever path the callers use.

    Attributes:
        character_limit: Characters allowed per quota window.
        delay_limit_seconds: Minimum window age before a reset.
        per_request_delay_seconds: Fixed pause applied by ``pause``.
        poll_interval_seconds: Longest single sleep while blocked.
    """

    def __init__(
        self,
        character_limit: int = 100000,
        delay_limit_seconds: float = 100.0,
        per_request_delay_seconds: float = 0.5,
        poll_interval_seconds: float = 5.0,
        clock: Clock = time.monotonic,
        sleep: Sleeper = time.sleep,
        async_sleep: AsyncSleeper = asyncio.sleep,
        observers: Iterable[GateObserver] | None = None,
    ):
        """Initialize the gate with an empty window starting now.

        Args:
            character_limit: Characters allowed per quota window.
            delay_limit_seconds: Minimum window age before a reset.
            per_request_delay_seconds: Fixed pause applied by ``pause``.
            poll_interval_seconds: Longest single sleep while blocked.
            clock: Time source; ``now`` arguments must come from the same clock.
            sleep: Blocking sleep used by the synchronous path.
            async_sleep: Awaitable sleep used by the async path.
            observers: Event callbacks; defaults to logging.

        Raises:
            InvalidArgumentError: If a limit is out of range.
        """
        if character_limit < 1:
            raise InvalidArgumentError(
                "character_limit must be positive", argument="character_limit"
            )
        if delay_limit_seconds <= 0:
            raise InvalidArgumentError(
                "delay_limit_seconds must be positive", argument="delay_limit_seconds"
            )
        if per_request_delay_seconds < 0:
            raise InvalidArgumentError(
                "per_request_delay_seconds must not be negative",
                argument="per_request_delay_seconds",
            )
        if poll_interval_seconds <= 0:
            raise InvalidArgumentError(
                "poll_interval_seconds must be positive",
                argument="poll_interval_seconds",
            )

        self.character_limit = character_limit
        self.delay_limit_seconds = delay_limit_seconds
        self.per_request_delay_seconds = per_request_delay_seconds
        self.poll_interval_seconds = poll_interval_seconds

        self._clock = clock
        self._sleep = sleep
        self._async_sleep = async_sleep
        self._observers: list[GateObserver] = (
            list(observers) if observers is not None else [log_gate_event]
        )

        self._lock = threading.RLock()
        self._async_lock = asyncio.Lock()
        self._characters = 0
        self._window_start = clock()

    @classmethod
    def from_config(cls, config: RateGateConfig, **kwargs) -> "RateGate":
        """Create a gate from configuration.

        Args:
            config: Quota settings.
            **kwargs: Clock, sleep or observer overrides.

        Returns:
            Configured gate.
        """
        return cls(
            character_limit=config.character_limit,
            delay_limit_seconds=config.delay_limit_seconds,
            per_request_delay_seconds=config.per_request_delay_seconds,
            poll_interval_seconds=config.poll_interval_seconds,
            **kwargs,
        )

    @property
    def accumulated_characters(self) -> int:
        return self._characters

    @property
    def window_start(self) -> float:
        return self._window_start

    def snapshot(self) -> QuotaSnapshot:
        """Return a consistent copy of the quota window."""
        with self._lock:
            return QuotaSnapshot(
                accumulated_characters=self._characters,
                window_start=float(self._window_start),
            )

    def add_observer(self, observer: GateObserver) -> None:
        self._observers.append(observer)

    def reset(self) -> None:
        """Start a fresh, empty window at the current clock reading."""
        with self._lock:
            self._reset_window(emit=False)

    def pause(self) -> None:
        """Apply the fixed per-request delay."""
        if self.per_request_delay_seconds <= 0:
            return
        self._emit("pause", remaining=self.per_request_delay_seconds)
        self._sleep(self.per_request_delay_seconds)

    async def pause_async(self) -> None:
        """Awaitable form of ``pause``."""
        if self.per_request_delay_seconds <= 0:
            return
        self._emit("pause", remaining=self.per_request_delay_seconds)
        await self._async_sleep(self.per_request_delay_seconds)

    def admit(
        self,
        request_character_count: int,
        now: float | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Account for a request, blocking while the window is over quota.

        Args:
            request_character_count: Characters the request will submit.
            now: Clock reading at call time; read from the clock when None.
            cancel: Optional event checked at each poll while blocked.

        Raises:
            InvalidArgumentError: If the count is negative or not an integer.
            GateCancelledError: If ``cancel`` is set while blocked.
        """
        request_character_count = self._validate(request_character_count)

        with self._lock:
            if not self._accumulate(request_character_count, now):
                return

            elapsed = self._elapsed(now)
            while elapsed < self.delay_limit_seconds:
                if cancel is not None and cancel.is_set():
                    raise GateCancelledError(
                        f"Cancelled while waiting for quota window "
                        f"({self.delay_limit_seconds - elapsed:.1f}s remaining)"
                    )
                self._sleep(self._wait_step(elapsed, request_character_count))
                elapsed = self._elapsed()

            self._reset_window()

    async def admit_async(
        self, request_character_count: int, now: float | None = None
    ) -> None:
        """Awaitable form of ``admit``.

        Blocking suspends only the calling task. Tasks queue on the gate's
        async lock; while a synchronous ``admit`` holds the thread lock the
        task retries it without blocking the event loop. Cancel by
        cancelling the task.

        Args:
            request_character_count: Characters the request will submit.
            now: Clock reading at call time; read from the clock when None.

        Raises:
            InvalidArgumentError: If the count is negative or not an integer.
        """
        request_character_count = self._validate(request_character_count)

        async with self._async_lock:
            await self._acquire_thread_lock()
            try:
                if not self._accumulate(request_character_count, now):
                    return

                elapsed = self._elapsed(now)
                while elapsed < self.delay_limit_seconds:
                    await self._async_sleep(
                        self._wait_step(elapsed, request_character_count)
                    )
                    elapsed = self._elapsed()

                self._reset_window()
            finally:
                self._lock.release()

    async def _acquire_thread_lock(self) -> None:
        # A sync admit may hold the lock for a whole window
        while not self._lock.acquire(blocking=False):
            await asyncio.sleep(LOCK_RETRY_SECONDS)

    @staticmethod
    def _validate(count: int) -> int:
        # numpy and pandas integers are Integral; bool is not a count
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise InvalidArgumentError(
                f"Character count must be an integer, got {type(count).__name__}",
                argument="request_character_count",
            )
        if count < 0:
            raise InvalidArgumentError(
                f"Character count must not be negative, got {count}",
                argument="request_character_count",
            )
        return int(count)

    def _elapsed(self, now: float | None = None) -> float:
        current = self._clock() if now is None else now
        return current - self._window_start

    def _accumulate(self, count: int, now: float | None) -> bool:
        """Add ``count`` to the window; return True if the limit is exceeded."""
        self._characters += count
        if self._characters <= self.character_limit:
            self._emit("batch", request=count)
            return False

        elapsed = self._elapsed(now)
        self._emit(
            "limited",
            request=count,
            elapsed=elapsed,
            remaining=max(0.0, self.delay_limit_seconds - elapsed),
        )
        return True

    def _wait_step(self, elapsed: float, count: int) -> float:
        remaining = self.delay_limit_seconds - elapsed
        self._emit("waiting", request=count, elapsed=elapsed, remaining=remaining)
        return min(self.poll_interval_seconds, remaining)

    def _reset_window(self, emit: bool = True) -> None:
        self._characters = 0
        self._window_start = self._clock()
        if emit:
            self._emit("ready")

    def _emit(
        self,
        kind: GateEventKind,
        request: int = 0,
        elapsed: float | None = None,
        remaining: float = 0.0,
    ) -> None:
        event = GateEvent(
            kind=kind,
            accumulated_characters=self._characters,
            request_characters=request,
            elapsed_seconds=float(self._elapsed() if elapsed is None else elapsed),
            remaining_seconds=float(remaining),
        )
        for observer in self._observers:
            observer(event)
