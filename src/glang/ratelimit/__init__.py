"""Client-side quota throttling."""

from glang.ratelimit.gate import GateObserver, RateGate, log_gate_event

__all__ = ["RateGate", "GateObserver", "log_gate_event"]
