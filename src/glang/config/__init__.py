"""Configuration management for glang.

This package provides the ClientProfile configuration system,
including YAML serialization, dotted overrides and environment lookup.
"""

from glang.config.profile import ClientProfile, RateGateConfig, TransportConfig

__all__ = [
    "ClientProfile",
    "RateGateConfig",
    "TransportConfig",
]
