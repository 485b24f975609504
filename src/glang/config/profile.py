"""Client configuration profile and sub-configurations.

This module defines the configuration structure for glang clients using
Pydantic V2 for validation: rate gate quotas, transport credentials and
endpoint locations.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

TRANSLATE_BASE_URL = "https://translation.googleapis.com/language/translate/v2"
LANGUAGE_BASE_URL = "https://language.googleapis.com/v1"
SPEECH_BASE_URL = "https://speech.googleapis.com/v1"


class RateGateConfig(BaseModel):
    """Quota settings for the client-side rate gate.

    Defaults mirror the provider's published limits of 100000 characters
    per 100 seconds for translation.

    Attributes:
        character_limit: Characters allowed per quota window.
        delay_limit_seconds: Length of the quota window.
        per_request_delay_seconds: Fixed pause applied before every request.
        poll_interval_seconds: Longest single sleep while blocked in the gate.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    character_limit: int = Field(
        default=100000,
        ge=1,
        description="Characters allowed per quota window",
    )
    delay_limit_seconds: float = Field(
        default=100.0,
        gt=0.0,
        description="Length of the quota window in seconds",
    )
    per_request_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        description="Fixed pause before every request (requests-per-window throttle)",
    )
    poll_interval_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Maximum single sleep while waiting for the window to elapse",
    )


class TransportConfig(BaseModel):
    """HTTP transport settings.

    Attributes:
        api_key: API key sent as the ``key`` query parameter.
        access_token: OAuth2 bearer token.
        timeout_seconds: Per-request HTTP timeout.
        translate_url: Translation API v2 base URL.
        language_url: Natural Language API v1 base URL.
        speech_url: Speech-to-Text API v1 base URL.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    api_key: str | None = Field(default=None, description="Google Cloud API key")
    access_token: str | None = Field(
        default=None, description="OAuth2 access token (Bearer)"
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="HTTP timeout per request",
    )
    translate_url: str = Field(default=TRANSLATE_BASE_URL)
    language_url: str = Field(default=LANGUAGE_BASE_URL)
    speech_url: str = Field(default=SPEECH_BASE_URL)

    @field_validator("translate_url", "language_url", "speech_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalise base URLs so endpoint joins never double a slash."""
        return v.rstrip("/")


class ClientProfile(BaseModel):
    """Complete client configuration.

    Attributes:
        rate_gate: Quota settings shared by every service of a client.
        transport: HTTP transport settings.
    """

    model_config = ConfigDict(strict=True, extra="forbid")

    rate_gate: RateGateConfig = Field(
        default_factory=RateGateConfig,
        description="Rate gate configuration",
    )
    transport: TransportConfig = Field(
        default_factory=TransportConfig,
        description="Transport configuration",
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "ClientProfile":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Validated ClientProfile instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigError: If YAML is invalid or validation fails.
        """
        from glang.exceptions import ConfigError

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}") from e

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ConfigError(f"Configuration validation failed: {e}") from e

    @classmethod
    def from_env(cls, base: "ClientProfile | None" = None) -> "ClientProfile":
        """Apply environment variable overrides on top of a profile.

        Recognised variables: GLANG_API_KEY, GLANG_ACCESS_TOKEN,
        GLANG_CHARACTER_LIMIT, GLANG_DELAY_LIMIT and GLANG_RATE_LIMIT
        (the per-request delay).

        Args:
            base: Profile to start from; defaults are used when None.

        Returns:
            New ClientProfile with environment values applied.

        Raises:
            ConfigOverrideError: If a variable holds an unparsable value.
        """
        from glang.exceptions import ConfigOverrideError

        profile = base or cls()
        overrides: dict[str, Any] = {}

        env_map: dict[str, tuple[str, type]] = {
            "GLANG_API_KEY": ("transport.api_key", str),
            "GLANG_ACCESS_TOKEN": ("transport.access_token", str),
            "GLANG_CHARACTER_LIMIT": ("rate_gate.character_limit", int),
            "GLANG_DELAY_LIMIT": ("rate_gate.delay_limit_seconds", float),
            "GLANG_RATE_LIMIT": ("rate_gate.per_request_delay_seconds", float),
        }
        for var, (key, caster) in env_map.items():
            raw = os.getenv(var)
            if raw in (None, ""):
                continue
            try:
                overrides[key] = caster(raw)
            except ValueError as e:
                raise ConfigOverrideError(
                    f"Environment variable {var} is not a valid {caster.__name__}: {raw!r}",
                    field_path=key,
                ) from e

        if not overrides:
            return profile
        return profile.with_overrides(overrides)

    def to_yaml(self, path: Path) -> None:
        """Export configuration to a YAML file.

        Args:
            path: Output file path.
        """
        data = self.model_dump(mode="python")
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                data,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    def with_overrides(self, overrides: dict[str, Any]) -> "ClientProfile":
        """Create a new profile with partial overrides applied.

        Args:
            overrides: Dictionary of overrides using dotted notation.
                Example: {"rate_gate.character_limit": 5000}

        Returns:
            New ClientProfile instance with overrides applied.

        Raises:
            ConfigOverrideError: If override key is invalid or type mismatches.
        """
        from glang.exceptions import ConfigOverrideError

        data = self.model_dump(mode="python")

        last_key: str = ""
        for key, value in overrides.items():
            last_key = key
            parts = key.split(".")
            current = data
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    raise ConfigOverrideError(
                        f"Invalid override key: {key}", field_path=key
                    )
                current = current[part]

            final_key = parts[-1]
            if final_key not in current:
                raise ConfigOverrideError(
                    f"Invalid override key: {key}", field_path=key
                )

            current[final_key] = value

        try:
            return self.model_validate(data)
        except Exception as e:
            raise ConfigOverrideError(
                f"Override validation failed: {e}", field_path=last_key
            ) from e
