"""Tests for ClientProfile loading, overrides and environment lookup."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from glang.config.profile import (
    TRANSLATE_BASE_URL,
    ClientProfile,
    RateGateConfig,
    TransportConfig,
)
from glang.exceptions import ConfigError, ConfigOverrideError


@pytest.mark.unit
class TestRateGateConfig:
    """Tests for rate gate defaults and bounds."""

    def test_defaults_should_match_provider_quota(self) -> None:
        """Defaults follow the 100000 characters per 100 seconds quota.

        Given: No arguments.
        When: RateGateConfig is created.
        Then: Limits are 100000 characters, 100s window, 0.5s pause, 5s poll.
        """
        config = RateGateConfig()

        assert config.character_limit == 100000
        assert config.delay_limit_seconds == 100.0
        assert config.per_request_delay_seconds == 0.5
        assert config.poll_interval_seconds == 5.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("character_limit", 0),
            ("delay_limit_seconds", 0.0),
            ("per_request_delay_seconds", -0.1),
            ("poll_interval_seconds", 0.0),
        ],
    )
    def test_out_of_range_values_should_fail_validation(
        self, field: str, value: float
    ) -> None:
        """Each bound is enforced.

        Given: A value outside a field's range.
        When: RateGateConfig is created.
        Then: ValidationError is raised.
        """
        with pytest.raises(ValidationError):
            RateGateConfig(**{field: value})

    def test_unknown_field_should_be_rejected(self) -> None:
        """extra="forbid" catches typos.

        Given: A misspelled field.
        When: RateGateConfig is created.
        Then: ValidationError is raised.
        """
        with pytest.raises(ValidationError):
            RateGateConfig(character_limt=5)  # type: ignore[call-arg]


@pytest.mark.unit
class TestTransportConfig:
    """Tests for transport settings."""

    def test_trailing_slash_should_be_stripped(self) -> None:
        """Base URLs are normalised.

        Given: A translate URL ending in a slash.
        When: TransportConfig is created.
        Then: The stored URL has no trailing slash.
        """
        config = TransportConfig(translate_url=f"{TRANSLATE_BASE_URL}/")

        assert config.translate_url == TRANSLATE_BASE_URL


@pytest.mark.unit
class TestClientProfileYaml:
    """Tests for YAML round-trips."""

    def test_from_yaml_should_load_all_sections(
        self, tmp_path: Path, sample_yaml_config: str
    ) -> None:
        """A YAML profile populates gate and transport settings.

        Given: A YAML file with both sections.
        When: ClientProfile.from_yaml is called.
        Then: Values are loaded and unspecified ones keep defaults.
        """
        path = tmp_path / "glang.yaml"
        path.write_text(sample_yaml_config, encoding="utf-8")

        profile = ClientProfile.from_yaml(path)

        assert profile.rate_gate.character_limit == 5000
        assert profile.rate_gate.delay_limit_seconds == 60
        assert profile.rate_gate.per_request_delay_seconds == 0.25
        assert profile.rate_gate.poll_interval_seconds == 5.0
        assert profile.transport.api_key == "test-api-key-123456"
        assert profile.transport.timeout_seconds == 30

    def test_from_yaml_missing_file_should_raise(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError.

        Given: A path that does not exist.
        When: from_yaml is called.
        Then: FileNotFoundError is raised.
        """
        with pytest.raises(FileNotFoundError):
            ClientProfile.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_invalid_syntax_should_raise_config_error(
        self, tmp_path: Path
    ) -> None:
        """Broken YAML is reported as ConfigError.

        Given: A file with invalid YAML.
        When: from_yaml is called.
        Then: ConfigError mentions the syntax problem.
        """
        path = tmp_path / "bad.yaml"
        path.write_text("rate_gate: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ClientProfile.from_yaml(path)

    def test_from_yaml_invalid_values_should_raise_config_error(
        self, tmp_path: Path
    ) -> None:
        """Validation failures are wrapped in ConfigError.

        Given: A YAML file with a negative character limit.
        When: from_yaml is called.
        Then: ConfigError is raised with the validation error as cause.
        """
        path = tmp_path / "bad.yaml"
        path.write_text("rate_gate:\n  character_limit: -1\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="validation failed") as exc_info:
            ClientProfile.from_yaml(path)

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_empty_yaml_should_give_defaults(self, tmp_path: Path) -> None:
        """An empty file yields the default profile.

        Given: An empty YAML file.
        When: from_yaml is called.
        Then: The profile equals ClientProfile().
        """
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert ClientProfile.from_yaml(path) == ClientProfile()

    def test_to_yaml_should_round_trip(self, tmp_path: Path) -> None:
        """to_yaml output loads back to an equal profile.

        Given: A profile with overrides.
        When: Written with to_yaml and read with from_yaml.
        Then: Both profiles are equal.
        """
        profile = ClientProfile().with_overrides(
            {"rate_gate.character_limit": 1234, "transport.api_key": "abc"}
        )
        path = tmp_path / "out.yaml"

        profile.to_yaml(path)

        assert ClientProfile.from_yaml(path) == profile


@pytest.mark.unit
class TestClientProfileOverrides:
    """Tests for dotted overrides and environment variables."""

    def test_with_overrides_should_return_new_profile(self) -> None:
        """Overrides produce a new instance and leave the original intact.

        Given: A default profile.
        When: rate_gate.delay_limit_seconds is overridden.
        Then: Only the new profile has the new value.
        """
        base = ClientProfile()

        updated = base.with_overrides({"rate_gate.delay_limit_seconds": 30.0})

        assert updated.rate_gate.delay_limit_seconds == 30.0
        assert base.rate_gate.delay_limit_seconds == 100.0

    def test_unknown_key_should_raise_with_field_path(self) -> None:
        """Unknown dotted keys are rejected.

        Given: A default profile.
        When: An override names a missing field.
        Then: ConfigOverrideError carries the field path.
        """
        with pytest.raises(ConfigOverrideError) as exc_info:
            ClientProfile().with_overrides({"rate_gate.nope": 1})

        assert exc_info.value.field_path == "rate_gate.nope"

    def test_unknown_section_should_raise(self) -> None:
        """Unknown top-level sections are rejected.

        Given: A default profile.
        When: An override names a missing section.
        Then: ConfigOverrideError is raised.
        """
        with pytest.raises(ConfigOverrideError):
            ClientProfile().with_overrides({"cache.size": 1})

    def test_invalid_value_should_raise(self) -> None:
        """Overrides are validated.

        Given: A default profile.
        When: character_limit is overridden with 0.
        Then: ConfigOverrideError is raised.
        """
        with pytest.raises(ConfigOverrideError):
            ClientProfile().with_overrides({"rate_gate.character_limit": 0})

    def test_from_env_should_apply_variables(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """GLANG_* variables override profile values.

        Given: Environment variables for key, limits and pause.
        When: ClientProfile.from_env() is called.
        Then: Every value is applied with the right type.
        """
        monkeypatch.setenv("GLANG_API_KEY", "env-key")
        monkeypatch.setenv("GLANG_CHARACTER_LIMIT", "2500")
        monkeypatch.setenv("GLANG_DELAY_LIMIT", "50")
        monkeypatch.setenv("GLANG_RATE_LIMIT", "0.1")

        profile = ClientProfile.from_env()

        assert profile.transport.api_key == "env-key"
        assert profile.rate_gate.character_limit == 2500
        assert profile.rate_gate.delay_limit_seconds == 50.0
        assert profile.rate_gate.per_request_delay_seconds == 0.1

    def test_from_env_without_variables_should_return_base(self) -> None:
        """No variables means no changes.

        Given: A base profile and a clean environment.
        When: from_env(base) is called.
        Then: The base profile is returned unchanged.
        """
        base = ClientProfile().with_overrides({"rate_gate.character_limit": 7})

        assert ClientProfile.from_env(base) == base

    def test_from_env_unparsable_value_should_raise(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Non-numeric limits are reported with their field path.

        Given: GLANG_CHARACTER_LIMIT set to a word.
        When: from_env is called.
        Then: ConfigOverrideError names rate_gate.character_limit.
        """
        monkeypatch.setenv("GLANG_CHARACTER_LIMIT", "lots")

        with pytest.raises(ConfigOverrideError) as exc_info:
            ClientProfile.from_env()

        assert exc_info.value.field_path == "rate_gate.character_limit"
