"""Unit tests for exception hierarchy and string formatting.

This module validates that custom exceptions correctly handle messages,
attributes, and cause chaining.
"""

import pytest

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


@pytest.mark.unit
class TestGLangError:
    """Tests for the base GLangError class behavior."""

    def test_initialization_should_store_message_and_no_cause(self) -> None:
        """Test basic instantiation of GLangError.

        Given: A simple error message.
        When: The exception is instantiated.
        Then: The string representation matches the message and cause is None.
        """
        error = GLangError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.cause is None

    def test_initialization_with_cause_should_include_cause_text(self) -> None:
        """Test instantiation with an explicit cause argument.

        Given: An original ValueError.
        When: GLangError is instantiated with 'cause'.
        Then: Both messages appear and the cause is referenced.
        """
        original = ValueError("Original error")
        wrapper = GLangError("Wrapper error", cause=original)

        assert "Wrapper error" in str(wrapper)
        assert "Original error" in str(wrapper)
        assert wrapper.cause is original

    def test_raising_from_cause_should_preserve_chain(self) -> None:
        """Exception chaining with 'raise from' keeps __cause__.

        Given: An underlying ValueError.
        When: GLangError is raised from it.
        Then: The caught exception has the ValueError as __cause__.
        """
        with pytest.raises(GLangError) as exc_info:
            try:
                raise ValueError("Deep error")
            except ValueError as e:
                raise GLangError("Surface error") from e

        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize(
        "exc_type",
        [
            InvalidArgumentError,
            ConfigError,
            ConfigOverrideError,
            TransportError,
            ResponseParseError,
            GateCancelledError,
            OperationError,
        ],
    )
    def test_subclasses_should_be_catchable_as_base(self, exc_type: type) -> None:
        """Every package exception derives from GLangError.

        Given: A package exception type.
        When: Checked against GLangError.
        Then: It is a subclass.
        """
        assert issubclass(exc_type, GLangError)


@pytest.mark.unit
class TestInvalidArgumentError:
    """Tests for argument-validation errors."""

    def test_error_should_append_argument_name(self) -> None:
        """The argument name is appended to the message.

        Given: An InvalidArgumentError with argument="target".
        When: Converted to string.
        Then: The argument name is included.
        """
        error = InvalidArgumentError("bad value", argument="target")

        assert str(error) == "bad value (argument: target)"
        assert error.argument == "target"

    def test_error_without_argument_should_format_plain_message(self) -> None:
        """Without an argument the message is unchanged.

        Given: An InvalidArgumentError with no argument.
        When: Converted to string.
        Then: Only the message is shown.
        """
        assert str(InvalidArgumentError("bad value")) == "bad value"


@pytest.mark.unit
class TestConfigError:
    """Tests for configuration-related exceptions."""

    def test_error_should_append_field_path(self) -> None:
        """The field path is appended to the message.

        Given: A ConfigError with a field path.
        When: Converted to string.
        Then: The field path is included.
        """
        error = ConfigError("Invalid", field_path="rate_gate.character_limit")

        assert "(field: rate_gate.character_limit)" in str(error)

    def test_override_error_should_inherit_config_error(self) -> None:
        """ConfigOverrideError is a ConfigError.

        Given: A ConfigOverrideError.
        When: Checked against ConfigError.
        Then: It is an instance.
        """
        assert isinstance(ConfigOverrideError("x"), ConfigError)


@pytest.mark.unit
class TestTransportError:
    """Tests for HTTP failure errors."""

    def test_error_should_store_status_and_url(self) -> None:
        """Status code and URL are kept as attributes.

        Given: A TransportError for a 403 response.
        When: Inspected.
        Then: status_code, url and formatted message are available.
        """
        error = TransportError("denied", status_code=403, url="https://x/y")

        assert error.status_code == 403
        assert error.url == "https://x/y"
        assert str(error) == "denied (status: 403)"

    def test_network_error_should_omit_status(self) -> None:
        """Network failures have no status code.

        Given: A TransportError with a cause but no status.
        When: Converted to string.
        Then: No status suffix is added and the cause is mentioned.
        """
        error = TransportError("failed", cause=ConnectionError("reset"))

        assert "status" not in str(error)
        assert "reset" in str(error)


@pytest.mark.unit
class TestOperationError:
    """Tests for failed long-running operation errors."""

    def test_error_should_store_operation_and_code(self) -> None:
        """Operation name and provider code are kept as attributes.

        Given: An OperationError for operation "42" with code 3.
        When: Inspected.
        Then: operation, code and the formatted message are available.
        """
        error = OperationError("Operation 42 failed", operation="42", code=3)

        assert error.operation == "42"
        assert error.code == 3
        assert str(error) == "Operation 42 failed (code: 3)"

    def test_error_should_not_be_a_parse_error(self) -> None:
        """Provider-side failures are distinct from undecodable responses.

        Given: An OperationError.
        When: Checked against ResponseParseError.
        Then: It is not an instance.
        """
        assert not isinstance(OperationError("x"), ResponseParseError)
