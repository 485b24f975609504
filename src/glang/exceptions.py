"""Core exception hierarchy for glang.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from GLangError for unified error handling.
"""


class GLangError(Exception):
    """Base exception for all glang errors.

    All custom exceptions in the package inherit from this class,
    allowing users to catch all glang-specific errors with a single
    except clause.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            cause: Optional underlying exception that triggered this error.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class InvalidArgumentError(GLangError):
    """Raised when a caller supplies an argument outside its domain.

    This includes negative character counts handed to the rate gate,
    unknown translation formats or models, and missing audio files.
    """

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the invalid argument error.

        Args:
            message: Human-readable error description.
            argument: Optional name of the offending argument.
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.argument = argument

    def __str__(self) -> str:
        """Return string representation including the argument name."""
        base_msg = super().__str__()
        if self.argument:
            return f"{base_msg} (argument: {self.argument})"
        return base_msg


class ConfigError(GLangError):
    """Raised when configuration validation fails.

    This includes invalid YAML files, missing credentials, type
    mismatches, or out-of-range quota settings.
    """

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Human-readable error description.
            field_path: Optional dotted path to the problematic field (e.g., "rate_gate.character_limit").
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.field_path = field_path

    def __str__(self) -> str:
        """Return string representation including field path."""
        base_msg = super().__str__()
        if self.field_path:
            return f"{base_msg} (field: {self.field_path})"
        return base_msg


class ConfigOverrideError(ConfigError):
    """Raised when applying invalid configuration overrides.

    This occurs when attempting to override non-existent fields
    or with incompatible types.
    """

    pass


class TransportError(GLangError):
    """Raised when an API call fails at the HTTP layer.

    Covers non-2xx responses (authentication failure, quota exceeded
    despite throttling, malformed request) and network failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the transport error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code, None for network failures.
            url: Endpoint that was called.
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        """Return string representation including the HTTP status."""
        base_msg = super().__str__()
        if self.status_code is not None:
            return f"{base_msg} (status: {self.status_code})"
        return base_msg


class ResponseParseError(GLangError):
    """Raised when a response body cannot be decoded or lacks expected fields."""

    pass


class GateCancelledError(GLangError):
    """Raised when a caller cancels while blocked inside the rate gate."""

    pass


class OperationError(GLangError):
    """Raised when a finished long-running operation reports a failure.

    The provider accepted the request, but processing failed later. The
    operation's ``error.code`` (a google.rpc status code) is kept.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        code: int | None = None,
        cause: Exception | None = None,
    ):
        """Initialize the operation error.

        Args:
            message: Human-readable error description.
            operation: Name of the failed operation.
            code: Provider status code from ``error.code``.
            cause: Optional underlying exception.
        """
        super().__init__(message, cause)
        self.operation = operation
        self.code = code

    def __str__(self) -> str:
        """Return string representation including the provider code."""
        base_msg = super().__str__()
        if self.code is not None:
            return f"{base_msg} (code: {self.code})"
        return base_msg
