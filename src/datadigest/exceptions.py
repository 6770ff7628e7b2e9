"""Exceptions for data-digest processing"""  # noqa: D415


class DataDigestError(Exception):
    """Base exception for data-digest errors"""  # noqa: D415


class ConfigurationError(DataDigestError):
    """Raised when configuration cannot be parsed or fails validation"""  # noqa: D415


class ValidationError(DataDigestError):
    """Raised when input to an operation is invalid"""  # noqa: D415


class PipelineError(DataDigestError):
    """Raised when a pipeline stage returns a failure.

    Attributes:
        handler_name: Name of the stage that failed.
        underlying_error: The error carried by the stage's ``Failure``.
    """

    def __init__(
        self, message: str, handler_name: str, underlying_error: Exception
    ) -> None:
        super().__init__(f"Error in handler '{handler_name}': {message}")
        self.handler_name = handler_name
        self.underlying_error = underlying_error


class InvariantViolationError(DataDigestError):
    """Raised when a pipeline stage breaks the executor contract"""  # noqa: D415

    def __init__(self, message: str, *, stage_name: str | None = None) -> None:
        super().__init__(message)
        self.stage_name = stage_name
