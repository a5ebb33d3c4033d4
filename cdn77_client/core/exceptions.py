"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every exception carries the process exit code it maps to; only the command
dispatcher turns an exception into output and an exit.
"""

EXIT_CODE_OK = 0
EXIT_CODE_INVALID_INPUT = 2
EXIT_CODE_API_EXPECTED_ERROR = 3
EXIT_CODE_API_UNEXPECTED_ERROR = 4


class ApplicationError(Exception):
    """Base exception for all application errors."""

    exit_code: int = EXIT_CODE_API_UNEXPECTED_ERROR

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidInputError(ApplicationError):
    """Raised when user input is rejected before any request is sent."""

    exit_code = EXIT_CODE_INVALID_INPUT

    def __init__(self, message: str = "Invalid input", code: str = "VAL_INVALID_INPUT") -> None:
        super().__init__(message, code=code)


class ConfigurationError(InvalidInputError):
    """Raised when required configuration, such as the API token, is missing."""

    def __init__(self, message: str = "Missing configuration") -> None:
        super().__init__(message, code="CFG_MISSING_TOKEN")


class ExpectedApiError(ApplicationError):
    """Raised when the API reports a documented negative outcome (not found, forbidden)."""

    exit_code = EXIT_CODE_API_EXPECTED_ERROR

    def __init__(self, message: str = "API request was rejected", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="API_EXPECTED_ERROR")


class UnexpectedApiError(ApplicationError):
    """Raised when the API response does not match what this client understands."""

    exit_code = EXIT_CODE_API_UNEXPECTED_ERROR

    def __init__(
        self,
        message: str = "Unexpected API error",
        status_code: int | None = None,
        code: str = "API_UNEXPECTED_ERROR",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, code=code)


class TransportError(UnexpectedApiError):
    """Raised when a request never completed (DNS, TLS, connection, timeout)."""

    def __init__(self, message: str = "Failed to send request") -> None:
        super().__init__(message, code="SYS_TRANSPORT_ERROR")


class DecodeError(UnexpectedApiError):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(self, message: str = "Failed to deserialize response", status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code, code="API_DECODE_ERROR")
