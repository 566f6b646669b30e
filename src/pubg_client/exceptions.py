"""pubg_client の例外型定義"""

from __future__ import annotations


class ErrorCodes:
    """PubgClientError のエラーコード定数。"""

    VALIDATION: str = "VALIDATION"
    HTTP_ERROR: str = "HTTP_ERROR"
    PARSE_ERROR: str = "PARSE_ERROR"
    API_ERROR: str = "API_ERROR"


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "CONFIG_VALIDATION_ERROR"


class PubgClientError(Exception):
    """Base error for the PUBG client."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ValidationError(PubgClientError):
    """Malformed caller input. Raised before any network activity."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(code=ErrorCodes.VALIDATION, message=f"{field}: {message}")


class RequestError(PubgClientError):
    """Terminal transport or status failure after retries were exhausted."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        attempts: int = 0,
        cause: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.attempts = attempts
        super().__init__(code=ErrorCodes.HTTP_ERROR, message=message, cause=cause)


class ParseError(PubgClientError):
    """A success response whose body could not be decoded."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(code=ErrorCodes.PARSE_ERROR, message=message, cause=cause)


class ApiError(PubgClientError):
    """The server answered with an ``errors`` array."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(code=ErrorCodes.API_ERROR, message=detail)


class ConfigError(PubgClientError):
    """Configuration could not be read or validated."""
