"""
microfoxx error types.

Facades and the cursor engine hand these back inside an OperationResult
instead of raising them. Only the session manager raises (AuthError).
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    GENERAL = "general"
    TRANSPORT = "transport"
    DECODE = "decode"
    AUTH = "auth"


class MicroFoxxError(Exception):
    kind: ErrorKind = ErrorKind.GENERAL

    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class BadRequestError(MicroFoxxError):
    """HTTP 400."""

    kind = ErrorKind.BAD_REQUEST

    def __init__(self, message: str = "The body of the request didn't meet the expected requirements"):
        super().__init__("bad_request", message)


class NotFoundError(MicroFoxxError):
    """HTTP 404, including unknown or exhausted cursor handles."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "No results were found for the provided query"):
        super().__init__("not_found", message)


class GeneralError(MicroFoxxError):
    """Any non-2xx status other than 400 and 404."""

    kind = ErrorKind.GENERAL

    def __init__(self, message: str = "Something went wrong in the process of the request"):
        super().__init__("general_error", message)


class TransportError(MicroFoxxError):
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str):
        super().__init__("transport_error", message)


class DecodeError(MicroFoxxError):
    kind = ErrorKind.DECODE

    def __init__(self, message: str):
        super().__init__("decode_error", message)


class AuthError(MicroFoxxError):
    kind = ErrorKind.AUTH

    def __init__(self, message: str, code: str = "auth_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)
