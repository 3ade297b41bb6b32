"""Shared error types and codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notifs.signature import VerifyOutcome


class ErrorCode:
    MISSING_SECRET = "missing_secret"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_INPUT = "invalid_input"


class NotifsError(Exception):
    """Base error for the notifs package."""

    code: str = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ConfigurationError(NotifsError):
    """Required configuration is missing or invalid."""

    code = ErrorCode.MISSING_SECRET


class TagParseError(NotifsError):
    """A signature header could not be parsed.

    Only raised inside the verifier; ``verify_signature`` turns it into
    ``False``.
    """

    code = ErrorCode.INVALID_SIGNATURE

    def __init__(self, reason: VerifyOutcome, message: str) -> None:
        super().__init__(message)
        self.reason = reason
