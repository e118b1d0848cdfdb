"""Exceptions raised while building and applying request options."""

from __future__ import annotations


class CurlOptionsError(Exception):
    """Base exception for all curlopts failures."""

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.option = option
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.option is None:
            return str(self.args[0])
        return f"{self.option}: {self.args[0]}"


class InvalidArgumentError(CurlOptionsError, ValueError):
    """Raised when a setter receives a value outside its enumeration."""


class MissingCertificateError(CurlOptionsError):
    """Raised when a certificate file or directory is missing or unreadable."""

    def __init__(
        self,
        message: str,
        *,
        path: str,
        option: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, option=option, cause=cause)
        self.path = path


class InvalidOptionsError(CurlOptionsError, ValueError):
    """Raised when an options mapping cannot be applied to a transfer."""


class TransferError(CurlOptionsError):
    """Raised when the underlying HTTP client reports a failure."""


class TransferTimeoutError(TransferError):
    """Raised when a transfer exceeds the configured timeout."""


class TransferNetworkError(TransferError):
    """Raised for transport-level failures like DNS and TCP errors."""
