"""Exceptions raised by the Kenku FM remote client."""

from __future__ import annotations


class KenkuError(Exception):
    """Base class for all errors raised by aiokenku."""


class KenkuConnectionError(KenkuError):
    """The remote could not be reached (refused, reset or timed out).

    Usually this means Kenku FM is not running or its Remote is not online.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        """Store the request URL alongside the message."""
        super().__init__(message)
        self.url = url


class KenkuRequestError(KenkuError):
    """The remote answered, but with a non-success status code."""

    def __init__(
        self,
        status: int,
        reason: str | None,
        *,
        url: str | None = None,
        body: str | None = None,
    ) -> None:
        """Store the failed response details."""
        super().__init__(f"Kenku Remote returned {status} {reason or ''}".rstrip())
        self.status = status
        self.reason = reason
        self.url = url
        self.body = body


class KenkuDecodeError(KenkuError):
    """The response body is not JSON or does not match the expected shape."""

    def __init__(self, message: str, *, url: str | None = None, body: str | None = None) -> None:
        """Store the offending body for inspection."""
        super().__init__(message)
        self.url = url
        self.body = body
