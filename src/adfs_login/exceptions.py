"""Custom exception hierarchy for the ADFS login client."""
from __future__ import annotations

from typing import Any


class AdfsLoginError(RuntimeError):
    """Base error for ADFS sign-on failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class TransportError(AdfsLoginError):
    """Raised when an HTTP request to the identity provider cannot be fulfilled."""


class ParseError(AdfsLoginError):
    """Raised when a response body cannot be parsed as HTML."""


class NotFoundError(AdfsLoginError):
    """Raised when an expected form, field or assertion is missing from a page."""


class CredentialsError(AdfsLoginError):
    """Raised when a complete username/password/hostname triple cannot be resolved."""
