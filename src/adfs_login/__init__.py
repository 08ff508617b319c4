"""High-level ADFS sign-on entrypoints."""
from .client import AdfsClient
from .config import ClientConfig, Credentials
from .exceptions import AdfsLoginError, NotFoundError, ParseError, TransportError

__all__ = [
    "AdfsClient",
    "ClientConfig",
    "Credentials",
    "AdfsLoginError",
    "NotFoundError",
    "ParseError",
    "TransportError",
]
