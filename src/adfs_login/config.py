"""Configuration helpers for the ADFS login client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlencode, urlparse

DEFAULT_LOGIN_PATH = "/adfs/ls/IdpInitiatedSignOn.aspx"
DEFAULT_RELYING_PARTY = "urn:amazon:webservices"
DEFAULT_SCHEME = "https://"


def normalize_hostname(hostname: str) -> str:
    """Return `hostname` as a URL origin with a scheme and no trailing slash."""

    candidate = hostname.strip()
    if not candidate:
        return candidate
    if not urlparse(candidate).netloc:
        candidate = f"{DEFAULT_SCHEME}{candidate}"
    return candidate.rstrip("/")


@dataclass(slots=True, frozen=True)
class Credentials:
    """Username, password and identity provider origin for one login."""

    username: str
    password: str
    hostname: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "hostname", normalize_hostname(self.hostname))

    def __repr__(self) -> str:
        return (
            f"Credentials(username={self.username!r}, password='***', "
            f"hostname={self.hostname!r})"
        )


@dataclass(slots=True)
class ClientConfig:
    """Typed configuration for `AdfsClient`."""

    verify_ssl: bool | str = True
    timeout: float | None = 30.0
    login_path: str = DEFAULT_LOGIN_PATH
    relying_party: str = DEFAULT_RELYING_PARTY
    default_headers: Mapping[str, str] | None = None
    require_credential_fields: bool = True

    def login_url(self, hostname: str) -> str:
        path = self.login_path if self.login_path.startswith("/") else f"/{self.login_path}"
        query = urlencode({"loginToRp": self.relying_party}, safe=":")
        return f"{hostname}{path}?{query}"

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        if self.default_headers:
            headers.update(self.default_headers)
        return headers
