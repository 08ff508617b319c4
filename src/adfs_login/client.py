"""IdP-initiated ADFS sign-on client."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from urllib.parse import urlparse

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .config import ClientConfig, Credentials
from .exceptions import CredentialsError, NotFoundError, TransportError
from .http import HttpResponse
from .http import request as http_request
from .payload import DEFAULT_RULES, FieldRule, build_payload, missing_credential_fields
from .scrape import FormInput, extract_assertion, form_action, locate_form, parse_html

logger = logging.getLogger(__name__)

CredentialsResolver = Callable[[], Credentials]


class AdfsClient:
    """Log in to an ADFS identity provider and return the SAML assertion.

    One client owns one `requests.Session`, so the cookies the identity
    provider sets on the login page are replayed on the form submission.
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        credentials_resolver: CredentialsResolver | None = None,
        rules: Sequence[FieldRule] = DEFAULT_RULES,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._resolver = credentials_resolver
        self._rules = tuple(rules)
        self._suppress_insecure_warning_if_needed()
        self._session = session or requests.Session()

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> AdfsClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    # Public API --------------------------------------------------------------
    def login(self, credentials: Credentials | None = None) -> str:
        """Run the GET/POST handshake and return the base64 SAML assertion."""

        credentials = credentials or self._resolve_credentials()
        login_url = self.config.login_url(credentials.hostname)

        login_page = self._perform_request("GET", login_url)
        form, inputs = locate_form(parse_html(login_page.content, login_page.encoding))
        logger.debug("Login form found with %d input(s)", len(inputs))

        self._check_credential_fields(inputs)
        payload = build_payload(inputs, credentials, self._rules)
        submit_url = self._resolve_submit_url(
            credentials.hostname, form_action(form), fallback=login_page.url
        )
        logger.debug("Submitting %d field(s) to %s", len(payload), submit_url)

        result_page = self._perform_request("POST", submit_url, form_payload=payload)
        assertion = extract_assertion(parse_html(result_page.content, result_page.encoding))
        logger.info("SAML assertion received from %s", credentials.hostname)
        return assertion

    def close(self) -> None:
        self._session.close()

    # Internal helpers -------------------------------------------------------
    def _resolve_credentials(self) -> Credentials:
        if self._resolver is None:
            raise CredentialsError("No credentials supplied and no credentials resolver configured.")
        return self._resolver()

    def _check_credential_fields(self, inputs: Sequence[FormInput]) -> None:
        if not self.config.require_credential_fields:
            return
        missing = missing_credential_fields(inputs, self._rules)
        if missing:
            raise NotFoundError(
                f"Login form has no {' or '.join(missing)} field", details=missing
            )

    @staticmethod
    def _resolve_submit_url(hostname: str, action: str, *, fallback: str) -> str:
        if not action:
            return fallback
        parsed = urlparse(action)
        if parsed.netloc:
            if parsed.scheme:
                return action
            return f"{urlparse(hostname).scheme}:{action}"
        return f"{hostname}{action if action.startswith('/') else '/' + action}"

    def _perform_request(
        self,
        method: str,
        url: str,
        *,
        form_payload: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        logger.info("ADFS request %s %s", method.upper(), url)
        try:
            return http_request(
                self._session,
                method,
                url,
                headers=self.config.resolved_headers(),
                form_payload=form_payload,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"Failed to communicate with identity provider: {reason}", details=reason
            ) from exc

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
