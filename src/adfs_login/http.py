"""HTTP utilities for talking to the identity provider."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass

from requests import Response, Session

from .exceptions import TransportError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class HttpResponse:
    """Fully read response with the fields the login flow needs."""

    status_code: int
    url: str
    content: bytes
    encoding: str | None
    headers: Mapping[str, str]


def declared_charset(response: Response) -> str | None:
    """Return the charset named in the Content-Type header, if any.

    requests falls back to ISO-8859-1 for `text/*` bodies without a charset;
    that guess is dropped so the HTML parser can use `<meta charset>` instead.
    """

    content_type = response.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        return None
    return response.encoding


def ensure_success(response: Response) -> None:
    """Raise `TransportError` if the response signals a failure."""

    if 200 <= response.status_code < 300:
        return
    message = f"Identity provider error {response.status_code}: {response.text[:200]}"
    raise TransportError(message, status_code=response.status_code, details=response.text)


def request(
    session: Session,
    method: str,
    url: str,
    *,
    headers: MutableMapping[str, str] | None = None,
    form_payload: Mapping[str, str] | None = None,
    timeout: float | tuple[float, float] | None = None,
    verify: bool | str = True,
) -> HttpResponse:
    """Make a request, read the body to completion and release the connection."""

    if form_payload is not None:
        headers = dict(headers or {})
        headers["Content-Type"] = FORM_CONTENT_TYPE

    with session.request(
        method=method,
        url=url,
        headers=headers,
        data=form_payload,
        timeout=timeout,
        verify=verify,
    ) as response:
        ensure_success(response)
        return HttpResponse(
            status_code=response.status_code,
            url=response.url,
            content=response.content,
            encoding=declared_charset(response),
            headers=response.headers,
        )
