"""HTML scraping for the ADFS login and assertion pages."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from .exceptions import NotFoundError, ParseError

HTML_PARSER = "html.parser"
SAML_RESPONSE_FIELD = "SAMLResponse"


@dataclass(slots=True, frozen=True)
class FormInput:
    """Name and default value of one `<input>` element."""

    name: str
    value: str

    @classmethod
    def from_tag(cls, tag: Tag) -> FormInput:
        return cls(name=_attr(tag, "name"), value=_attr(tag, "value"))


def parse_html(markup: str | bytes, encoding: str | None = None) -> BeautifulSoup:
    """Parse a response body into a document tree.

    Byte bodies are decoded using `encoding` when the server declared one,
    otherwise from the page's `<meta charset>` or by detection. `html.parser`
    recovers from nearly any malformed markup, so `ParseError` is rare.
    """

    try:
        if isinstance(markup, bytes):
            return BeautifulSoup(markup, HTML_PARSER, from_encoding=encoding)
        return BeautifulSoup(markup, HTML_PARSER)
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Response body is not parseable HTML: {exc}", details=str(exc)) from exc


def locate_form(document: BeautifulSoup) -> tuple[Tag, list[FormInput]]:
    """Return the first form of `document` and every input in the document.

    Inputs are collected from the whole page rather than from inside the form,
    since some ADFS themes render fields outside the `<form>` element.
    """

    form = document.find("form")
    if not isinstance(form, Tag):
        raise NotFoundError("Can't find login form")
    inputs = [FormInput.from_tag(tag) for tag in document.find_all("input")]
    return form, inputs


def form_action(form: Tag) -> str:
    return _attr(form, "action")


def extract_assertion(document: BeautifulSoup) -> str:
    """Return the value of the hidden input carrying the SAML response."""

    field = document.find("input", attrs={"name": SAML_RESPONSE_FIELD})
    if not isinstance(field, Tag):
        raise NotFoundError("Can't find SAML response")
    return _attr(field, "value")


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):  # multi-valued attributes such as class
        return " ".join(value)
    return str(value)
