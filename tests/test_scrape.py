import pytest
from bs4 import ParserRejectedMarkup

from adfs_login.exceptions import NotFoundError, ParseError
from adfs_login.scrape import (
    FormInput,
    extract_assertion,
    form_action,
    locate_form,
    parse_html,
)

LOGIN_PAGE = """
<html><body>
  <div id="header"><input type="hidden" name="Context" value="ctx-123"></div>
  <form method="post" id="loginForm" action="/adfs/ls/?client-request-id=abc">
    <input id="userNameInput" name="UserName" type="email" value="">
    <input id="passwordInput" name="Password" type="password">
    <input name="AuthMethod" type="hidden" value="FormsAuthentication">
  </form>
  <form action="/other"></form>
</body></html>
"""


def test_locate_form_returns_first_form_and_all_inputs():
    form, inputs = locate_form(parse_html(LOGIN_PAGE))

    assert form_action(form) == "/adfs/ls/?client-request-id=abc"
    assert inputs == [
        FormInput("Context", "ctx-123"),
        FormInput("UserName", ""),
        FormInput("Password", ""),
        FormInput("AuthMethod", "FormsAuthentication"),
    ]


def test_locate_form_without_inputs_returns_empty_list():
    form, inputs = locate_form(parse_html("<form action='/x'></form>"))

    assert form_action(form) == "/x"
    assert inputs == []


def test_locate_form_missing_form_raises():
    with pytest.raises(NotFoundError):
        locate_form(parse_html("<html><body><input name='UserName'></body></html>"))


def test_form_action_defaults_to_empty():
    form, _ = locate_form(parse_html("<form><input name='a' value='1'></form>"))

    assert form_action(form) == ""


def test_input_without_name_reads_empty():
    _, inputs = locate_form(parse_html("<form><input type='submit' value='Sign in'></form>"))

    assert inputs == [FormInput("", "Sign in")]


def test_parse_html_accepts_bytes():
    _, inputs = locate_form(parse_html(b"<form><input name='a' value='b'></form>"))

    assert inputs == [FormInput("a", "b")]


def test_extract_assertion_returns_hidden_value():
    document = parse_html(
        """
        <form method="POST" action="https://signin.aws.amazon.com:443/saml">
          <input type="hidden" name="SAMLResponse" value="PHNhbWxwOlJlc3BvbnNlPg==" />
          <noscript><input type="submit" value="Submit" /></noscript>
        </form>
        """
    )

    assert extract_assertion(document) == "PHNhbWxwOlJlc3BvbnNlPg=="
    assert extract_assertion(document) == "PHNhbWxwOlJlc3BvbnNlPg=="


def test_extract_assertion_ignores_similar_names():
    document = parse_html("<input name='samlresponse' value='x'><input name='SAMLRequest' value='y'>")

    with pytest.raises(NotFoundError):
        extract_assertion(document)


def test_extract_assertion_on_login_page_raises():
    with pytest.raises(NotFoundError):
        extract_assertion(parse_html(LOGIN_PAGE))


def test_parse_html_wraps_rejected_markup(monkeypatch):
    def reject(markup, features, **kwargs):
        raise ParserRejectedMarkup("unsupported markup")

    monkeypatch.setattr("adfs_login.scrape.BeautifulSoup", reject)

    with pytest.raises(ParseError) as excinfo:
        parse_html(b"<form></form>")

    assert "unsupported markup" in str(excinfo.value)
