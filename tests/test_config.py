import pytest

from adfs_login.config import ClientConfig, Credentials, normalize_hostname


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("idp.example.com", "https://idp.example.com"),
        ("idp.example.com/", "https://idp.example.com"),
        ("idp.example.com:8443", "https://idp.example.com:8443"),
        ("https://idp.example.com", "https://idp.example.com"),
        ("http://localhost:8080/", "http://localhost:8080"),
        ("  sts.corp.local \n", "https://sts.corp.local"),
    ],
)
def test_normalize_hostname(raw, expected):
    assert normalize_hostname(raw) == expected


def test_credentials_normalize_hostname_and_hide_password():
    credentials = Credentials("alice", "s3cr3t", "idp.example.com")

    assert credentials.hostname == "https://idp.example.com"
    assert "s3cr3t" not in repr(credentials)


def test_credentials_are_immutable():
    credentials = Credentials("alice", "s3cr3t", "idp.example.com")

    with pytest.raises(AttributeError):
        credentials.password = "other"


def test_default_login_url():
    assert (
        ClientConfig().login_url("https://idp.example.com")
        == "https://idp.example.com/adfs/ls/IdpInitiatedSignOn.aspx?loginToRp=urn:amazon:webservices"
    )


def test_resolved_headers_merge_defaults():
    headers = ClientConfig(default_headers={"User-Agent": "adfs-login"}).resolved_headers()

    assert headers["User-Agent"] == "adfs-login"
    assert "text/html" in headers["Accept"]
