import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

IDP_LOGIN_PAGE = """
<html><body>
  <form method="post" action="/adfs/ls/">
    <input name="UserName" value="">
    <input name="Password" value="">
    <input name="AuthMethod" type="hidden" value="FormsAuthentication">
  </form>
</body></html>
"""

IDP_ASSERTION_PAGE = """
<form method="POST" action="https://signin.aws.amazon.com:443/saml">
  <input type="hidden" name="SAMLResponse" value="QVNTRVJUSU9O" />
</form>
"""


class _IdpHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        self.server.received.append(("GET", self.path, dict(self.headers), b""))
        self._reply(IDP_LOGIN_PAGE, set_cookie="MSISSamlRequest=req-cookie; Path=/adfs; HttpOnly")

    def do_POST(self):
        body = self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self.server.received.append(("POST", self.path, dict(self.headers), body))
        self._reply(IDP_ASSERTION_PAGE)

    def _reply(self, page, set_cookie=None):
        payload = page.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        if set_cookie:
            self.send_header("Set-Cookie", set_cookie)
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):  # pragma: no cover - silence test output
        pass


@pytest.fixture
def idp_server(monkeypatch):
    for name in ("HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    server = ThreadingHTTPServer(("127.0.0.1", 0), _IdpHandler)
    server.received = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
