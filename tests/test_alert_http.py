import base64
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from ncmkit.alert_http import HttpAlert, HttpConfig


class _Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        headers = {k.lower(): v for k, v in self.headers.items()}
        self.server.received.append((self.path, headers, body))
        self.send_response(self.server.status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    httpd.received = []
    httpd.status = 200
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()
    thread.join()


def _url(httpd, path="/hook"):
    host, port = httpd.server_address
    return f"http://{host}:{port}{path}"


def test_validate_requires_host():
    with pytest.raises(ValueError, match="host is empty"):
        HttpConfig().validate()


def test_constructor_wraps_validation_error():
    with pytest.raises(ValueError, match="http: Validate: host is empty"):
        HttpAlert(HttpConfig())


def test_send_posts_json_with_basic_auth(server):
    password = "password"
    alert = HttpAlert(
        HttpConfig(host=_url(server), username="user", password=password, timeout=5)
    )
    alert.send('{"msg":"hello"}')

    assert len(server.received) == 1
    path, headers, body = server.received[0]
    assert path == "/hook"
    assert body == b'{"msg":"hello"}'
    assert headers["content-type"] == "application/json"
    scheme, encoded = headers["authorization"].split(" ", 1)
    assert scheme == "Basic"
    assert base64.b64decode(encoded) == b"user:password"


def test_send_non_200_raises(server):
    server.status = 500
    alert = HttpAlert(HttpConfig(host=_url(server), timeout=5))
    with pytest.raises(ConnectionError, match="http: status code: 500"):
        alert.send("{}")


def test_send_other_success_code_is_still_an_error(server):
    server.status = 201
    alert = HttpAlert(HttpConfig(host=_url(server), timeout=5))
    with pytest.raises(ConnectionError, match="201"):
        alert.send("{}")


def test_close_requests_connection_close(server):
    alert = HttpAlert(HttpConfig(host=_url(server), timeout=5))
    alert.close()
    alert.send("{}")
    _, headers, _ = server.received[0]
    assert headers["connection"].lower() == "close"