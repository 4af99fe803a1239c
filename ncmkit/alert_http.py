"""Alert delivery by HTTP POST."""

from __future__ import annotations

import base64
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass


@dataclass
class HttpConfig:
    """Settings for the HTTP alert endpoint; timeout is in seconds, 0 means none."""

    host: str = ""
    username: str = ""
    password: str = ""
    timeout: float = 0.0

    def validate(self) -> None:
        """Raise ValueError if the configuration is unusable."""
        if not self.host:
            raise ValueError("host is empty")


class HttpAlert:
    """Posts alert content to a configured URL with basic authentication."""

    def __init__(self, config: HttpConfig) -> None:
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"http: Validate: {exc}") from exc
        self._config = config
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        self._opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=context)
        )
        self._close_connection = False

    def _authorization(self) -> str:
        credentials = f"{self._config.username}:{self._config.password}"
        return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    def send(self, content: str) -> None:
        """Post content; raise ConnectionError unless the server answers 200."""
        request = urllib.request.Request(
            self._config.host, data=content.encode("utf-8"), method="POST"
        )
        request.add_header("Content-Type", "application/json")
        request.add_header("Authorization", self._authorization())
        if self._close_connection:
            request.add_header("Connection", "close")

        kwargs = {}
        if self._config.timeout > 0:
            kwargs["timeout"] = self._config.timeout
        try:
            with self._opener.open(request, **kwargs) as response:
                status = response.status
        except urllib.error.HTTPError as exc:
            status = exc.code
            exc.close()
        if status != 200:
            raise ConnectionError(f"http: status code: {status}")

    def close(self) -> None:
        """Ask the server to close the connection on any further request."""
        self._close_connection = True