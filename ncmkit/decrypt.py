"""Data model and helpers for decrypting captured API traffic."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

EAPI_SEPARATOR = "-36cd479b6b5-"

_HEX = "0123456789abcdefABCDEF"


def _path_unescape(text: str) -> str | None:
    """Decode %XX escapes strictly; None if an escape is malformed."""
    out = bytearray()
    i = 0
    raw = text.encode("utf-8")
    while i < len(raw):
        ch = raw[i]
        if ch == ord("%"):
            pair = raw[i + 1:i + 3].decode("ascii", "replace")
            if len(pair) != 2 or any(c not in _HEX for c in pair):
                return None
            out.append(int(pair, 16))
            i += 3
        else:
            out.append(ch)
            i += 1
    return out.decode("utf-8", "replace")


def is_match(pattern: str, text: str) -> bool:
    """Report whether text matches a glob-like route pattern where * is any run."""
    unescaped = _path_unescape(pattern)
    if unescaped is None:
        unescaped = ""
    regex = "^" + unescaped.replace(".", r"\.").replace("*", ".*") + r"\Z"
    try:
        return re.search(regex, text) is not None
    except re.error:
        return False


def split_eapi_plaintext(text: str) -> tuple[str, str, str]:
    """Split decrypted eapi text into (url, payload, digest).

    Text that is not made of exactly three separated parts is returned as the
    payload with empty url and digest.
    """
    parts = text.split(EAPI_SEPARATOR)
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    return "", text, ""


def api_kind(path: str, default: str) -> str:
    """Infer the API kind from a request path, e.g. "/api/eapi/x" gives "eapi"."""
    segments = path.split("/")
    if len(segments) < 2:
        return default
    kind = segments[1]
    for segment in segments:
        if segment in ("eapi", "weapi"):
            kind = segment
    return kind


def _raw_json(data: bytes | str) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError(f"plaintext is not valid JSON: {exc}") from exc


@dataclass
class Request:
    """Request side of a captured call."""

    ciphertext: str = ""
    raw_plaintext: str = ""
    url: str = ""
    digest: str = ""
    plaintext: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.ciphertext:
            result["ciphertext"] = self.ciphertext
        if self.raw_plaintext:
            result["rawPlaintext"] = self.raw_plaintext
        if self.url:
            result["url"] = self.url
        if self.digest:
            result["digest"] = self.digest
        if self.plaintext:
            result["plaintext"] = _raw_json(self.plaintext)
        return result


@dataclass
class Response:
    """Response side of a captured call."""

    ciphertext: str = ""
    plaintext: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.ciphertext:
            result["ciphertext"] = self.ciphertext
        if self.plaintext:
            result["plaintext"] = _raw_json(self.plaintext)
        return result


@dataclass
class Payload:
    """A captured call with its request and response."""

    api: str = ""
    method: str = ""
    kind: str = ""
    status: str = ""
    request: Request = field(default_factory=Request)
    response: Response = field(default_factory=Response)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; request and response are always present."""
        result: dict[str, Any] = {}
        if self.api:
            result["api"] = self.api
        if self.method:
            result["method"] = self.method
        if self.kind:
            result["kind"] = self.kind
        if self.status:
            result["status"] = self.status
        result["request"] = self.request.to_dict()
        result["response"] = self.response.to_dict()
        return result