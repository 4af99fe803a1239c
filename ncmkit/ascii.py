"""ASCII-only string helpers used by the cookie jar."""

from __future__ import annotations

_MAX_ASCII = 0x7F


def _lower(ch: str) -> str:
    if "A" <= ch <= "Z":
        return chr(ord(ch) + (ord("a") - ord("A")))
    return ch


def equal_fold(s: str, t: str) -> bool:
    """Report whether s and t are equal, ignoring ASCII case only."""
    if len(s) != len(t):
        return False
    return all(_lower(a) == _lower(b) for a, b in zip(s, t))


def is_print(s: str) -> bool:
    """Report whether s consists only of printable ASCII characters."""
    return all(" " <= ch <= "~" for ch in s)


def is_ascii(s: str) -> bool:
    """Report whether every character of s is ASCII."""
    return all(ord(ch) <= _MAX_ASCII for ch in s)


def to_lower(s: str) -> str | None:
    """Return s lowercased if it is printable ASCII, otherwise None."""
    if not is_print(s):
        return None
    return s.lower()