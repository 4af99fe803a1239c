"""Options and score generation for the music partner daily evaluation."""

from __future__ import annotations

import json
import random
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")

RANDOM = "random"
"""Value of ext_num that asks for a random count of extra songs (2 to 7)."""

MAX_EXTRA = 15


def _parse_int64(text: str) -> int | None:
    if _INTEGER.fullmatch(text) is None:
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _check_levels(levels: list[int], label: str) -> None:
    if not levels or len(levels) > 5:
        raise ValueError(f"{label} level must be range 1-5")
    if any(level < 1 or level > 5 for level in levels):
        raise ValueError(f"{label} level must be range 1-5")
    if len(set(levels)) != len(levels):
        raise ValueError(f"{label} level must be unique")


@dataclass
class PartnerOptions:
    """Score ranges and extra song count for partner evaluations."""

    star: list[int] = field(default_factory=lambda: [3, 4])
    ext_star: list[int] = field(default_factory=lambda: [2, 3, 4])
    ext_num: str = RANDOM

    def validate(self) -> None:
        """Raise ValueError describing the first invalid option."""
        _check_levels(self.star, "star")
        _check_levels(self.ext_star, "extra star")
        if not self.ext_num:
            raise ValueError("num is empty")
        if self.ext_num != RANDOM:
            num = _parse_int64(self.ext_num)
            if num is None:
                raise ValueError("num must be int or 'random'")
            if num < 0 or num > MAX_EXTRA:
                raise ValueError("num must be >= 0 and <= 15")

    def extra_count(self, rng: random.Random | None = None) -> int:
        """Return how many extra songs to evaluate: 2 to 7 when random."""
        if self.ext_num == RANDOM:
            rng = rng or random.Random()
            return 2 + rng.randrange(6)
        num = _parse_int64(self.ext_num)
        if num is None:
            raise ValueError("num must be int or 'random'")
        return num

    def extra_score(
        self, eva_types: Iterable[object], rng: random.Random | None = None
    ) -> str:
        """Return the JSON object mapping each extra evaluation type to a score.

        The score index is drawn from the size of the base star range, limited
        to the entries present in the extra range.
        """
        rng = rng or random.Random()
        span = min(len(self.star), len(self.ext_star))
        if span <= 0:
            raise ValueError("extra star level must be range 1-5")
        scores = {str(kind): self.ext_star[rng.randrange(span)] for kind in eva_types}
        return json.dumps(scores, sort_keys=True, separators=(",", ":"))