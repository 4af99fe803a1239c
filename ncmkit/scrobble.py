"""Options, keys and play logs for the daily song scrobble."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DAILY_LIMIT = 300
"""Most songs that count towards the account level on one day."""


def scrobble_record_key(uid: str, song_id: str) -> str:
    """Key recording that the user has already scrobbled a song."""
    return f"scrobble:record:{uid}:{song_id}"


def scrobble_today_num_key(uid: str) -> str:
    """Key holding how many songs the user has scrobbled today."""
    return f"scrobble:today:{uid}"


@dataclass
class ScrobbleOptions:
    """How many songs to scrobble in one run."""

    num: int = DAILY_LIMIT

    def validate(self) -> None:
        """Raise ValueError unless num is within 1..300."""
        if self.num <= 0 or self.num > DAILY_LIMIT:
            raise ValueError("num <= 0 or > 300")

    def remaining(self, finished: int) -> int:
        """Return how many songs to play today given how many are already done."""
        if finished >= DAILY_LIMIT:
            return 0
        left = DAILY_LIMIT - finished
        return self.num if left > self.num else left


@dataclass
class NeverHeardSong:
    """A song from a top list that the user has not yet scrobbled."""

    source: str
    source_id: str
    songs_id: str
    songs_time: int

    def play_log(self) -> dict[str, Any]:
        """Return the web log entry reporting a full play of this song."""
        return {
            "action": "play",
            "json": {
                "type": "song",
                "wifi": 0,
                "download": 0,
                "id": self.songs_id,
                "time": self.songs_time,
                "end": "playend",
                "source": self.source,
                "sourceId": self.source_id,
                "mainsite": "1",
                "content": f"id={self.source_id}",
            },
        }