from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any


def utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def _count(value: object) -> int:
    # Older dumps may hold null/"" for missing counters.
    if value is None or value == "":
        return 0
    count = int(value)  # type: ignore[call-overload]
    if count < 0:
        raise ValueError(f"negative counter: {value!r}")
    return count


@dataclass(frozen=True)
class Record:
    """One captured note.

    Serialized with the field names the collection has always been stored
    under (``url``, ``content``, ``timestamp``) so existing dumps load.
    """

    source_address: str
    title: str
    body: str
    likes: int = 0
    favorites: int = 0
    comments: int = 0
    captured_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.source_address,
            "title": self.title,
            "content": self.body,
            "likes": self.likes,
            "favorites": self.favorites,
            "comments": self.comments,
            "timestamp": self.captured_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        """Build a record from its stored form.

        Raises ``KeyError``/``TypeError``/``ValueError`` for entries without
        an address or title, or with unusable counters.
        """

        url = data["url"]
        title = data["title"]
        if not isinstance(url, str) or not url:
            raise ValueError("record has no url")
        if not isinstance(title, str):
            raise TypeError("record title must be a string")
        return cls(
            source_address=url,
            title=title,
            body=str(data.get("content") or ""),
            likes=_count(data.get("likes")),
            favorites=_count(data.get("favorites")),
            comments=_count(data.get("comments")),
            captured_at=str(data.get("timestamp") or ""),
        )
