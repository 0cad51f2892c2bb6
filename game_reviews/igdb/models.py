"""
IGDB response models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass
class IGDBGame:
    """Game as returned by the ``games`` endpoint."""
    id: int
    name: str
    url: str
    slug: Optional[str] = None
    first_release_date: Optional[datetime] = None
    genres: List[int] = field(default_factory=list)
    cover_id: Optional[int] = None
    summary: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "IGDBGame":
        released = data.get("first_release_date")
        return cls(
            id=data["id"],
            name=data["name"],
            url=data["url"],
            slug=data.get("slug"),
            first_release_date=(
                datetime.fromtimestamp(released, tz=timezone.utc) if released is not None else None
            ),
            genres=list(data.get("genres") or []),
            cover_id=data.get("cover"),
            summary=data.get("summary"),
        )


@dataclass
class Genre:
    id: int
    name: str

    @classmethod
    def from_api(cls, data: dict) -> "Genre":
        return cls(id=data["id"], name=data["name"])


@dataclass
class Cover:
    """Cover art; IGDB hands out protocol-relative image URLs."""
    id: int
    url: str
    image_id: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Cover":
        return cls(id=data["id"], url=data["url"], image_id=data.get("image_id"))

    @property
    def https_url(self) -> str:
        if self.url.startswith("//"):
            return f"https:{self.url}"
        return self.url
