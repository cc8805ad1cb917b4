"""Data models for the link store."""

from dataclasses import dataclass
from typing import Optional, Mapping

URL_FIELD = "url"
KEY_FIELD = "key"
STATS_FIELD = "stats"


@dataclass
class Record:
    """A slug's target URL, owner key and access counter."""

    slug: str
    target_url: str
    owner_key: str
    access_count: int = 0

    def to_mapping(self) -> dict:
        """Convert to the field mapping written to the store."""
        return {
            URL_FIELD: self.target_url,
            KEY_FIELD: self.owner_key,
            STATS_FIELD: str(self.access_count),
        }

    @classmethod
    def from_mapping(cls, slug: str, data: Optional[Mapping[str, str]]) -> Optional["Record"]:
        """Create from a stored field mapping.

        Returns None when any field is missing or the counter is not an
        integer, so partial records read as absent.
        """
        if not data:
            return None
        try:
            return cls(
                slug=slug,
                target_url=data[URL_FIELD],
                owner_key=data[KEY_FIELD],
                access_count=int(data[STATS_FIELD]),
            )
        except (KeyError, ValueError):
            return None

    def __repr__(self) -> str:
        # owner_key is a credential
        return (
            f"Record(slug={self.slug!r}, target_url={self.target_url!r}, "
            f"access_count={self.access_count})"
        )
