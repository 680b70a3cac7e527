"""Data models for the link store."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        # fromisoformat only accepts a "Z" suffix from Python 3.11
        if isinstance(value, str) and value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Link:
    """A slug mapped to a destination URL."""

    slug: str
    url: str
    created_at: datetime
    visits: int = 0
    last_visit: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "slug": self.slug,
            "url": self.url,
            "visits": self.visits,
            "created": self.created_at.isoformat() if self.created_at else None,
            "lastVisit": self.last_visit.isoformat() if self.last_visit else None,
        }

    def to_record(self) -> dict:
        """Convert to a JSON file record (keyed by slug outside the record)."""
        record = {
            "url": self.url,
            "created": self.created_at.isoformat(),
            "visits": self.visits,
        }
        if self.last_visit:
            record["lastVisit"] = self.last_visit.isoformat()
        return record

    @classmethod
    def from_dict(cls, slug: str, data: dict) -> "Link":
        """Create from a JSON file record ``{url, created, visits, lastVisit?}``."""
        return cls(
            slug=slug,
            url=data["url"],
            created_at=parse_timestamp(data["created"]),
            visits=int(data.get("visits", 0)),
            last_visit=parse_timestamp(data.get("lastVisit")),
        )

    @classmethod
    def from_document(cls, doc: dict) -> "Link":
        """Create from a MongoDB document."""
        return cls(
            slug=doc["slug"],
            url=doc["url"],
            created_at=parse_timestamp(doc["createdAt"]),
            visits=int(doc.get("visits", 0)),
            last_visit=parse_timestamp(doc.get("lastVisit")),
        )

    @classmethod
    def from_row(cls, row) -> "Link":
        """Create from a PostgreSQL row (mapping with snake_case columns)."""
        return cls(
            slug=row["slug"],
            url=row["url"],
            created_at=parse_timestamp(row["created_at"]),
            visits=int(row["visits"] or 0),
            last_visit=parse_timestamp(row["last_visit"]),
        )
