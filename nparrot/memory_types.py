"""Data model for memories kept as direct messages to oneself."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Raises ValueError when the text is not a valid RFC 3339 timestamp.
    """
    if not isinstance(value, str):
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0

    zone = match.group(8)
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid UTC offset in timestamp: {value!r}")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(offset if zone[0] == "+" else -offset)

    try:
        parsed = datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}") from exc
    return parsed.astimezone(timezone.utc)


def _format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def _optional_str(value: Any, name: str) -> str | None:
    return None if value is None else _require_str(value, name)


@dataclass
class MemoryMetadata:
    """Tags, priority and expiry of a memory."""

    tags: list[str] = field(default_factory=list)
    priority: str | None = None
    expiry: datetime | None = None


@dataclass
class MemoryContent:
    """Title, description and metadata of a memory."""

    title: str
    description: str
    metadata: MemoryMetadata = field(default_factory=MemoryMetadata)


@dataclass
class MemoryEntry:
    """A single stored memory."""

    id: uuid.UUID
    timestamp: datetime
    memory_type: str
    category: str | None
    content: MemoryContent
    encrypted: bool = True
    version: str = "1.0"

    @classmethod
    def create(
        cls,
        memory_type: str,
        category: str | None,
        title: str,
        description: str,
        tags: list[str] | None = None,
        priority: str | None = None,
        expiry: datetime | None = None,
    ) -> "MemoryEntry":
        """Build a new entry with a fresh id and the current time."""
        return cls(
            id=uuid.uuid4(),
            timestamp=_utc_now(),
            memory_type=memory_type,
            category=category,
            content=MemoryContent(
                title=title,
                description=description,
                metadata=MemoryMetadata(
                    tags=list(tags or []), priority=priority, expiry=expiry
                ),
            ),
        )

    def matches_query(self, query: str) -> bool:
        """True if the query occurs, ignoring case, in the title, description or a tag."""
        needle = query.lower()
        return (
            needle in self.content.title.lower()
            or needle in self.content.description.lower()
            or any(needle in tag.lower() for tag in self.content.metadata.tags)
        )

    def is_expired(self) -> bool:
        """True if the entry has an expiry that lies in the past."""
        expiry = self.content.metadata.expiry
        return expiry is not None and _utc_now() > expiry

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary."""
        metadata = self.content.metadata
        return {
            "id": str(self.id),
            "timestamp": _format_timestamp(self.timestamp),
            "memory_type": self.memory_type,
            "category": self.category,
            "content": {
                "title": self.content.title,
                "description": self.content.description,
                "metadata": {
                    "tags": list(metadata.tags),
                    "priority": metadata.priority,
                    "expiry": (
                        _format_timestamp(metadata.expiry)
                        if metadata.expiry is not None
                        else None
                    ),
                },
            },
            "encrypted": self.encrypted,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemoryEntry":
        """Build an entry from a dictionary made by to_dict; raises ValueError if malformed."""
        try:
            content = data["content"]
            metadata = content["metadata"]
            tags = metadata["tags"]
            if not isinstance(tags, list):
                raise ValueError("field 'tags' must be a list")
            expiry = metadata.get("expiry")
            encrypted = data["encrypted"]
            if not isinstance(encrypted, bool):
                raise ValueError("field 'encrypted' must be a boolean")
            return cls(
                id=uuid.UUID(_require_str(data["id"], "id")),
                timestamp=parse_rfc3339(data["timestamp"]),
                memory_type=_require_str(data["memory_type"], "memory_type"),
                category=_optional_str(data.get("category"), "category"),
                content=MemoryContent(
                    title=_require_str(content["title"], "title"),
                    description=_require_str(content["description"], "description"),
                    metadata=MemoryMetadata(
                        tags=[_require_str(tag, "tags") for tag in tags],
                        priority=_optional_str(metadata.get("priority"), "priority"),
                        expiry=parse_rfc3339(expiry) if expiry is not None else None,
                    ),
                ),
                encrypted=encrypted,
                version=_require_str(data["version"], "version"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid memory entry: {exc}") from exc


@dataclass
class StoreMemoryRequest:
    """Request to store a new memory."""

    memory_type: str
    title: str
    description: str
    category: str | None = None
    tags: list[str] | None = None
    priority: str | None = None
    expiry: str | None = None


@dataclass
class RetrieveMemoryRequest:
    """Filter for retrieving memories."""

    query: str | None = None
    memory_type: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    limit: int | None = None
    since: str | None = None
    until: str | None = None


@dataclass
class UpdateMemoryRequest:
    """Changes to apply to an existing memory."""

    id: str
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    priority: str | None = None
    expiry: str | None = None


@dataclass
class DeleteMemoryRequest:
    """Request to delete a memory by id."""

    id: str


@dataclass
class MemoryResponse:
    """A page of retrieved memories."""

    memories: list[MemoryEntry]
    total: int
    page: int
    per_page: int


@dataclass
class MemoryStats:
    """Summary of stored memories."""

    total_memories: int
    by_type: dict[str, int] = field(default_factory=dict)
    by_category: dict[str, int] = field(default_factory=dict)
    oldest: datetime | None = None
    newest: datetime | None = None