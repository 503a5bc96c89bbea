"""Memory storage that sends entries as direct messages to oneself, with a local copy."""

from __future__ import annotations

import copy
import uuid
from collections import Counter
from enum import Enum
from typing import Any, Awaitable, Callable

from nparrot.encryption import EncryptionError, MemoryEncryption
from nparrot.memory_types import (
    MemoryEntry,
    MemoryStats,
    RetrieveMemoryRequest,
    UpdateMemoryRequest,
    _utc_now,
    parse_rfc3339,
)

DEFAULT_LIMIT = 10
DELETION_PREFIX = "MEMORY_DELETED:"

SendToSelf = Callable[[str], Awaitable[object]]


class MemoryErrorKind(Enum):
    """What went wrong in a memory operation."""

    NOSTR = "Nostr error"
    ENCRYPTION = "Encryption error"
    TIMEOUT = "Operation timed out"
    INVALID_DATA = "Invalid data"


class NostrMemoryError(Exception):
    """Raised when a memory operation fails."""

    def __init__(self, kind: MemoryErrorKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind is MemoryErrorKind.TIMEOUT:
            return self.kind.value
        return f"{self.kind.value}: {self.detail}"


class MemoryClient:
    """Stores memories by messaging them to ourselves and keeps a local copy.

    ``send_to_self`` delivers a private message to our own public key.
    Retrieval is answered from the local copy.
    """

    def __init__(self, send_to_self: SendToSelf, keys: Any = None) -> None:
        self._send_to_self = send_to_self
        self._encryption = MemoryEncryption(keys)
        self._local: dict[uuid.UUID, MemoryEntry] = {}

    async def _send(self, content: str) -> None:
        try:
            await self._send_to_self(content)
        except Exception as exc:  # any delivery failure is reported as a Nostr error
            raise NostrMemoryError(MemoryErrorKind.NOSTR, str(exc)) from exc

    async def store_memory(self, memory: MemoryEntry) -> bool:
        """Keep the memory locally and send it as a message to ourselves."""
        try:
            content = self._encryption.create_memory_dm_content(memory)
        except EncryptionError as exc:
            raise NostrMemoryError(MemoryErrorKind.ENCRYPTION, str(exc)) from exc
        self._local[memory.id] = copy.deepcopy(memory)
        await self._send(content)
        return True

    async def retrieve_memories(self, filter: RetrieveMemoryRequest) -> list[MemoryEntry]:
        """Return matching memories, newest first, at most ``filter.limit`` (default 10)."""
        # Time bounds are validated the way a relay query would take them;
        # stored entries are not filtered by them.
        for bound in (filter.since, filter.until):
            if bound is not None:
                try:
                    parse_rfc3339(bound)
                except ValueError:
                    pass

        memories = [
            copy.deepcopy(memory)
            for memory in self._local.values()
            if _matches_filter(memory, filter)
        ]
        memories.sort(key=lambda memory: memory.timestamp, reverse=True)
        limit = DEFAULT_LIMIT if filter.limit is None else filter.limit
        return memories[:limit]

    async def delete_memory(self, memory_id: str) -> bool:
        """Drop the memory locally and send a deletion marker."""
        try:
            parsed = uuid.UUID(memory_id)
        except (ValueError, TypeError, AttributeError) as exc:
            raise NostrMemoryError(
                MemoryErrorKind.INVALID_DATA, f"Invalid UUID: {exc}"
            ) from exc
        self._local.pop(parsed, None)
        await self._send(f"{DELETION_PREFIX}{parsed}")
        return True

    async def update_memory(
        self, memory_id: str, update: UpdateMemoryRequest
    ) -> MemoryEntry:
        """Apply the update to an existing memory and store the new version."""
        memories = await self.retrieve_memories(RetrieveMemoryRequest(limit=1000))
        existing = next((m for m in memories if str(m.id) == memory_id), None)
        if existing is None:
            raise NostrMemoryError(MemoryErrorKind.INVALID_DATA, "Memory not found")

        if update.title is not None:
            existing.content.title = update.title
        if update.description is not None:
            existing.content.description = update.description
        if update.tags is not None:
            existing.content.metadata.tags = list(update.tags)
        if update.priority is not None:
            existing.content.metadata.priority = update.priority
        if update.expiry is not None:
            try:
                existing.content.metadata.expiry = parse_rfc3339(update.expiry)
            except ValueError:
                pass

        existing.timestamp = _utc_now()
        await self.store_memory(existing)
        return existing

    async def get_memory_stats(self) -> MemoryStats:
        """Count memories by type and category and find the oldest and newest."""
        memories = await self.retrieve_memories(RetrieveMemoryRequest(limit=10000))
        by_type = Counter(memory.memory_type for memory in memories)
        by_category = Counter(
            memory.category for memory in memories if memory.category is not None
        )
        timestamps = [memory.timestamp for memory in memories]
        return MemoryStats(
            total_memories=len(memories),
            by_type=dict(by_type),
            by_category=dict(by_category),
            oldest=min(timestamps, default=None),
            newest=max(timestamps, default=None),
        )


def _matches_filter(memory: MemoryEntry, filter: RetrieveMemoryRequest) -> bool:
    if memory.is_expired():
        return False
    if filter.query is not None and not memory.matches_query(filter.query):
        return False
    if filter.memory_type is not None and memory.memory_type != filter.memory_type:
        return False
    if filter.category is not None and memory.category != filter.category:
        return False
    if filter.tags is not None and not all(
        tag in memory.content.metadata.tags for tag in filter.tags
    ):
        return False
    return True