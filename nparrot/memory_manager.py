"""Request-level operations on stored memories."""

from __future__ import annotations

from nparrot.memory_client import (
    DEFAULT_LIMIT,
    MemoryClient,
    MemoryErrorKind,
    NostrMemoryError,
)
from nparrot.memory_types import (
    DeleteMemoryRequest,
    MemoryEntry,
    MemoryResponse,
    MemoryStats,
    RetrieveMemoryRequest,
    StoreMemoryRequest,
    UpdateMemoryRequest,
    parse_rfc3339,
)


class MemoryManager:
    """Turns requests into memory client calls."""

    def __init__(self, client: MemoryClient) -> None:
        self.client = client

    async def store_memory_from_request(self, request: StoreMemoryRequest) -> MemoryEntry:
        """Create a memory from the request and store it."""
        expiry = None
        if request.expiry is not None:
            try:
                expiry = parse_rfc3339(request.expiry)
            except ValueError as exc:
                raise NostrMemoryError(
                    MemoryErrorKind.INVALID_DATA,
                    "Invalid expiry date format. Use ISO 8601 format.",
                ) from exc

        memory = MemoryEntry.create(
            request.memory_type,
            request.category,
            request.title,
            request.description,
            list(request.tags or []),
            request.priority,
            expiry,
        )
        await self.client.store_memory(memory)
        return memory

    async def retrieve_memories(self, request: RetrieveMemoryRequest) -> MemoryResponse:
        """Return the matching memories as a single page."""
        memories = await self.client.retrieve_memories(request)
        limit = DEFAULT_LIMIT if request.limit is None else request.limit
        return MemoryResponse(memories=memories, total=len(memories), page=1, per_page=limit)

    async def update_memory(self, request: UpdateMemoryRequest) -> MemoryEntry:
        """Update the memory named by the request."""
        return await self.client.update_memory(request.id, request)

    async def delete_memory(self, request: DeleteMemoryRequest) -> bool:
        """Delete the memory named by the request."""
        return await self.client.delete_memory(request.id)

    async def get_memory_stats(self) -> MemoryStats:
        """Return statistics about stored memories."""
        return await self.client.get_memory_stats()

    async def search_memories(self, query: str, limit: int | None = None) -> list[MemoryEntry]:
        """Memories whose title, description or tags contain the query."""
        return await self.client.retrieve_memories(
            RetrieveMemoryRequest(query=query, limit=limit)
        )

    async def get_memories_by_type(
        self, memory_type: str, limit: int | None = None
    ) -> list[MemoryEntry]:
        """Memories of one type."""
        return await self.client.retrieve_memories(
            RetrieveMemoryRequest(memory_type=memory_type, limit=limit)
        )

    async def get_memories_by_category(
        self, category: str, limit: int | None = None
    ) -> list[MemoryEntry]:
        """Memories in one category."""
        return await self.client.retrieve_memories(
            RetrieveMemoryRequest(category=category, limit=limit)
        )

    async def get_memories_by_tags(
        self, tags: list[str], limit: int | None = None
    ) -> list[MemoryEntry]:
        """Memories that carry all of the given tags."""
        return await self.client.retrieve_memories(
            RetrieveMemoryRequest(tags=list(tags), limit=limit)
        )

    async def get_recent_memories(self, limit: int | None = None) -> list[MemoryEntry]:
        """The most recent memories."""
        return await self.client.retrieve_memories(RetrieveMemoryRequest(limit=limit))

    async def cleanup_expired_memories(self) -> int:
        """Delete expired memories among those retrieved; return how many were deleted."""
        memories = await self.client.retrieve_memories(RetrieveMemoryRequest(limit=10000))
        expired = 0
        for memory in memories:
            if memory.is_expired():
                await self.delete_memory(DeleteMemoryRequest(id=str(memory.id)))
                expired += 1
        return expired