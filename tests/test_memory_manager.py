from datetime import datetime, timezone

import pytest

from nparrot.memory_client import MemoryClient, MemoryErrorKind, NostrMemoryError
from nparrot.memory_manager import MemoryManager
from nparrot.memory_types import (
    DeleteMemoryRequest,
    MemoryEntry,
    RetrieveMemoryRequest,
    StoreMemoryRequest,
    UpdateMemoryRequest,
)


class Outbox:
    def __init__(self):
        self.messages = []

    async def __call__(self, content):
        self.messages.append(content)


def make_manager():
    outbox = Outbox()
    return MemoryManager(MemoryClient(outbox)), outbox


@pytest.mark.asyncio
async def test_store_invalid_expiry():
    manager, outbox = make_manager()
    request = StoreMemoryRequest(memory_type="note", title="t", description="d", expiry="soon")
    with pytest.raises(NostrMemoryError) as info:
        await manager.store_memory_from_request(request)
    assert info.value.kind is MemoryErrorKind.INVALID_DATA
    assert str(info.value) == "Invalid data: Invalid expiry date format. Use ISO 8601 format."
    assert outbox.messages == []


@pytest.mark.asyncio
async def test_store_from_request_fields():
    manager, outbox = make_manager()
    request = StoreMemoryRequest(
        memory_type="fact", title="Title", description="Body", category="work",
        tags=["a"], priority="high", expiry="2999-06-01T12:00:00+02:00",
    )
    memory = await manager.store_memory_from_request(request)
    assert memory.memory_type == "fact"
    assert memory.category == "work"
    assert memory.content.metadata.tags == ["a"]
    assert memory.content.metadata.priority == "high"
    assert memory.content.metadata.expiry == datetime(2999, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert len(outbox.messages) == 1


@pytest.mark.asyncio
async def test_store_without_tags_gives_empty_list():
    manager, _ = make_manager()
    memory = await manager.store_memory_from_request(
        StoreMemoryRequest(memory_type="note", title="t", description="d")
    )
    assert memory.content.metadata.tags == []
    assert memory.content.metadata.expiry is None


@pytest.mark.asyncio
async def test_retrieve_response_page():
    manager, _ = make_manager()
    for title in ("one", "two"):
        await manager.store_memory_from_request(
            StoreMemoryRequest(memory_type="note", title=title, description="d")
        )
    response = await manager.retrieve_memories(RetrieveMemoryRequest())
    assert response.total == 2
    assert response.page == 1
    assert response.per_page == 10
    limited = await manager.retrieve_memories(RetrieveMemoryRequest(limit=1))
    assert limited.total == 1 and limited.per_page == 1


@pytest.mark.asyncio
async def test_update_and_delete_delegate():
    manager, outbox = make_manager()
    memory = await manager.store_memory_from_request(
        StoreMemoryRequest(memory_type="note", title="old", description="d")
    )
    updated = await manager.update_memory(UpdateMemoryRequest(id=str(memory.id), title="new"))
    assert updated.content.title == "new"
    assert await manager.delete_memory(DeleteMemoryRequest(id=str(memory.id))) is True
    assert outbox.messages[-1] == f"MEMORY_DELETED:{memory.id}"
    assert (await manager.get_recent_memories()) == []


@pytest.mark.asyncio
async def test_convenience_queries():
    manager, _ = make_manager()
    a = await manager.store_memory_from_request(StoreMemoryRequest(
        memory_type="fact", title="Coffee order", description="d", category="personal",
        tags=["drink", "daily"]))
    b = await manager.store_memory_from_request(StoreMemoryRequest(
        memory_type="note", title="Meeting", description="d", category="work", tags=["daily"]))
    assert [m.id for m in await manager.search_memories("coffee")] == [a.id]
    assert [m.id for m in await manager.get_memories_by_type("note")] == [b.id]
    assert [m.id for m in await manager.get_memories_by_category("personal")] == [a.id]
    assert [m.id for m in await manager.get_memories_by_tags(["drink", "daily"])] == [a.id]
    assert {m.id for m in await manager.get_recent_memories(5)} == {a.id, b.id}
    assert len(await manager.get_recent_memories(1)) == 1


@pytest.mark.asyncio
async def test_stats_through_manager():
    manager, _ = make_manager()
    await manager.store_memory_from_request(
        StoreMemoryRequest(memory_type="fact", title="t", description="d"))
    stats = await manager.get_memory_stats()
    assert stats.total_memories == 1
    assert stats.by_type == {"fact": 1}


@pytest.mark.asyncio
async def test_cleanup_finds_nothing_because_expired_are_filtered_out():
    manager, outbox = make_manager()
    expired = MemoryEntry.create(
        "note", None, "gone", "d", [], None, datetime(2000, 1, 1, tzinfo=timezone.utc))
    await manager.client.store_memory(expired)
    sent_before = len(outbox.messages)
    assert await manager.cleanup_expired_memories() == 0
    assert len(outbox.messages) == sent_before