"""Tool server exposing memory operations and reporting results to the user."""

from __future__ import annotations

from typing import Any

from nparrot.memory_client import NostrMemoryError
from nparrot.memory_manager import MemoryManager
from nparrot.memory_types import (
    DeleteMemoryRequest,
    MemoryEntry,
    RetrieveMemoryRequest,
    StoreMemoryRequest,
    UpdateMemoryRequest,
)
from nparrot.tools import DISPLAY_TIME_FORMAT, Messenger, ToolResult

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "nparrot"
SERVER_VERSION = "0.1.0"

INSTRUCTIONS = (
    "This Nostr Memory MCP server provides persistent memory storage for AI agents "
    "using encrypted Nostr direct messages.\n\n"
    "🧠 **MEMORY OPERATIONS**:\n\n"
    "📝 **store_memory**: Store new memory entries with type, category, tags, and optional expiry\n"
    "🔍 **retrieve_memory**: Search and filter memories by query, type, category, tags, or date range\n"
    "✏️ **update_memory**: Modify existing memory entries\n"
    "🗑️ **delete_memory**: Remove memory entries by ID\n"
    "📊 **memory_stats**: Get statistics about stored memories\n"
    "🧹 **cleanup_expired_memories**: Remove expired memory entries\n\n"
    "🔐 **PRIVACY & SECURITY**:\n"
    "• All memories are encrypted using Nostr NIP-17 private messages\n"
    "• Memories are stored as DMs to yourself for maximum privacy\n"
    "• Each memory has a unique UUID for precise identification\n"
    "• Memories can have expiry dates for automatic cleanup\n\n"
    "📋 **MEMORY TYPES**:\n"
    "• user_preference: User preferences and settings\n"
    "• context: Contextual information about conversations\n"
    "• fact: Important facts to remember\n"
    "• instruction: Instructions or commands to remember\n"
    "• note: General notes and observations\n\n"
    "📂 **CATEGORIES**:\n"
    "• personal: Personal information\n"
    "• work: Work-related memories\n"
    "• project: Project-specific information\n"
    "• general: General purpose memories\n\n"
    "🏷️ **FEATURES**:\n"
    "• Full-text search across titles and descriptions\n"
    "• Tag-based organization and filtering\n"
    "• Priority levels (high, medium, low)\n"
    "• Date range filtering\n"
    "• Automatic expiry handling\n"
    "• Comprehensive statistics\n\n"
    "💡 **USAGE TIPS**:\n"
    "• Use descriptive titles for easy searching\n"
    "• Add relevant tags for better organization\n"
    "• Set expiry dates for temporary information\n"
    "• Use appropriate types and categories for filtering\n"
    "• Regular cleanup of expired memories keeps storage optimal"
)

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}


def _quoted(text: str) -> str:
    """Render a string in quotes with escapes, as a debug representation."""
    parts = []
    for char in text:
        if char in _ESCAPES:
            parts.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


def _entry_summary(memory: MemoryEntry, verb: str) -> str:
    category = (
        f"📂 **Category:** {_quoted(memory.category)}\n"
        if memory.category is not None
        else ""
    )
    tags = memory.content.metadata.tags
    tag_line = f"🏷️ **Tags:** {', '.join(tags)}\n" if tags else ""
    return (
        f"📝 **Title:** {memory.content.title}\n"
        f"🆔 **ID:** {memory.id}\n"
        f"📅 **{verb}:** {memory.timestamp.strftime(DISPLAY_TIME_FORMAT)}\n"
        f"🏷️ **Type:** {_quoted(memory.memory_type)}\n"
        f"{category}{tag_line}"
    )


def _listing_item(number: int, memory: MemoryEntry) -> str:
    category = (
        f"📂 Category: {_quoted(memory.category)}\n" if memory.category is not None else ""
    )
    tags = memory.content.metadata.tags
    tag_line = f"🏷️ Tags: {', '.join(tags)}\n" if tags else ""
    return (
        f"{number}. **{memory.content.title}**\n"
        f"🆔 ID: {memory.id}\n"
        f"📅 Created: {memory.timestamp.strftime(DISPLAY_TIME_FORMAT)}\n"
        f"🏷️ Type: {_quoted(memory.memory_type)}\n"
        f"{category}"
        f"📝 {memory.content.description}\n"
        f"{tag_line}\n"
    )


class MemoryServer:
    """Memory tools that report outcomes to the user through a messenger."""

    def __init__(self, manager: MemoryManager, messenger: Messenger) -> None:
        self.manager = manager
        self.messenger = messenger

    async def _progress(self, message: str) -> None:
        try:
            await self.messenger.progress(message)
        except Exception:  # delivery problems never fail the tool call
            pass

    async def _send(self, message: str) -> None:
        try:
            await self.messenger.send(message)
        except Exception:  # delivery problems never fail the tool call
            pass

    async def _fail(self, action: str, error: NostrMemoryError) -> ToolResult:
        message = f"❌ Failed to {action}: {error}"
        await self._send(message)
        return ToolResult.error(message)

    async def store_memory(self, request: StoreMemoryRequest) -> ToolResult:
        """Store a new memory entry."""
        await self._progress(f"Storing memory: {request.title}")
        try:
            memory = await self.manager.store_memory_from_request(request)
        except NostrMemoryError as exc:
            return await self._fail("store memory", exc)
        await self._send(
            "🧠 Memory stored successfully!\n\n" + _entry_summary(memory, "Created")
        )
        return ToolResult.success(f"Memory stored with ID: {memory.id}")

    async def retrieve_memory(self, request: RetrieveMemoryRequest) -> ToolResult:
        """Retrieve and search memory entries."""
        if request.query is not None:
            await self._progress(f"Searching memories for: {request.query}")
        else:
            await self._progress("Retrieving memories")
        try:
            response = await self.manager.retrieve_memories(request)
        except NostrMemoryError as exc:
            return await self._fail("retrieve memories", exc)

        if not response.memories:
            message = "🔍 No memories found matching your criteria."
        else:
            message = f"🧠 Found {len(response.memories)} memories:\n\n" + "".join(
                _listing_item(number, memory)
                for number, memory in enumerate(response.memories, start=1)
            )
        await self._send(message)
        return ToolResult.success(f"Retrieved {len(response.memories)} memories")

    async def update_memory(self, request: UpdateMemoryRequest) -> ToolResult:
        """Update an existing memory entry."""
        await self._progress(f"Updating memory: {request.id}")
        try:
            memory = await self.manager.update_memory(request)
        except NostrMemoryError as exc:
            return await self._fail("update memory", exc)
        await self._send(
            "✅ Memory updated successfully!\n\n" + _entry_summary(memory, "Updated")
        )
        return ToolResult.success(f"Memory {memory.id} updated successfully")

    async def delete_memory(self, request: DeleteMemoryRequest) -> ToolResult:
        """Delete a memory entry by id."""
        await self._progress(f"Deleting memory: {request.id}")
        try:
            await self.manager.delete_memory(request)
        except NostrMemoryError as exc:
            return await self._fail("delete memory", exc)
        await self._send(f"🗑️ Memory {request.id} deleted successfully")
        return ToolResult.success(f"Memory {request.id} deleted")

    async def memory_stats(self) -> ToolResult:
        """Report statistics about stored memories."""
        await self._progress("Gathering memory statistics...")
        try:
            stats = await self.manager.get_memory_stats()
        except NostrMemoryError as exc:
            return await self._fail("get memory statistics", exc)

        lines = ["📊 **Memory Statistics**\n\n", f"🧠 **Total Memories:** {stats.total_memories}\n\n"]
        if stats.by_type:
            lines.append("📋 **By Type:**\n")
            lines.extend(f"  • {name}: {count}\n" for name, count in stats.by_type.items())
            lines.append("\n")
        if stats.by_category:
            lines.append("📂 **By Category:**\n")
            lines.extend(f"  • {name}: {count}\n" for name, count in stats.by_category.items())
            lines.append("\n")
        if stats.oldest is not None:
            lines.append(f"📅 **Oldest:** {stats.oldest.strftime(DISPLAY_TIME_FORMAT)}\n")
        if stats.newest is not None:
            lines.append(f"📅 **Newest:** {stats.newest.strftime(DISPLAY_TIME_FORMAT)}\n")
        await self._send("".join(lines))
        return ToolResult.success(
            f"Memory statistics: {stats.total_memories} total memories"
        )

    async def cleanup_expired_memories(self) -> ToolResult:
        """Delete expired memories."""
        await self._progress("Cleaning up expired memories...")
        try:
            expired = await self.manager.cleanup_expired_memories()
        except NostrMemoryError as exc:
            return await self._fail("cleanup expired memories", exc)
        if expired == 0:
            message = "✅ No expired memories found. All memories are current."
        else:
            message = f"🧹 Cleaned up {expired} expired memories"
        await self._send(message)
        return ToolResult.success(f"Cleaned up {expired} expired memories")

    def get_info(self) -> dict[str, Any]:
        """Describe the server: protocol version, capabilities and usage instructions."""
        return {
            "protocol_version": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "server_info": {"name": SERVER_NAME, "version": SERVER_VERSION},
            "instructions": INSTRUCTIONS,
        }