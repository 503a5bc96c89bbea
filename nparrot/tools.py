"""Shared pieces for tool servers: tool results and message delivery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

Deliver = Callable[[str], Awaitable[object]]


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: text content and an error flag."""

    content: tuple[str, ...]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        """A successful result holding one text item."""
        return cls(content=(text,), is_error=False)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        """A failed result holding one text item."""
        return cls(content=(text,), is_error=True)

    @property
    def text(self) -> str:
        """All text content joined by newlines."""
        return "\n".join(self.content)


class Messenger:
    """Sends final replies and progress updates to the user.

    Progress updates go through ``report`` when given, otherwise through ``deliver``.
    """

    def __init__(self, deliver: Deliver, report: Optional[Deliver] = None) -> None:
        self._deliver = deliver
        self._report = report

    async def send(self, message: str) -> None:
        """Send a final reply."""
        await self._deliver(message)

    async def progress(self, message: str) -> None:
        """Send a progress update."""
        await (self._report or self._deliver)(message)