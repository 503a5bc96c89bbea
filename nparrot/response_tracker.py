"""Tracking whether an agent has sent its final reply in a conversation."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

FALLBACK_WAIT_SECONDS = 2.0
POLL_INTERVAL_SECONDS = 0.1

_REMINDER = (
    "🚨 CRITICAL MANDATORY WORKFLOW - NO EXCEPTIONS:\n"
    "\n"
    "1️⃣ IMMEDIATE ACTION REQUIRED: Send progress update NOW\n"
    '{"tool": "progress", "arguments": {"message": "I\'m working on your request..."}}\n'
    "\n"
    "2️⃣ PERFORM OPERATIONS: Execute the user's request\n"
    "\n"
    "3️⃣ MANDATORY FINAL RESPONSE: You MUST end with 'send' tool call\n"
    '{"tool": "send", "arguments": {"message": "[Your final response here]"}}\n'
    "\n"
    "🔴 CRITICAL: The user can ONLY see messages sent via 'send' and 'progress' tools\n"
    "🔴 CRITICAL: If you don't use 'send', the user sees NOTHING\n"
    "🔴 CRITICAL: If you don't use 'progress', the user thinks you're not working\n"
    "\n"
    "💀 FAILURE TO FOLLOW THIS PATTERN WILL BREAK THE USER EXPERIENCE\n"
    "\n"
    "⚠️ This applies to EVERY response: simple answers, complex operations, errors, "
    "confirmations - ALL must follow this pattern."
)


def create_response_reminder() -> str:
    """Instructions reminding an agent to report progress and always send a reply."""
    return _REMINDER


class ResponseTracker:
    """Remembers whether a conversation is active and whether a reply went out."""

    def __init__(
        self,
        wait_timeout: float = FALLBACK_WAIT_SECONDS,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self._response_sent = False
        self._active = False

    def start_conversation(self) -> None:
        """Begin a conversation with no reply sent yet."""
        self._response_sent = False
        self._active = True

    def mark_response_sent(self) -> None:
        """Record that the final reply was sent."""
        self._response_sent = True

    def mark_progress_sent(self) -> None:
        """Record a progress update; it does not count as a final reply."""

    def end_conversation(self) -> None:
        """Mark the conversation as over."""
        self._active = False

    def has_sent_final_response(self) -> bool:
        """True once the final reply was sent."""
        return self._response_sent

    def is_conversation_active(self) -> bool:
        """True while a conversation is going on."""
        return self._active

    def _waiting(self) -> bool:
        return self._active and not self._response_sent

    async def _wait_for_reply(self) -> None:
        while self._waiting():
            await asyncio.sleep(self.poll_interval)

    async def ensure_response_sent(
        self, send_fallback: Callable[[], Awaitable[object]]
    ) -> None:
        """Wait briefly for a reply; if none arrives, send the fallback.

        Errors raised by the fallback propagate to the caller.
        """
        try:
            await asyncio.wait_for(self._wait_for_reply(), timeout=self.wait_timeout)
        except asyncio.TimeoutError:
            if self._waiting():
                logger.warning(
                    "Agent did not send final response - sending fallback message"
                )
                await send_fallback()
                self.mark_response_sent()