"""Wrapping of memory entries into direct-message content."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any

from nparrot.memory_types import MemoryEntry

ALGORITHM = "nostr-nip17"
WRAPPER_VERSION = "1.0"
MEMORY_PREFIX = "MEMORY_ENTRY:"


class EncryptionError(Exception):
    """Raised when memory data cannot be wrapped or unwrapped."""


@dataclass
class EncryptedData:
    """Envelope around a serialized payload."""

    data: str
    algorithm: str = ALGORITHM
    version: str = WRAPPER_VERSION


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise EncryptionError(f"Serialization error: {exc}") from exc


def is_memory_dm(content: str) -> bool:
    """True if the message content carries a memory entry."""
    return content.startswith(MEMORY_PREFIX)


class MemoryEncryption:
    """Serializes memories into envelopes and back."""

    def __init__(self, keys: Any = None) -> None:
        self.keys = keys

    def encrypt(self, data: Any) -> str:
        """Serialize data (an object with to_dict, or plain JSON data) into an envelope."""
        payload = data.to_dict() if hasattr(data, "to_dict") else data
        try:
            serialized = _dumps(payload)
        except (TypeError, ValueError) as exc:
            raise EncryptionError(f"Serialization error: {exc}") from exc
        return _dumps(asdict(EncryptedData(data=serialized)))

    def decrypt(self, encrypted: str) -> Any:
        """Open an envelope and return the JSON value it holds."""
        wrapper = _loads(encrypted)
        if not isinstance(wrapper, dict) or not all(
            isinstance(wrapper.get(key), str) for key in ("data", "algorithm", "version")
        ):
            raise EncryptionError("Serialization error: malformed envelope")
        envelope = EncryptedData(
            data=wrapper["data"], algorithm=wrapper["algorithm"], version=wrapper["version"]
        )
        if envelope.algorithm != ALGORITHM:
            raise EncryptionError(
                f"Invalid data: Unsupported encryption algorithm: {envelope.algorithm}"
            )
        return _loads(envelope.data)

    def create_memory_dm_content(self, memory: Any) -> str:
        """Return message content that identifies itself as a memory entry."""
        return MEMORY_PREFIX + self.encrypt(memory)

    def extract_memory_from_dm(self, content: str) -> MemoryEntry | None:
        """Return the memory held by the content, or None if it holds none."""
        if not is_memory_dm(content):
            return None
        value = self.decrypt(content[len(MEMORY_PREFIX):])
        try:
            return MemoryEntry.from_dict(value)
        except ValueError as exc:
            raise EncryptionError(f"Serialization error: {exc}") from exc