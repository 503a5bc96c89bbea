# nparrot

Building blocks for an AI agent that works for one user over direct messages.
Everything is asynchronous and delivery of messages is left to you: the
package takes plain async callables for sending and never opens a messaging
connection itself.

- `nparrot.memory_types`: the data model (`MemoryEntry`, the request classes,
  `MemoryResponse`, `MemoryStats`) and `parse_rfc3339`.
- `nparrot.encryption`: `MemoryEncryption` wraps an entry into an envelope and
  prefixes it with `MEMORY_ENTRY:`; `is_memory_dm` recognises such content.
- `nparrot.memory_client`: `MemoryClient` stores, retrieves, updates, deletes
  and counts memories; failures raise `NostrMemoryError` with a
  `MemoryErrorKind`.
- `nparrot.memory_manager`: `MemoryManager` works from request objects and
  adds convenience searches and cleanup of expired entries.
- `nparrot.memory_server`: `MemoryServer` runs the memory tools, reports the
  outcome to the user and returns a `ToolResult`.
- `nparrot.searxng_types`, `nparrot.searxng_client`, `nparrot.searxng_server`:
  web search against a SearXNG instance and `format_search_response`.
- `nparrot.response_tracker`: `ResponseTracker` and
  `create_response_reminder()`.
- `nparrot.profile`: ready-made `AgentProfile` values, their metadata, and
  `setup_agent_profile`.
- `nparrot.tools`: `ToolResult` and `Messenger`, shared by the servers.

## Installation

```
pip install nparrot
```

To run the tests:

```
pip install "nparrot[test]"
pytest
```

## Messaging and tool results

A `Messenger` is built from an async `deliver(message)` callable and, if
progress updates should go elsewhere, an async `report(message)` callable.
`send` uses `deliver`; `progress` uses `report` when given, `deliver`
otherwise. The servers ignore errors raised while delivering.

Each tool returns a `ToolResult`: `content` is a tuple of text items,
`is_error` tells failure from success, and `text` joins the items with
newlines. Build them with `ToolResult.success(text)` or
`ToolResult.error(text)`.

## Memory

```python
from nparrot.memory_client import MemoryClient
from nparrot.memory_manager import MemoryManager
from nparrot.memory_server import MemoryServer
from nparrot.memory_types import RetrieveMemoryRequest, StoreMemoryRequest
from nparrot.tools import Messenger

async def send_to_self(content: str) -> None:
    ...  # deliver a private message to your own key

client = MemoryClient(send_to_self)
manager = MemoryManager(client)

entry = await manager.store_memory_from_request(
    StoreMemoryRequest(memory_type="note", title="Groceries",
                       description="Buy milk", tags=["home"])
)
page = await manager.retrieve_memories(RetrieveMemoryRequest(query="milk"))
```

- Storing keeps a copy in memory and sends the wrapped entry through
  `send_to_self`. Deleting removes the copy and sends `MEMORY_DELETED:<id>`.
  An id that is not a UUID raises `NostrMemoryError` (invalid data).
- Retrieval filters by query (case-insensitive, in title, description or
  tags), type, category and tags (all must be present), skips expired
  entries, sorts newest first and returns at most `limit` entries (10 by
  default). `since` and `until` are accepted but do not filter.
- `store_memory_from_request` rejects an expiry that is not an RFC 3339
  timestamp. An update with a malformed expiry leaves the expiry unchanged;
  an update of an unknown id raises "Memory not found".
- `cleanup_expired_memories()` deletes expired entries among those retrieved
  and returns their number. Because retrieval already skips expired entries,
  it finds none to delete.
- `MemoryServer(manager, messenger)` offers `store_memory`,
  `retrieve_memory`, `update_memory`, `delete_memory`, `memory_stats` and
  `cleanup_expired_memories`; `get_info()` returns the protocol version,
  capabilities, server name and usage instructions as a dict.

## Web search

```python
from nparrot.searxng_client import SearXNGClient
from nparrot.searxng_server import SearXNGServer
from nparrot.searxng_types import SearXNGWebSearchRequest

client = SearXNGClient("http://localhost:8080")
response = await client.search(SearXNGWebSearchRequest(query="python", count=10))
```

`search` requests `/search` with `format=json`. The page size defaults to 20
and is clamped to between 1 and 100; the page number is `offset // count + 1`.
An empty query, an HTTP failure, an error status or a body that is not JSON
raises `SearXNGError`. An `httpx.AsyncClient` may be passed as `http_client`;
`SearXNGClient.with_config(SearXNGConfig(...))` sets other defaults.

`SearXNGServer(client, messenger).searxng_web_search(request)` sends the user
the text of `format_search_response(response)`, which shows answers, numbered
results with content cut to 150 bytes, the number of further results,
suggestions and corrections.

## Reply tracking

`ResponseTracker` records whether a conversation is active and whether the
final reply was sent. `ensure_response_sent(send_fallback)` waits up to
`wait_timeout` seconds (2 by default); if the conversation is still active
with no reply, it awaits `send_fallback()` and marks the reply as sent.
`create_response_reminder()` returns the workflow instructions to put in an
agent's prompt.

## Profiles

```python
from nparrot.profile import AgentProfile, get_agent_profile_for_type, setup_agent_profile

metadata = AgentProfile.main_orchestrator().to_metadata()
coder = get_agent_profile_for_type("goose")
await setup_agent_profile(publish, coder)
```

`to_metadata()` returns a dict of name, display name and about text, with
picture and banner only when they are URLs, plus nip05 and lud16 when set.
`setup_agent_profile` passes that dict to your async `publish` callable.
Unknown agent types get the specialist profile.

## What this package does not do

- It does not connect to relays, sign events or encrypt anything: the
  `MEMORY_ENTRY:` envelope holds the entry as plain JSON, and sending is done
  by the callables you supply.
- Stored memories are read back only from the in-process copy; nothing is
  fetched from previously sent messages, so memories do not survive a
  restart.
- There is no command-line program and no tool-protocol transport: the
  servers are Python objects whose methods you call.