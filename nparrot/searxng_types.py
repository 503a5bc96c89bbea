"""Data model for web searches against a SearXNG instance."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

DEFAULT_COUNT = 20
MAX_COUNT = 100


def _require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def _optional_str(value: Any, name: str) -> str | None:
    return None if value is None else _require_str(value, name)


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field {name!r} must be a non-negative integer")
    return value


def _optional_strings(value: Any, name: str) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"field {name!r} must be a list")
    return [_require_str(item, name) for item in value]


@dataclass
class SearchResult:
    """One hit returned by the search engine."""

    title: str
    url: str
    content: str | None = None
    engine: str | None = None
    score: float | None = None
    category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchResult":
        """Build a result from a dictionary; raises ValueError if malformed."""
        try:
            score = data.get("score")
            if score is not None and (
                isinstance(score, bool) or not isinstance(score, (int, float))
            ):
                raise ValueError("field 'score' must be a number")
            return cls(
                title=_require_str(data["title"], "title"),
                url=_require_str(data["url"], "url"),
                content=_optional_str(data.get("content"), "content"),
                engine=_optional_str(data.get("engine"), "engine"),
                score=float(score) if score is not None else None,
                category=_optional_str(data.get("category"), "category"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid search result: {exc}") from exc


@dataclass
class SearchResponse:
    """A page of search results with the engine's extra hints."""

    query: str
    results: list[SearchResult]
    total_results: int
    page: int
    per_page: int
    answers: list[str] | None = None
    suggestions: list[str] | None = None
    corrections: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchResponse":
        """Build a response from a dictionary; raises ValueError if malformed."""
        try:
            results = data["results"]
            if not isinstance(results, list):
                raise ValueError("field 'results' must be a list")
            return cls(
                query=_require_str(data["query"], "query"),
                results=[SearchResult.from_dict(item) for item in results],
                total_results=_require_int(data["total_results"], "total_results"),
                page=_require_int(data["page"], "page"),
                per_page=_require_int(data["per_page"], "per_page"),
                answers=_optional_strings(data.get("answers"), "answers"),
                suggestions=_optional_strings(data.get("suggestions"), "suggestions"),
                corrections=_optional_strings(data.get("corrections"), "corrections"),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid search response: {exc}") from exc


@dataclass
class SearXNGWebSearchRequest:
    """Search terms with optional page size and offset."""

    query: str
    count: int | None = None
    offset: int | None = None

    def __post_init__(self) -> None:
        for name in ("count", "offset"):
            value = getattr(self, name)
            if value is not None:
                _require_int(value, name)


@dataclass
class SearXNGConfig:
    """Where the instance lives and how many results a page holds."""

    base_url: str
    default_count: int = DEFAULT_COUNT
    max_count: int = MAX_COUNT