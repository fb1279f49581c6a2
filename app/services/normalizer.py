"""Reshape upstream search JSON into the service's response schemas.

Pure functions: no I/O, no shared state.
"""

from __future__ import annotations

from typing import Any, Iterator

from app.schemas.search import (
    InstantAnswerResponse,
    RelatedTopic,
    WebSearchItem,
    WebSearchResponse,
)

MAX_RELATED_TOPICS = 8


def _topic(entry: Any) -> RelatedTopic | None:
    if not isinstance(entry, dict):
        return None
    text, url = entry.get("Text"), entry.get("FirstURL")
    if text and url:
        return RelatedTopic(text=text, url=url)
    return None


def _iter_related_topics(raw_topics: list[Any]) -> Iterator[RelatedTopic]:
    """Yield topics from a RelatedTopics list, expanding one level of groups.

    An entry is either a topic (``Text`` + ``FirstURL``) or a group holding
    its own ``Topics`` list. Entries missing either field are skipped.
    """

    for entry in raw_topics:
        topic = _topic(entry)
        if topic is not None:
            yield topic
            continue
        nested = entry.get("Topics") if isinstance(entry, dict) else None
        if isinstance(nested, list):
            for child in nested:
                child_topic = _topic(child)
                if child_topic is not None:
                    yield child_topic


def normalize_instant_answer(query: str, data: dict[str, Any]) -> InstantAnswerResponse:
    """Normalize a DuckDuckGo Instant Answer payload.

    Args:
        query: Trimmed query text echoed back to the client.
        data: Decoded upstream JSON object.

    Returns:
        InstantAnswerResponse with empty upstream strings mapped to None and
        at most ``MAX_RELATED_TOPICS`` related topics.

    Example:
        >>> result = normalize_instant_answer("q", {
        ...     "RelatedTopics": [
        ...         {"Text": "a", "FirstURL": "u1"},
        ...         {"Topics": [{"Text": "b", "FirstURL": "u2"}, {"Text": "c"}]},
        ...     ],
        ... })
        >>> [t.text for t in result.related_topics]
        ['a', 'b']
    """

    topics: list[RelatedTopic] = []
    for topic in _iter_related_topics(data.get("RelatedTopics") or []):
        if len(topics) == MAX_RELATED_TOPICS:
            break
        topics.append(topic)

    return InstantAnswerResponse(
        query=query,
        heading=data.get("Heading") or None,
        abstract=data.get("Abstract") or None,
        abstract_source=data.get("AbstractSource") or None,
        abstract_url=data.get("AbstractURL") or None,
        related_topics=topics,
    )


def _next_start(data: dict[str, Any]) -> int | None:
    """Read ``queries.nextPage[0].startIndex``; None if any level is missing."""

    queries = data.get("queries")
    if not isinstance(queries, dict):
        return None
    next_page = queries.get("nextPage")
    if not isinstance(next_page, list) or not next_page:
        return None
    first = next_page[0]
    if not isinstance(first, dict):
        return None
    return first.get("startIndex")


def normalize_web_search(query: str, data: dict[str, Any]) -> WebSearchResponse:
    """Normalize a Google Custom Search payload.

    Every upstream item is kept, in order.
    """

    items = [
        WebSearchItem(
            title=item.get("title"),
            snippet=item.get("snippet"),
            url=item.get("link"),
            display_url=item.get("displayLink"),
        )
        for item in data.get("items") or []
    ]
    return WebSearchResponse(query=query, next_start=_next_start(data), items=items)
