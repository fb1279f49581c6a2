"""Pydantic schemas for normalized search responses.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RelatedTopic(_WireModel):
    """A single related topic from an instant answer."""

    text: str = Field(..., description="Topic text as returned by DuckDuckGo.")
    url: str = Field(..., description="Link to the topic (DuckDuckGo FirstURL).")


class InstantAnswerResponse(_WireModel):
    """Normalized DuckDuckGo Instant Answer result."""

    query: str = Field(..., description="The trimmed query text.")
    heading: str | None = Field(default=None, description="Instant answer heading.")
    abstract: str | None = Field(default=None, description="Plain-text abstract.")
    abstract_source: str | None = Field(
        default=None,
        alias="abstractSource",
        description="Name of the abstract's source (e.g. Wikipedia).",
    )
    abstract_url: str | None = Field(
        default=None,
        alias="abstractURL",
        description="URL of the abstract's source page.",
    )
    related_topics: list[RelatedTopic] = Field(
        default_factory=list,
        alias="relatedTopics",
        max_length=8,
        description="Flattened related topics, at most 8, in upstream order.",
    )


class WebSearchItem(_WireModel):
    """A single Google Custom Search result."""

    title: str | None = Field(default=None, description="Result title.")
    snippet: str | None = Field(default=None, description="Result snippet.")
    url: str | None = Field(default=None, description="Result link.")
    display_url: str | None = Field(
        default=None,
        alias="displayUrl",
        description="Abbreviated link suitable for display.",
    )


class WebSearchResponse(_WireModel):
    """Normalized Google Custom Search result page."""

    query: str = Field(..., description="The trimmed query text.")
    next_start: int | None = Field(
        default=None,
        alias="nextStart",
        description="1-based start index of the next page, null on the last page.",
    )
    items: list[WebSearchItem] = Field(
        default_factory=list,
        description="Results in upstream order.",
    )
