"""Shared typed models for the scraper."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Search parameters collected from the command line."""

    words: tuple[str, ...] = ()
    phrase: str | None = None
    authors: str | None = None
    title_only: bool = False
    max_count: int | None = None


@dataclass(frozen=True, slots=True)
class PaperRecord:
    """One entry of a search-results page."""

    title: str
    authors: tuple[str, ...] = ()
    venue: str = ""
    cited_by_count: int | None = None
    cited_by_link: str | None = None
    cluster_id: int | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class CiterRecord:
    """One entry of a "cited by" listing."""

    title: str
    authors: tuple[str, ...] = ()
    snippet: str = ""


@dataclass(frozen=True, slots=True)
class TargetPaper:
    """The paper a "cited by" page lists citations for."""

    title: str
    cluster_id: int | None = None
