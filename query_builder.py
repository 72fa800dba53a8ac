"""Build search-engine query URLs from a SearchQuery."""

from __future__ import annotations

import logging
import os
from urllib.parse import urlencode

from models import SearchQuery

DEFAULT_BASE_URL = "https://scholar.google.com"
SEARCH_PATH = "/scholar"

LOGGER = logging.getLogger(__name__)


def base_url() -> str:
    """Engine root URL, overridable with SCHOLAR_BASE_URL."""
    return os.getenv("SCHOLAR_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def build_query(query: SearchQuery) -> str:
    """Return the results-page URL for ``query``.

    Empty words, phrase or authors are left out of the URL. The result count
    is only sent when set, otherwise the engine's default page size applies.
    """
    params: dict[str, str | int] = {}

    words = " ".join(w.strip() for w in query.words if w and w.strip())
    if words:
        params["q"] = words

    phrase = (query.phrase or "").strip()
    if phrase:
        params["as_epq"] = f'"{phrase}"'

    authors = (query.authors or "").strip()
    if authors:
        params["as_sauthors"] = authors

    if query.max_count is not None:
        params["num"] = query.max_count

    url = f"{base_url()}{SEARCH_PATH}"
    if params:
        url = f"{url}?{urlencode(params)}"

    LOGGER.debug("Built query URL: %s", url)
    return url


def build_citers_url(cluster_id: int) -> str:
    """Return the "cited by" listing URL for a paper's cluster id."""
    return f"{base_url()}{SEARCH_PATH}?{urlencode({'cites': cluster_id})}"
