from urllib.parse import parse_qs, urlparse

import pytest

from models import SearchQuery
from query_builder import build_citers_url, build_query


@pytest.fixture(autouse=True)
def default_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SCHOLAR_BASE_URL", raising=False)


def _params(url: str) -> dict[str, list[str]]:
    return parse_qs(urlparse(url).query)


def test_words_are_joined_and_escaped() -> None:
    url = build_query(SearchQuery(words=("quantum", "field theory")))

    assert url.startswith("https://scholar.google.com/scholar?")
    assert "q=quantum+field+theory" in url
    assert _params(url) == {"q": ["quantum field theory"]}


def test_phrase_and_authors() -> None:
    url = build_query(SearchQuery(phrase="critical phenomena", authors="K Wilson"))

    assert _params(url) == {
        "as_epq": ['"critical phenomena"'],
        "as_sauthors": ["K Wilson"],
    }


def test_max_count_sent_only_when_set() -> None:
    assert _params(build_query(SearchQuery(words=("x",), max_count=5)))["num"] == ["5"]
    assert "num" not in _params(build_query(SearchQuery(words=("x",))))


def test_empty_values_are_omitted() -> None:
    url = build_query(SearchQuery(words=("", "  "), phrase="", authors="  "))
    assert url == "https://scholar.google.com/scholar"


def test_title_only_is_not_sent() -> None:
    url = build_query(SearchQuery(words=("deep",), title_only=True))
    assert _params(url) == {"q": ["deep"]}


def test_base_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHOLAR_BASE_URL", "https://scholar.example.test/")

    url = build_query(SearchQuery(words=("x",)))
    assert url == "https://scholar.example.test/scholar?q=x"


def test_build_citers_url() -> None:
    assert build_citers_url(5545735591029960915) == (
        "https://scholar.google.com/scholar?cites=5545735591029960915"
    )
