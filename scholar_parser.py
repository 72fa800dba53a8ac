"""HTML parsers for search-results pages and "cited by" listings.

Results page layout, one ``gs_ri`` block per paper inside the results
container:

    <div id="gs_res_ccl_mid">
      <div class="gs_ri">
        <h3 class="gs_rt"><span>[PDF]</span> <a href="...">Title</a></h3>
        <div class="gs_a">A Author, B Author - Journal, 2019 - publisher.com</div>
        <div class="gs_rs">snippet...</div>
        <div class="gs_fl">... <a href="/scholar?cites=123">Cited by 99</a> ...</div>
      </div>
      ...
    </div>

Parsing is permissive: a block without a title is skipped, a malformed
citation count is treated as absent. Nothing here raises on odd markup.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from models import CiterRecord, PaperRecord, TargetPaper
from query_builder import base_url

RESULT_BLOCK_SELECTOR = "#gs_res_ccl_mid .gs_ri"
TITLE_SELECTOR = ".gs_rt"
AUTHORS_LINE_SELECTOR = ".gs_a"
FOOTER_LINK_SELECTOR = ".gs_fl a[href]"
TARGET_HEADER_SELECTOR = "#gs_rt_hdr h2"

# Authors come first, then " - " (or an en/em dash) and the venue text.
_AUTHORS_SEPARATOR = re.compile(r"\s+[-‒–—―]\s+")
_ID_RE = re.compile(r"(?:cluster|cites)=(\d+)")
# "Cited by 111", "引用元 222"
_CITATION_COUNT_RE = re.compile(r"\D+(\d+)")
_ELLIPSES = ("…", "...")

LOGGER = logging.getLogger(__name__)


def parse_results(html: str) -> list[PaperRecord]:
    """Parse a search-results page into records, in page order."""
    records: list[PaperRecord] = []
    for index, block in enumerate(_result_blocks(html)):
        title, url = _extract_title(block)
        if not title:
            LOGGER.debug("Skipping result block %s: no title", index)
            continue

        authors, venue = split_authors_line(_text_of(block.select_one(AUTHORS_LINE_SELECTOR)))
        cited_by_count, cited_by_link, cluster_id = _extract_cited_by(block)

        records.append(
            PaperRecord(
                title=title,
                authors=authors,
                venue=venue,
                cited_by_count=cited_by_count,
                cited_by_link=cited_by_link,
                cluster_id=cluster_id,
                url=url,
            )
        )

    LOGGER.info("Parsed %s paper records", len(records))
    return records


def parse_citers(html: str) -> list[CiterRecord]:
    """Parse a "cited by" listing into citer records, in page order."""
    records: list[CiterRecord] = []
    for index, block in enumerate(_result_blocks(html)):
        title, _ = _extract_title(block)
        if not title:
            LOGGER.debug("Skipping citer block %s: no title", index)
            continue

        authors, snippet = split_authors_line(_text_of(block.select_one(AUTHORS_LINE_SELECTOR)))
        records.append(CiterRecord(title=title, authors=authors, snippet=snippet))

    LOGGER.info("Parsed %s citer records", len(records))
    return records


def parse_target_paper(html: str) -> TargetPaper | None:
    """Return the paper a "cited by" page is about, or None if the header is missing.

    The header is either ``<h2><a href="...cites=ID">Title</a></h2>`` or a
    plain-text ``<h2>Title</h2>``; only the link form carries a cluster id.
    """
    if not html or not html.strip():
        return None

    header = BeautifulSoup(html, "html.parser").select_one(TARGET_HEADER_SELECTOR)
    if header is None:
        return None

    for child in header.children:
        if isinstance(child, Tag) and child.name == "a":
            title = _clean(child.get_text())
            if title:
                return TargetPaper(title=title, cluster_id=parse_cluster_id(child.get("href", "")))
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            title = _clean(str(child))
            if title:
                return TargetPaper(title=title)
    return None


def split_authors_line(line: str) -> tuple[tuple[str, ...], str]:
    """Split an authors/venue line into (authors, venue).

    Without a separator the whole line is venue text and authors is empty.
    """
    line = _clean(line)
    if not line:
        return (), ""

    parts = _AUTHORS_SEPARATOR.split(line, maxsplit=1)
    if len(parts) < 2:
        return (), line

    authors_part, venue = parts
    authors = []
    for name in authors_part.split(","):
        name = name.strip()
        for ellipsis in _ELLIPSES:
            name = name.removesuffix(ellipsis)
        name = name.strip()
        if name:
            authors.append(name)
    return tuple(authors), venue.strip()


def parse_cluster_id(url: str) -> int | None:
    """Extract the numeric paper id from a ``cluster=`` or ``cites=`` URL."""
    match = _ID_RE.search(url or "")
    return int(match.group(1)) if match else None


def parse_citation_count(text: str) -> int | None:
    """Extract N from a "Cited by N" anchor text; None when there is no number."""
    match = _CITATION_COUNT_RE.search(text or "")
    return int(match.group(1)) if match else None


def _result_blocks(html: str) -> list[Tag]:
    if not html or not html.strip():
        return []
    return BeautifulSoup(html, "html.parser").select(RESULT_BLOCK_SELECTOR)


def _extract_title(block: Tag) -> tuple[str, str | None]:
    """Return (title, link) for a block; title is empty when there is none."""
    heading = block.select_one(TITLE_SELECTOR)
    if heading is None:
        return "", None

    anchor = heading.find("a", recursive=False)
    if anchor is not None:
        return _clean(anchor.get_text()), anchor.get("href") or None

    # Plain-text title, minus the [BOOK] / [CITATION] badges.
    parts = []
    for child in heading.children:
        if isinstance(child, Tag):
            if child.name != "span":
                parts.append(child.get_text())
        elif not isinstance(child, Comment):
            parts.append(str(child))
    return _clean("".join(parts)), None


def _extract_cited_by(block: Tag) -> tuple[int | None, str | None, int | None]:
    """Return (count, link, cluster_id) from the block footer."""
    for anchor in block.select(FOOTER_LINK_SELECTOR):
        href = anchor["href"]
        if "cites=" not in href:
            continue

        count = parse_citation_count(anchor.get_text())
        if count is None:
            LOGGER.debug("Malformed citation count: %r", anchor.get_text())
        return count, urljoin(f"{base_url()}/", href), parse_cluster_id(href)

    return None, None, None


def _text_of(element: Tag | None) -> str:
    return element.get_text() if element is not None else ""


def _clean(text: str) -> str:
    return " ".join(text.split())
