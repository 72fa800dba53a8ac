"""Document source: one HTTP GET against the engine, or a local HTML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import requests
from bs4 import UnicodeDammit

DEFAULT_TIMEOUT_SECONDS = "30"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

LOGGER = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Network failure or non-success response while fetching a page."""


class LocalReadError(RuntimeError):
    """A local HTML file could not be read."""


def fetch(url: str) -> str:
    """Fetch ``url`` with a single GET and return the body as text.

    There is no retry: repeated requests get the client blocked by the
    engine. A blocked response usually still comes back as 200 with an
    unexpected body, which parses to zero records.
    """
    timeout = float(os.getenv("SCHOLAR_REQUEST_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
    headers = {
        "User-Agent": os.getenv("SCHOLAR_USER_AGENT", DEFAULT_USER_AGENT),
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "en-US,en;q=0.9",
    }

    LOGGER.info("Fetching %s", url)
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    LOGGER.info("Fetched %s: status=%s bytes=%s", url, response.status_code, len(response.content))
    return response.text


def read_local(path: str | Path) -> str:
    """Read a saved HTML page from disk.

    UTF-8 is tried first, then the page's declared or detected encoding.
    Undecodable bytes are replaced rather than treated as an error.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise LocalReadError(f"Failed to read HTML file {path}: {exc}") from exc

    dammit = UnicodeDammit(data, ["utf-8"], is_html=True)
    text = dammit.unicode_markup
    if text is None:
        text = data.decode("utf-8", errors="replace")

    LOGGER.info("Read %s characters from %s (encoding=%s)", len(text), path, dammit.original_encoding)
    return text
