from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from scholar_source import FetchError, LocalReadError, fetch, read_local


def _mock_resp(text: str, status_code: int = 200) -> MagicMock:
    mock = MagicMock()
    mock.text = text
    mock.content = text.encode()
    mock.status_code = status_code
    return mock


def test_fetch_returns_body_text() -> None:
    with patch("scholar_source.requests.get", return_value=_mock_resp("<html></html>")) as mock_get:
        body = fetch("https://scholar.google.com/scholar?q=x")

    assert body == "<html></html>"
    assert mock_get.call_count == 1
    assert mock_get.call_args.args == ("https://scholar.google.com/scholar?q=x",)
    assert "User-Agent" in mock_get.call_args.kwargs["headers"]


def test_fetch_uses_configured_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHOLAR_REQUEST_TIMEOUT", "7.5")

    with patch("scholar_source.requests.get", return_value=_mock_resp("")) as mock_get:
        fetch("https://scholar.google.com/scholar?q=x")

    assert mock_get.call_args.kwargs["timeout"] == 7.5


def test_fetch_network_error_raises_fetch_error() -> None:
    with patch("scholar_source.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(FetchError) as excinfo:
            fetch("https://scholar.google.com/scholar?q=x")

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_fetch_http_error_raises_fetch_error_without_retry() -> None:
    resp = _mock_resp("blocked", status_code=429)
    resp.raise_for_status.side_effect = requests.HTTPError("429 Too Many Requests")

    with patch("scholar_source.requests.get", return_value=resp) as mock_get:
        with pytest.raises(FetchError):
            fetch("https://scholar.google.com/scholar?q=x")

    assert mock_get.call_count == 1


def test_read_local(tmp_path: Path) -> None:
    page = tmp_path / "results.html"
    page.write_text("<html>引用元</html>", encoding="utf-8")

    assert read_local(page) == "<html>引用元</html>"
    assert read_local(str(page)) == "<html>引用元</html>"


def test_read_local_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LocalReadError):
        read_local(tmp_path / "missing.html")


def test_read_local_directory(tmp_path: Path) -> None:
    with pytest.raises(LocalReadError):
        read_local(tmp_path)


def test_read_local_latin1_with_declared_charset(tmp_path: Path) -> None:
    page = tmp_path / "results.html"
    page.write_bytes('<html><head><meta charset="iso-8859-1"></head><body>Café</body></html>'.encode("latin-1"))

    assert "Café" in read_local(page)


def test_read_local_undeclared_non_utf8_does_not_raise(tmp_path: Path) -> None:
    page = tmp_path / "results.html"
    page.write_bytes(b"<html><body>Caf\xe9 au lait</body></html>")

    text = read_local(page)
    assert "Caf" in text
    assert "au lait" in text
