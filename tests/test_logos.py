import logging
import threading

import pytest
import requests

from logo_fetcher.errors import HttpStatusError, StorageError, TransportError
from logo_fetcher.logos import FetchStatus, fetch_and_store, logo_path, logo_url


class _DummyResponse:
    def __init__(self, *, status_code: int, content: bytes = b""):
        self.status_code = int(status_code)
        self.content = content


class _BrokenBodyResponse:
    status_code = 200

    @property
    def content(self) -> bytes:
        raise requests.exceptions.ChunkedEncodingError("connection dropped mid-body")


class _FakeClient:
    def __init__(self, response=None, exc: Exception | None = None):
        self._response = response
        self._exc = exc
        self.calls: list[tuple[str, float | None]] = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self._exc is not None:
            raise self._exc
        return self._response


def _fetch(client, output_dir, *, force=False, permits=None, timeout=None):
    return fetch_and_store(
        "AAPL",
        permits=permits or threading.BoundedSemaphore(1),
        output_dir=str(output_dir),
        force=force,
        client=client,
        timeout=timeout,
    )


def test_logo_url_and_path():
    assert logo_url("BRKB") == "https://logos.stockanalysis.com/brkb.svg"
    assert logo_path("out", "BRKB").endswith("BRKB.svg")


def test_success_writes_body_verbatim(tmp_path):
    client = _FakeClient(_DummyResponse(status_code=200, content=b"<svg>aapl</svg>"))
    out = _fetch(client, tmp_path, timeout=5.0)
    assert out.status is FetchStatus.SUCCESS
    assert out.ok
    assert (tmp_path / "AAPL.svg").read_bytes() == b"<svg>aapl</svg>"
    assert client.calls == [("https://logos.stockanalysis.com/aapl.svg", 5.0)]


def test_existing_logo_is_skipped_without_request(tmp_path):
    (tmp_path / "AAPL.svg").write_bytes(b"cached")
    client = _FakeClient(_DummyResponse(status_code=200, content=b"new"))
    permits = threading.BoundedSemaphore(1)
    permits.acquire()  # a skip must not need a permit

    out = _fetch(client, tmp_path, permits=permits)
    assert out.status is FetchStatus.SKIPPED
    assert client.calls == []
    assert (tmp_path / "AAPL.svg").read_bytes() == b"cached"


def test_force_refetches_existing_logo(tmp_path):
    (tmp_path / "AAPL.svg").write_bytes(b"cached")
    client = _FakeClient(_DummyResponse(status_code=200, content=b"new"))
    out = _fetch(client, tmp_path, force=True)
    assert out.status is FetchStatus.SUCCESS
    assert len(client.calls) == 1
    assert (tmp_path / "AAPL.svg").read_bytes() == b"new"


def test_transport_error_is_failed_and_logged(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    client = _FakeClient(exc=requests.ConnectionError("refused"))
    out = _fetch(client, tmp_path)
    assert out.status is FetchStatus.FAILED
    assert isinstance(out.error, TransportError)
    assert not (tmp_path / "AAPL.svg").exists()
    msg = caplog.records[-1].getMessage()
    assert "AAPL" in msg and "https://logos.stockanalysis.com/aapl.svg" in msg and "refused" in msg


def test_non_success_status_is_failed(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    client = _FakeClient(_DummyResponse(status_code=404, content=b"not found"))
    out = _fetch(client, tmp_path)
    assert out.status is FetchStatus.FAILED
    assert isinstance(out.error, HttpStatusError)
    assert out.error.status_code == 404
    assert not (tmp_path / "AAPL.svg").exists()
    assert "404" in caplog.records[-1].getMessage()


def test_body_read_error_is_transport_error(tmp_path):
    out = _fetch(_FakeClient(_BrokenBodyResponse()), tmp_path)
    assert out.status is FetchStatus.FAILED
    assert isinstance(out.error, TransportError)


def test_write_error_is_storage_error(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x")
    client = _FakeClient(_DummyResponse(status_code=200, content=b"<svg/>"))
    out = _fetch(client, not_a_dir)
    assert out.status is FetchStatus.FAILED
    assert isinstance(out.error, StorageError)
    assert "failed to write logo for 'AAPL'" in caplog.records[-1].getMessage()


@pytest.mark.parametrize(
    "client",
    [
        _FakeClient(exc=requests.Timeout("slow")),
        _FakeClient(_DummyResponse(status_code=500)),
        _FakeClient(_DummyResponse(status_code=200, content=b"<svg/>")),
    ],
)
def test_permit_released_on_every_path(tmp_path, client):
    permits = threading.BoundedSemaphore(1)
    _fetch(client, tmp_path, permits=permits)
    assert permits.acquire(blocking=False)
