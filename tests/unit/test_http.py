from __future__ import annotations

from pathlib import Path

import pytest
import requests

from pricepaid.common.http import HttpClient, HttpRequestError, RetryConfig, RetryableHttpError


class FakeResponse:
    def __init__(self, status_code: int, chunks=(b"",)):
        self.status_code = status_code
        self._chunks = list(chunks)
        self.closed = False

    def iter_content(self, chunk_size=None):
        yield from self._chunks

    def close(self):
        self.closed = True


def test_download_writes_file(monkeypatch, tmp_path: Path):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    response = FakeResponse(200, [b"a,b\n", b"", b"c,d\n"])
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: response)

    dest = tmp_path / "raw" / "pp.csv"
    written = client.download_to_file("https://example.com/pp.csv", dest)

    assert written == 8
    assert dest.read_bytes() == b"a,b\nc,d\n"
    assert response.closed
    assert [p.name for p in dest.parent.iterdir()] == ["pp.csv"]


def test_download_retryable_status_raises_retryable_error(monkeypatch, tmp_path: Path):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: FakeResponse(503))

    with pytest.raises(RetryableHttpError):
        client.download_to_file("https://example.com/pp.csv", tmp_path / "pp.csv")
    assert not (tmp_path / "pp.csv").exists()


def test_download_client_error_is_not_retried(monkeypatch, tmp_path: Path):
    calls = []

    def fake_request(**_kwargs):
        calls.append(1)
        return FakeResponse(404)

    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0, max_wait=0))
    monkeypatch.setattr(client.session, "request", fake_request)

    with pytest.raises(HttpRequestError):
        client.download_to_file("https://example.com/pp.csv", tmp_path / "pp.csv")
    assert len(calls) == 1


def test_download_retries_connection_errors(monkeypatch, tmp_path: Path):
    outcomes = [requests.ConnectionError("reset"), FakeResponse(200, [b"ok"])]

    def fake_request(**_kwargs):
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = HttpClient(retry=RetryConfig(max_attempts=2, multiplier=0, max_wait=0))
    monkeypatch.setattr(client.session, "request", fake_request)

    assert client.download_to_file("https://example.com/pp.csv", tmp_path / "pp.csv") == 2
    assert (tmp_path / "pp.csv").read_bytes() == b"ok"


def test_from_config_reads_timeouts_and_attempts():
    client = HttpClient.from_config({"connect_timeout": 3, "read_timeout": 7, "max_attempts": 2})
    assert client.timeout.connect == 3.0
    assert client.timeout.read == 7.0
    assert client.retry.max_attempts == 2
    client.close()


class InterruptedResponse(FakeResponse):
    def iter_content(self, chunk_size=None):
        yield b"a,b\n"
        raise requests.exceptions.ChunkedEncodingError("connection reset mid-body")


def test_download_retries_body_interrupted_mid_stream(monkeypatch, tmp_path: Path):
    outcomes = [InterruptedResponse(200), FakeResponse(200, [b"a,b\n", b"c,d\n"])]
    client = HttpClient(retry=RetryConfig(max_attempts=2, multiplier=0, max_wait=0))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: outcomes.pop(0))

    dest = tmp_path / "pp.csv"
    assert client.download_to_file("https://example.com/pp.csv", dest) == 8
    assert dest.read_bytes() == b"a,b\nc,d\n"
    assert [p.name for p in tmp_path.iterdir()] == ["pp.csv"]


def test_download_interrupted_on_last_attempt_is_http_error(monkeypatch, tmp_path: Path):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    monkeypatch.setattr(client.session, "request", lambda **_kwargs: InterruptedResponse(200))

    with pytest.raises(RetryableHttpError) as excinfo:
        client.download_to_file("https://example.com/pp.csv", tmp_path / "pp.csv")
    assert excinfo.value.error_code == "HTTP_ERROR"
    assert list(tmp_path.iterdir()) == []
