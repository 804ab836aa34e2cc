"""HTTP client with retries and timeouts for bulk file downloads."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from pricepaid.common.constants import USER_AGENT
from pricepaid.common.errors import StageError
from pricepaid.common.fs import ensure_dir

RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}
CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 300.0


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 5
    multiplier: float = 1.0
    max_wait: float = 30.0


class HttpRequestError(StageError):
    error_code = "HTTP_ERROR"


class RetryableHttpError(HttpRequestError):
    pass


class HttpClient:
    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.session = requests.Session()

    @classmethod
    def from_config(cls, http_cfg: dict) -> "HttpClient":
        return cls(
            timeout=TimeoutConfig(
                connect=float(http_cfg["connect_timeout"]),
                read=float(http_cfg["read_timeout"]),
            ),
            retry=RetryConfig(max_attempts=int(http_cfg["max_attempts"])),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": USER_AGENT, "Accept": "text/csv, */*"}

    def _raise_for_status_or_retry(self, response: requests.Response) -> None:
        status = response.status_code
        if status in RETRYABLE_STATUS_CODES:
            raise RetryableHttpError(f"Retryable HTTP status: {status}")
        if status >= 400:
            raise HttpRequestError(f"HTTP status: {status}")

    def _download(self, url: str, dest: Path) -> int:
        try:
            response = self.session.request(
                method="GET",
                url=url,
                headers=self._headers(),
                timeout=(self.timeout.connect, self.timeout.read),
                stream=True,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise RetryableHttpError(f"Connection failed for {url}: {exc}") from exc

        written = 0
        try:
            self._raise_for_status_or_retry(response)
            ensure_dir(dest.parent)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{dest.name}.", suffix=".part", dir=dest.parent)
            tmp_path = Path(tmp_name)
            try:
                with os.fdopen(fd, "wb") as f:
                    try:
                        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                            if chunk:
                                f.write(chunk)
                                written += len(chunk)
                    except (
                        requests.ConnectionError,
                        requests.exceptions.ChunkedEncodingError,
                        requests.Timeout,
                    ) as exc:
                        raise RetryableHttpError(f"Download interrupted for {url} after {written} bytes: {exc}") from exc
                os.replace(tmp_path, dest)
            except BaseException:
                tmp_path.unlink(missing_ok=True)
                raise
        finally:
            response.close()
        return written

    def download_to_file(self, url: str, dest: Path) -> int:
        """Stream ``url`` into ``dest`` and return the number of bytes written."""

        @retry(
            stop=stop_after_attempt(self.retry.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=1.0,
            ),
            retry=retry_if_exception_type(RetryableHttpError),
            reraise=True,
        )
        def _wrapped() -> int:
            return self._download(url, dest)

        return _wrapped()
