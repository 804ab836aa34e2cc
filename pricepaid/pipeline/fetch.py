"""Download the price paid source file."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from pricepaid.common.http import HttpClient
from pricepaid.common.logging import log_event


def source_path(pipeline_config: dict, data_dir: Path) -> Path:
    return data_dir / "raw" / pipeline_config["source"]["filename"]


def run_fetch(
    pipeline_config: dict,
    dest: Path,
    logger: logging.Logger,
    run_id: str,
    *,
    force: bool = False,
    client: HttpClient | None = None,
) -> dict:
    url = pipeline_config["source"]["url"]
    if dest.exists() and not force:
        log_event(
            logger,
            f"source already present at {dest}",
            run_id=run_id,
            stage="fetch",
            source=url,
            event="DOWNLOAD_SKIPPED",
            status="ok",
        )
        return {"path": str(dest), "downloaded": False, "bytes": dest.stat().st_size}

    started = time.monotonic()
    owned = client is None
    http = client or HttpClient.from_config(pipeline_config["http"])
    try:
        written = http.download_to_file(url, dest)
    finally:
        if owned:
            http.close()

    log_event(
        logger,
        f"downloaded {written} bytes to {dest}",
        run_id=run_id,
        stage="fetch",
        source=url,
        event="DOWNLOAD_DONE",
        status="ok",
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return {"path": str(dest), "downloaded": True, "bytes": written}
