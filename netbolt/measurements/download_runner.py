"""Download probe: stream a large file and time it."""

from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from ..config import AppConfig
from .models import ProbeOutcome, TimingError, TransferMeasurement
from .progress import NullProgress, ProgressFactory
from .transport import Transport

LOGGER = logging.getLogger(__name__)

PROBE_NAME = "download"


def measure_download(
    config: AppConfig,
    transport: Transport,
    progress_factory: ProgressFactory = NullProgress,
    clock: Callable[[], float] = time.perf_counter,
) -> ProbeOutcome:
    """GET the configured file, counting bytes as they arrive.

    The declared Content-Length (or the nominal size) only scales the
    progress bar; speed is computed from the bytes actually received.
    An empty body is a failure rather than a 0 Mbps result.
    """

    url = config.download.url
    progress = None
    try:
        started_at = clock()
        with transport.stream_get(url) as response:
            total = response.content_length or config.download.nominal_size
            progress = progress_factory(total, "Download")
            received = 0
            for chunk in response.chunks:
                received += len(chunk)
                progress.update_to(received)
            finished_at = clock()

        if received == 0:
            raise RuntimeError("Download returned an empty body")
        measurement = TransferMeasurement(started_at, finished_at, received)
        outcome = ProbeOutcome.success(PROBE_NAME, measurement)
    except (requests.RequestException, RuntimeError, TimingError) as exc:
        LOGGER.warning("Download probe against %s failed: %s", url, exc)
        return ProbeOutcome.failure(PROBE_NAME, str(exc))
    finally:
        if progress is not None:
            progress.close()

    LOGGER.info(
        "Downloaded %d bytes in %.3fs (%.2f Mbps)",
        measurement.bytes_transferred,
        measurement.elapsed_seconds,
        outcome.speed_mbps,
    )
    return outcome
