"""Upload probe: POST a synthetic payload and time it."""

from __future__ import annotations

import logging
import time
from typing import Callable

import requests

from ..config import AppConfig
from .models import ProbeOutcome, TimingError, TransferMeasurement
from .progress import NullProgress, ProgressFactory, ProgressIndicator
from .transport import Transport

LOGGER = logging.getLogger(__name__)

PROBE_NAME = "upload"
UPLOAD_FAILED = "Upload failed"


def _simulate_progress(
    progress: ProgressIndicator,
    total: int,
    segment_size: int,
    delay_seconds: float,
    sleep: Callable[[float], None],
) -> None:
    # The transport exposes no send-side progress, so the bar is paced by hand.
    sent = 0
    while sent < total:
        sent = min(sent + segment_size, total)
        progress.update_to(sent)
        if delay_seconds > 0:
            sleep(delay_seconds)


def measure_upload(
    config: AppConfig,
    transport: Transport,
    progress_factory: ProgressFactory = NullProgress,
    clock: Callable[[], float] = time.perf_counter,
    sleep: Callable[[float], None] = time.sleep,
) -> ProbeOutcome:
    """POST ``payload_size`` zero bytes to the configured endpoint.

    Only the POST round trip is timed unless ``upload.time_pacing`` is
    set, in which case the cosmetic pacing loop is included as well.
    """

    settings = config.upload
    payload = bytes(settings.payload_size)
    progress = progress_factory(len(payload), "Upload")
    # Pacing is purely visual; skip it when nothing is rendered.
    delay_seconds = 0.0 if isinstance(progress, NullProgress) else settings.pacing_delay_ms / 1000.0
    try:
        started_at = clock() if settings.time_pacing else None
        _simulate_progress(
            progress,
            len(payload),
            settings.segment_size,
            delay_seconds,
            sleep,
        )
        if started_at is None:
            started_at = clock()
        status = transport.post(settings.url, payload)
        finished_at = clock()

        if not 200 <= status < 300:
            LOGGER.warning("Upload endpoint %s answered HTTP %s", settings.url, status)
            raise RuntimeError(UPLOAD_FAILED)

        measurement = TransferMeasurement(started_at, finished_at, len(payload))
        outcome = ProbeOutcome.success(PROBE_NAME, measurement)
    except (requests.RequestException, RuntimeError, TimingError) as exc:
        LOGGER.warning("Upload probe against %s failed: %s", settings.url, exc)
        return ProbeOutcome.failure(PROBE_NAME, str(exc))
    finally:
        progress.close()

    LOGGER.info(
        "Uploaded %d bytes in %.3fs (%.2f Mbps)",
        measurement.bytes_transferred,
        measurement.elapsed_seconds,
        outcome.speed_mbps,
    )
    return outcome
