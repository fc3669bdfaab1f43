"""Measurement orchestration and result reporting."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..config import AppConfig
from .download_runner import measure_download
from .models import ProbeOutcome
from .progress import ProgressFactory, create_progress
from .transport import Transport
from .upload_runner import measure_upload

LOGGER = logging.getLogger(__name__)


@dataclass
class SpeedReport:
    download: ProbeOutcome
    upload: ProbeOutcome

    @property
    def exit_code(self) -> int:
        return 0 if self.download.ok and self.upload.ok else 1

    def lines(self) -> List[str]:
        return [
            _format_outcome("Download", self.download),
            _format_outcome("Upload", self.upload),
        ]


def _format_outcome(label: str, outcome: ProbeOutcome) -> str:
    if outcome.ok:
        return f"{label} Speed: {outcome.speed_mbps:.2f} Mbps"
    return f"{label} Speed Test Failed: {outcome.error}"


class MeasurementManager:
    def __init__(
        self,
        config: AppConfig,
        transport: Transport,
        progress_factory: Optional[ProgressFactory] = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.transport = transport
        self.progress_factory = progress_factory or create_progress(config.progress.enabled)
        self.clock = clock
        self.sleep = sleep

    def _guarded(self, probe: str, runner: Callable[[], ProbeOutcome]) -> ProbeOutcome:
        try:
            return runner()
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.exception("Unexpected error during %s probe", probe)
            return ProbeOutcome.failure(probe, str(exc))

    def run_download(self) -> ProbeOutcome:
        return self._guarded(
            "download",
            lambda: measure_download(self.config, self.transport, self.progress_factory, self.clock),
        )

    def run_upload(self) -> ProbeOutcome:
        return self._guarded(
            "upload",
            lambda: measure_upload(
                self.config, self.transport, self.progress_factory, self.clock, self.sleep
            ),
        )

    def run(self) -> SpeedReport:
        download = self.run_download()
        upload = self.run_upload()
        LOGGER.info(
            "Run finished (download ok=%s, upload ok=%s)", download.ok, upload.ok
        )
        return SpeedReport(download=download, upload=upload)
