"""Download and upload throughput probes."""

from .download_runner import measure_download
from .manager import MeasurementManager, SpeedReport
from .models import ProbeOutcome, TimingError, TransferMeasurement, throughput_mbps
from .upload_runner import measure_upload

__all__ = [
    "MeasurementManager",
    "ProbeOutcome",
    "SpeedReport",
    "TimingError",
    "TransferMeasurement",
    "measure_download",
    "measure_upload",
    "throughput_mbps",
]
