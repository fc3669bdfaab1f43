"""Shared dataclasses and throughput arithmetic for measurements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

BYTES_PER_MEGABYTE = 1024 * 1024


class TimingError(ValueError):
    """Raised when a transfer interval is too short to measure."""


def elapsed_seconds(started_at: float, finished_at: float) -> float:
    """Elapsed wall-clock time at millisecond resolution."""
    return round(finished_at - started_at, 3)


def throughput_mbps(byte_count: int, elapsed: float) -> float:
    """Convert a byte count over ``elapsed`` seconds into megabits per second."""
    if elapsed <= 0:
        raise TimingError(f"Transfer finished too quickly to time ({elapsed:.3f}s elapsed)")
    return (byte_count / BYTES_PER_MEGABYTE) * 8 / elapsed


@dataclass(frozen=True)
class TransferMeasurement:
    started_at: float
    finished_at: float
    bytes_transferred: int

    @property
    def elapsed_seconds(self) -> float:
        return elapsed_seconds(self.started_at, self.finished_at)

    @property
    def speed_mbps(self) -> float:
        return throughput_mbps(self.bytes_transferred, self.elapsed_seconds)


@dataclass(frozen=True)
class ProbeOutcome:
    probe: str
    speed_mbps: Optional[float] = None
    error: Optional[str] = None
    measurement: Optional[TransferMeasurement] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, probe: str, measurement: TransferMeasurement) -> "ProbeOutcome":
        return cls(probe=probe, speed_mbps=measurement.speed_mbps, measurement=measurement)

    @classmethod
    def failure(cls, probe: str, error: str) -> "ProbeOutcome":
        return cls(probe=probe, error=error or "Unknown error")
