"""Console progress indicators for transfers."""

from __future__ import annotations

from typing import IO, Callable, Optional, Protocol

from tqdm import tqdm


class ProgressIndicator(Protocol):
    def update_to(self, position: int) -> None:
        ...

    def close(self) -> None:
        ...


class TransferProgress:
    """tqdm bar showing bytes done/total, elapsed time and ETA."""

    def __init__(self, total: Optional[int], description: str, file: Optional[IO[str]] = None):
        self._bar = tqdm(
            total=total,
            desc=description,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            leave=True,
            file=file,
        )

    @property
    def position(self) -> int:
        return self._bar.n

    @property
    def closed(self) -> bool:
        return self._bar.disable

    def update_to(self, position: int) -> None:
        delta = position - self._bar.n
        if delta > 0:
            self._bar.update(delta)

    def close(self) -> None:
        self._bar.close()


class NullProgress:
    """Progress indicator that renders nothing."""

    def __init__(self, total: Optional[int] = None, description: str = ""):
        self.total = total
        self.description = description

    def update_to(self, position: int) -> None:
        pass

    def close(self) -> None:
        pass


ProgressFactory = Callable[[Optional[int], str], ProgressIndicator]


def create_progress(enabled: bool) -> ProgressFactory:
    return TransferProgress if enabled else NullProgress
