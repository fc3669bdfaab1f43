"""Application bootstrap helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .measurements.manager import MeasurementManager
from .measurements.transport import RequestsTransport

__version__ = "1.0.0"


class ApplicationContext:
    """Holds the configured transport and measurement manager for one run."""

    def __init__(self, config: AppConfig):
        self.config = config
        configure_logging(config)
        self.transport = RequestsTransport(
            timeout=config.http.timeout,
            user_agent=f"{config.http.user_agent}/{__version__}",
            chunk_size=config.download.chunk_size,
        )
        self.measurements = MeasurementManager(config, self.transport)

    def close(self) -> None:
        self.transport.close()


def bootstrap(
    config_path: Optional[str] = None,
    verbose: bool = False,
    show_progress: Optional[bool] = None,
) -> ApplicationContext:
    """Load configuration, apply command line overrides and wire dependencies."""

    config_file = Path(config_path).resolve() if config_path else None
    config = load_config(str(config_file)) if config_file else load_config()
    if verbose:
        config.logging.level = "DEBUG"
    if show_progress is not None:
        config.progress.enabled = show_progress
    return ApplicationContext(config)
