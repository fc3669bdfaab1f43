"""Configuration loading helpers for the network speed probe."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

import yaml

DEFAULT_DOWNLOAD_URL = "https://speed.cloudflare.com/__down?bytes=100000000"
DEFAULT_UPLOAD_URL = "https://postman-echo.com/post"


@dataclass
class DownloadConfig:
    url: str = DEFAULT_DOWNLOAD_URL
    # Progress scaling only, used when the server omits Content-Length
    nominal_size: int = 100_000_000
    chunk_size: int = 65536

    def __post_init__(self) -> None:
        if self.nominal_size <= 0:
            raise ValueError("download.nominal_size must be positive")
        if self.chunk_size <= 0:
            raise ValueError("download.chunk_size must be positive")


@dataclass
class UploadConfig:
    url: str = DEFAULT_UPLOAD_URL
    payload_size: int = 10 * 1024 * 1024
    segment_size: int = 1024 * 1024
    pacing_delay_ms: int = 100
    time_pacing: bool = False

    def __post_init__(self) -> None:
        if self.payload_size <= 0:
            raise ValueError("upload.payload_size must be positive")
        if self.segment_size <= 0:
            raise ValueError("upload.segment_size must be positive")
        if self.pacing_delay_ms < 0:
            raise ValueError("upload.pacing_delay_ms cannot be negative")


@dataclass
class HttpConfig:
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    user_agent: str = "netbolt"

    @property
    def timeout(self) -> Tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class ProgressConfig:
    enabled: bool = True


@dataclass
class PathsConfig:
    logs_dir: Optional[Path] = None


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class AppConfig:
    root_dir: Path
    download: DownloadConfig = field(default_factory=DownloadConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _as_path(base: Path, maybe_path: Optional[str]) -> Optional[Path]:
    if not maybe_path:
        return None
    path = (base / maybe_path).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML, falling back to built-in defaults.

    An explicit ``path`` must exist. Without one, ``config.yaml`` in the
    working directory is used when present.
    """

    if path:
        source_path = Path(path).resolve()
        if not source_path.exists():
            raise FileNotFoundError(f"Missing configuration file at {source_path}")
    else:
        source_path = Path.cwd() / "config.yaml"
        if not source_path.exists():
            return AppConfig(root_dir=Path.cwd())

    root_dir = source_path.parent
    with source_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    paths_data = data.get("paths", {})

    return AppConfig(
        root_dir=root_dir,
        download=DownloadConfig(**data.get("download", {})),
        upload=UploadConfig(**data.get("upload", {})),
        http=HttpConfig(**data.get("http", {})),
        progress=ProgressConfig(**data.get("progress", {})),
        paths=PathsConfig(logs_dir=_as_path(root_dir, paths_data.get("logs_dir"))),
        logging=LoggingConfig(**data.get("logging", {})),
    )
