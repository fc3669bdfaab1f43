from pathlib import Path

import pytest

from netbolt.config import AppConfig

from .fakes import ProgressRecorder


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(root_dir=tmp_path)


@pytest.fixture
def progress() -> ProgressRecorder:
    return ProgressRecorder()
