from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .store import STORAGE_KEY

DEFAULT_STATE_DIR = Path.home() / ".xhs_notes"


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    if not value or not value.strip():
        return None
    return Path(value.strip()).expanduser()


@dataclass
class CollectorConfig:
    state_dir: Path = DEFAULT_STATE_DIR
    storage_key: str = STORAGE_KEY
    retain_tags: bool = False
    export_dir: Path = Path(".")

    @classmethod
    def from_env(cls) -> CollectorConfig:
        """Defaults overridden by ``XHS_NOTES_HOME`` / ``XHS_NOTES_EXPORT_DIR``."""

        cfg = cls()
        state_dir = _env_path("XHS_NOTES_HOME")
        if state_dir is not None:
            cfg.state_dir = state_dir
        export_dir = _env_path("XHS_NOTES_EXPORT_DIR")
        if export_dir is not None:
            cfg.export_dir = export_dir
        return cfg
