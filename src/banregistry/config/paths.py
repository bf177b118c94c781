from __future__ import annotations

import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[3]
DATA_DIR = Path(os.getenv("BANREGISTRY_DATA_DIR", PROJECT_ROOT / "data")).expanduser()

LOGS_DIR = DATA_DIR / "logs"
COG_DIR = DATA_DIR / "cog"


def ensure_directories(paths) -> None:
    """Create runtime directories if they do not exist yet."""
    for path in paths:
        Path(path).mkdir(parents=True, exist_ok=True)


__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR",
    "LOGS_DIR",
    "COG_DIR",
    "ensure_directories",
]
