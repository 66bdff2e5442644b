from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import yaml

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def load_cfg(path: Optional[str] = None) -> Dict[str, Any]:
    path = path or os.environ.get("LEXDRAFT_CONFIG") or DEFAULT_CONFIG_PATH
    with open(Path(path), "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def setup_logging(cfg: Dict[str, Any]) -> None:
    level = str((cfg.get("logging") or {}).get("level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
