"""
Utilities for loading table view layout configuration.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "views.yaml"


@lru_cache()
def load_view_config() -> Dict[str, Any]:
    if not CONFIG_PATH.exists():
        return {}
    with open(CONFIG_PATH, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def get_view_column_config(view: str) -> List[Dict[str, Any]]:
    views = load_view_config().get("views") or {}
    view_cfg = views.get(view) or {}
    return list(view_cfg.get("columns") or [])
