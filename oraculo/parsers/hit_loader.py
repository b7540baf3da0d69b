"""
oraculo/parsers/hit_loader.py
Read HitRecords from JSON: a bare list, or the {"hits": [...]} object
written by scripts/02_check_hits.py.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from oraculo.models.records import HitRecord
from oraculo.utils.logger import get_logger

log = get_logger("parser.hits")


def hits_from_payload(data: Any) -> list[HitRecord]:
    if isinstance(data, dict):
        if "hits" not in data:
            raise ValueError(f"Hits object has no 'hits' key (keys: {sorted(data)})")
        data = data["hits"]
    if not isinstance(data, list):
        raise ValueError(f"Hits payload must be a list, got {type(data).__name__}")
    return [HitRecord.from_dict(item) for item in data]


def load_hits(path: str | Path) -> list[HitRecord]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hits file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    hits = hits_from_payload(data)
    log.info(f"Loaded {len(hits)} hit records from {path}")
    return hits
