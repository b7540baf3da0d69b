"""
oraculo/utils/config.py
Load env vars and the engine parameter JSON file.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = Path(os.getenv("ORACULO_CONFIG_DIR") or ROOT / "config")

# ── Logging ───────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("ORACULO_LOG_DIR") or "logs")
LOG_MAX_BYTES: int = int(os.getenv("ORACULO_LOG_MAX_BYTES", str(10 * 1024 * 1024)))
LOG_BACKUP_COUNT: int = int(os.getenv("ORACULO_LOG_BACKUPS", "5"))

# ── Engine ────────────────────────────────────────────────────────
ENGINE_CONFIG_FILE: str = os.getenv("ORACULO_ENGINE_CONFIG", "engine_params.json")
DEFAULT_ENTROPY: float = float(os.getenv("ORACULO_DEFAULT_ENTROPY", "0.5"))
RANDOM_SEED: int | None = int(os.environ["ORACULO_SEED"]) if os.getenv("ORACULO_SEED") else None

TIER_NAMES: tuple[str, ...] = ("hundreds", "tens", "elite_tens", "super_tens")

_engine_config_cache: dict[str, Any] = {}


def get_engine_config(filename: str | None = None) -> dict[str, Any]:
    """Load and cache the engine config JSON."""
    filename = filename or ENGINE_CONFIG_FILE
    if filename in _engine_config_cache:
        return _engine_config_cache[filename]
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)

    missing = [t for t in TIER_NAMES if t not in config["generation"]["tiers"]]
    if missing:
        raise ValueError(f"Engine config {filename} is missing tiers: {missing}")

    _engine_config_cache[filename] = config
    return config


def get_collapse_params(filename: str | None = None) -> dict[str, Any]:
    return get_engine_config(filename)["collapse"]


def get_analysis_params(filename: str | None = None) -> dict[str, Any]:
    return get_engine_config(filename)["analysis"]


def get_parser_params(filename: str | None = None) -> dict[str, Any]:
    return get_engine_config(filename)["parser"]


def get_generation_params(filename: str | None = None) -> dict[str, Any]:
    """Return row/candidate/tier settings for the generation cycle."""
    return get_engine_config(filename)["generation"]
