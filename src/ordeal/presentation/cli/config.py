"""CLI configuration helpers for per-user file locations."""
from __future__ import annotations

import os
from pathlib import Path


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "WildernessOrdeal"
        return Path.home() / "WildernessOrdeal"
    return Path.home() / ".config" / "wilderness_ordeal"


def get_knowledge_path() -> Path:
    """Return the per-user knowledge ledger path."""
    return get_user_data_dir() / "knowledge.json"
