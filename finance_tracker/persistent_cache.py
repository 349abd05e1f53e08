"""Lightweight persistent cache for user-facing preferences/filters."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .config import CACHE_PATH

logger = logging.getLogger(__name__)

DEFAULT_CACHE: Dict[str, Any] = {
    'selected_month': '',
    'account_type_filter': 'all',
}


def load_cache(path: Path | None = None) -> Dict[str, Any]:
    """Read cached preferences; unknown keys are dropped and bad files fall back to defaults."""
    target = path or CACHE_PATH
    if not target.exists():
        return DEFAULT_CACHE.copy()
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable preference cache %s: %s", target, exc)
        return DEFAULT_CACHE.copy()
    if not isinstance(data, dict):
        return DEFAULT_CACHE.copy()
    merged = DEFAULT_CACHE.copy()
    merged.update({k: v for k, v in data.items() if k in DEFAULT_CACHE})
    return merged


def save_cache(cache: Dict[str, Any], path: Path | None = None) -> None:
    target = path or CACHE_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open('w', encoding='utf-8') as handle:
        json.dump({k: v for k, v in cache.items() if k in DEFAULT_CACHE}, handle, indent=2, sort_keys=True)


def update_cache(path: Path | None = None, **values: Any) -> Dict[str, Any]:
    """Merge ``values`` into the stored cache, writing only when something changed."""
    cache = load_cache(path)
    changed = {k: v for k, v in values.items() if k in DEFAULT_CACHE and cache.get(k) != v}
    if changed:
        cache.update(changed)
        save_cache(cache, path)
    return cache
