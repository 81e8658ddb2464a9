from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

import requests
from django.conf import settings
from django.core.cache import cache

from wr_history.cache_keys import CATALOG_KEY, DEFAULT_TTL_SECONDS, source_text_key
from wr_history.services.csv_decoder import CsvRow, decode_csv

logger = logging.getLogger(__name__)


def _cache_ttl() -> int:
    return int(getattr(settings, "WR_HISTORY_CACHE_TTL", DEFAULT_TTL_SECONDS))


def _remote_base_url() -> str:
    return str(getattr(settings, "WR_HISTORY_REMOTE_BASE_URL", "") or "").rstrip("/")


def _read_local(relative_path: str) -> str | None:
    root = Path(getattr(settings, "WR_HISTORY_DATA_ROOT", "public")).resolve()
    path = (root / relative_path.lstrip("/")).resolve()
    if root not in path.parents:
        logger.warning("Refusing to read %s outside of %s", relative_path, root)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s: %s", path, exc)
        return None


def _read_remote(base_url: str, relative_path: str) -> str | None:
    url = f"{base_url}/{relative_path.lstrip('/')}"
    timeout = int(getattr(settings, "WR_HISTORY_FETCH_TIMEOUT", 30))
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.RequestException as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
        return None
    r.encoding = "utf-8"
    return r.text


def source_location(relative_path: str) -> str:
    base_url = _remote_base_url()
    if base_url:
        return f"{base_url}/{relative_path.lstrip('/')}"
    root = Path(getattr(settings, "WR_HISTORY_DATA_ROOT", "public"))
    return str(root / relative_path.lstrip("/"))


def fetch_text(relative_path: str | None) -> str | None:
    """
    Text of a data file relative to the data root, from disk or the remote
    host. ``None`` when it cannot be fetched; failures are not cached.
    """
    if not relative_path or not isinstance(relative_path, str):
        return None
    key = source_text_key(source_location(relative_path))
    cached = cache.get(key)
    if cached is not None:
        return cached

    base_url = _remote_base_url()
    text = _read_remote(base_url, relative_path) if base_url else _read_local(relative_path)
    if text is not None:
        cache.set(key, text, _cache_ttl())
    return text


def fetch_catalog() -> dict | None:
    cached = cache.get(CATALOG_KEY)
    if cached is not None:
        return cached

    text = fetch_text(getattr(settings, "WR_HISTORY_INDEX_PATH", "data/index.json"))
    if text is None:
        return None
    try:
        catalog = json.loads(text)
    except ValueError as exc:
        logger.warning("Catalog is not valid JSON: %s", exc)
        return None
    if not isinstance(catalog, dict) or not isinstance(catalog.get("maps"), list):
        logger.warning("Catalog has no maps list")
        return None
    maps = [
        entry
        for entry in catalog["maps"]
        if isinstance(entry, dict) and isinstance(entry.get("map"), str) and entry["map"]
    ]
    if len(maps) != len(catalog["maps"]):
        logger.warning("Dropped %s malformed catalog entries", len(catalog["maps"]) - len(maps))
    for entry in maps:
        if not isinstance(entry.get("classes"), list):
            entry["classes"] = []
        if not isinstance(entry.get("files"), dict):
            entry["files"] = {}
    catalog["maps"] = maps
    cache.set(CATALOG_KEY, catalog, _cache_ttl())
    return catalog


def fetch_rows(entry: Mapping | None, klass: str) -> list[CsvRow]:
    if not entry:
        return []
    text = fetch_text((entry.get("files") or {}).get(klass))
    if text is None:
        return []
    return decode_csv(text)


def invalidate_catalog() -> None:
    cache.delete(CATALOG_KEY)
    cache.delete(source_text_key(source_location(getattr(settings, "WR_HISTORY_INDEX_PATH", "data/index.json"))))
