from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from django.conf import settings

from wr_history.constants import CSV_FILE_PREFIX, PLAYER_CLASSES

logger = logging.getLogger(__name__)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_history_filename(filename: str) -> tuple[str, str] | None:
    """``wr_history_<map>_<Demo|Solly>.csv`` -> (map, class); anything else -> None."""
    if not filename.startswith(CSV_FILE_PREFIX):
        return None
    for klass in PLAYER_CLASSES:
        suffix = f"_{klass}.csv"
        if filename.endswith(suffix):
            map_name = filename[len(CSV_FILE_PREFIX):-len(suffix)]
            return (map_name, klass) if map_name else None
    return None


def build_index(data_dir: Path, files_prefix: str | None = None, generated_at: str | None = None) -> dict:
    """
    Group the per-map CSV exports in ``data_dir`` into a catalog.

    Maps are sorted by name, each map's classes are sorted, and ``files`` maps a
    class to the CSV path relative to the data root.
    """
    prefix = (files_prefix if files_prefix is not None else getattr(settings, "WR_HISTORY_DATA_DIR", "")).strip("/")
    entries: dict[str, dict] = {}

    for path in sorted(data_dir.iterdir()):
        if not path.is_file() or path.suffix != ".csv":
            continue
        parsed = parse_history_filename(path.name)
        if parsed is None:
            logger.debug("Ignoring %s: not a WR history export", path.name)
            continue
        map_name, klass = parsed
        entry = entries.setdefault(map_name, {"map": map_name, "classes": [], "files": {}})
        if klass not in entry["classes"]:
            entry["classes"].append(klass)
        entry["files"][klass] = f"{prefix}/{path.name}" if prefix else path.name

    maps = sorted(entries.values(), key=lambda item: item["map"])
    for entry in maps:
        entry["classes"].sort()

    return {
        "generatedAt": generated_at or _iso_now(),
        "count": len(maps),
        "maps": maps,
    }


def write_index(index: Mapping, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(index, indent=2, ensure_ascii=False), encoding="utf-8")
    return out_path


def default_data_dir() -> Path:
    root = Path(getattr(settings, "WR_HISTORY_DATA_ROOT", "public"))
    return root / getattr(settings, "WR_HISTORY_DATA_DIR", "data/wr-history-all")


def default_index_path() -> Path:
    root = Path(getattr(settings, "WR_HISTORY_DATA_ROOT", "public"))
    return root / getattr(settings, "WR_HISTORY_INDEX_PATH", "data/index.json")


def rebuild_index(data_dir: Path | None = None, out_path: Path | None = None) -> dict:
    data_dir = data_dir or default_data_dir()
    out_path = out_path or default_index_path()
    if not data_dir.is_dir():
        raise FileNotFoundError(f"WR history directory not found: {data_dir}")
    index = build_index(data_dir)
    write_index(index, out_path)
    logger.info("Wrote %s (%s maps)", out_path, index["count"])
    return index


def filter_maps(catalog: Mapping | None, query: str | None = None) -> list[dict]:
    maps = list((catalog or {}).get("maps") or [])
    term = (query or "").strip().lower()
    if not term:
        return maps
    return [entry for entry in maps if term in str(entry.get("map", "")).lower()]


def find_map(catalog: Mapping | None, map_name: str | None) -> dict | None:
    if not map_name:
        return None
    for entry in (catalog or {}).get("maps") or []:
        if entry.get("map") == map_name:
            return entry
    return None
