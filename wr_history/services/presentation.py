from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Sequence

from django.conf import settings

from wr_history.constants import CSV_COLUMNS, EVIDENCE_RECORD, SEGMENT_MAP_LABEL
from wr_history.services.catalog import find_map
from wr_history.services.identity import resolve_player_identity
from wr_history.services.selection import (
    Selection,
    effective_zone,
    encode_fragment,
    filter_rows,
    resolve_selection,
    zone_options,
)
from wr_history.services.timeline import TimelinePoint, WipePolicy, build_timeline, summarize_timeline

DEFAULT_DEMO_URL = "https://tempus2.xyz/demos/{demo_id}"
DEFAULT_DEMO_PLAYER_URL = "https://demos.tf2jump.xyz/?demo={demo_id}"


def format_evidence(row: Mapping[str, str]) -> str:
    kind = (row.get("evidence") or "").strip().lower() or "unknown"
    source = (row.get("evidence_source") or "").strip().lower()
    if not source:
        return kind
    return f"{kind} ({source.replace('_', ' ')})"


def format_details(row: Mapping[str, str], wiped: bool = False) -> str:
    segment = (row.get("segment") or "").strip()
    evidence = format_evidence(row)
    base = f"{segment} · {evidence}" if segment and segment != SEGMENT_MAP_LABEL else evidence
    return f"{base} · wiped" if wiped else base


def demo_links(row: Mapping[str, str]) -> dict | None:
    # only record evidence carries a demo_id that belongs to this run
    demo_id = (row.get("demo_id") or "").strip()
    if not demo_id or (row.get("evidence") or "").strip().lower() != EVIDENCE_RECORD:
        return None
    return {
        "demo_id": demo_id,
        "demo_url": getattr(settings, "WR_HISTORY_DEMO_URL", DEFAULT_DEMO_URL).format(demo_id=demo_id),
        "watch_url": getattr(settings, "WR_HISTORY_DEMO_PLAYER_URL", DEFAULT_DEMO_PLAYER_URL).format(demo_id=demo_id),
    }


def point_payload(point: TimelinePoint) -> dict:
    return {
        **{column: point.row.get(column, "") for column in CSV_COLUMNS},
        **dict(point.row),
        "row_index": point.row_index,
        "date_value": point.date_value,
        "record_seconds": point.record_seconds,
        "wiped": point.wiped,
        "wiped_boundary": point.wiped_boundary,
        "details": format_details(point.row, point.wiped),
        "demo": demo_links(point.row),
        "identity": resolve_player_identity(point.row).as_dict(),
    }


def timeline_payload(
    catalog: Mapping | None,
    requested: Selection,
    rows: Sequence[Mapping[str, str]],
    policy: WipePolicy | None = None,
) -> dict:
    """
    Everything a client needs to draw one selection: the normalized selection
    and its fragment, zone options, the annotated timeline and its summary.
    """
    selection = resolve_selection(catalog, requested)
    zones = zone_options(rows)
    zone_id = effective_zone(selection, zones)
    if selection.is_zone_view:
        selection = replace(selection, zone=zone_id)

    points = build_timeline(filter_rows(rows, selection), policy=policy) if rows else []

    entry = find_map(catalog, selection.map)
    active_zone = next((zone for zone in zones if zone.id == zone_id), None)
    return {
        "status": "ok" if points else "empty",
        "selection": {
            "map": selection.map,
            "class": selection.klass,
            "view": selection.view,
            "zone": selection.zone,
        },
        "fragment": encode_fragment(selection),
        "classes": list((entry or {}).get("classes") or []),
        "zones": [zone.as_dict() for zone in zones],
        "active_zone": active_zone.as_dict() if active_zone else None,
        "stats": summarize_timeline(points),
        "points": [point_payload(point) for point in points],
        "download": ((entry or {}).get("files") or {}).get(selection.klass),
    }
