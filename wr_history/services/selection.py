from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence
from urllib.parse import parse_qs, urlencode

from wr_history.constants import (
    CLASS_SOLLY,
    FRAGMENT_CLASS,
    FRAGMENT_MAP,
    FRAGMENT_VIEW,
    FRAGMENT_ZONE,
    PLAYER_CLASSES,
    VIEW_MAP,
    VIEW_MODES,
    VIEW_ZONES,
)
from wr_history.services.zones import ZoneInfo, classify_segment, collect_zones, zone_sort_key


@dataclass(frozen=True)
class Selection:
    """What the viewer is looking at: map, player class, view mode and zone."""
    map: str | None = None
    klass: str = CLASS_SOLLY
    view: str = VIEW_MAP
    zone: str | None = None

    @property
    def is_zone_view(self) -> bool:
        return self.view == VIEW_ZONES


def normalize_view(value: str | None) -> str:
    view = (value or "").strip().lower()
    return view if view in VIEW_MODES else VIEW_MAP


def normalize_class(value: str | None) -> str | None:
    text = (value or "").strip().lower()
    for klass in PLAYER_CLASSES:
        if klass.lower() == text:
            return klass
    return None


def zone_options(rows: Iterable[Mapping[str, str]]) -> list[ZoneInfo]:
    return collect_zones(rows)


def effective_zone(selection: Selection, zones: Sequence[ZoneInfo]) -> str | None:
    if not selection.is_zone_view or not zones:
        return None
    if selection.zone and any(zone.id == selection.zone for zone in zones):
        return selection.zone
    return zones[0].id


def filter_rows(rows: Sequence[Mapping[str, str]], selection: Selection) -> list[Mapping[str, str]]:
    """Rows of one timeline: whole-map rows in map view, one zone's rows in zone view."""
    classified = [(row, classify_segment(row.get("segment"))) for row in rows]

    if not selection.is_zone_view:
        return [row for row, zone in classified if zone is None]

    zone_id = selection.zone
    if not zone_id:
        zones = sorted({zone for _, zone in classified if zone is not None}, key=zone_sort_key)
        zone_id = zones[0].id if zones else None

    return [row for row, zone in classified if zone is not None and (zone_id is None or zone.id == zone_id)]


def resolve_selection(catalog: Mapping | None, requested: Selection) -> Selection:
    """Fit a requested selection to the catalog: unknown maps and classes fall back to the first available."""
    maps = list((catalog or {}).get("maps") or [])
    klass = normalize_class(requested.klass) or CLASS_SOLLY
    view = normalize_view(requested.view)
    zone = requested.zone if view == VIEW_ZONES else None
    if not maps:
        return Selection(map=requested.map, klass=klass, view=view, zone=zone)

    entry = next((item for item in maps if item.get("map") == requested.map), maps[0])
    classes = list(entry.get("classes") or [])
    if classes and klass not in classes:
        klass = classes[0]

    return Selection(
        map=entry.get("map"),
        klass=klass,
        view=view,
        zone=zone,
    )


def encode_fragment(selection: Selection) -> str:
    if not selection.map:
        return ""
    params = {FRAGMENT_MAP: selection.map, FRAGMENT_CLASS: selection.klass}
    if selection.is_zone_view:
        params[FRAGMENT_VIEW] = VIEW_ZONES
        if selection.zone:
            params[FRAGMENT_ZONE] = selection.zone
    return urlencode(params)


def decode_fragment(text: str | None) -> Selection:
    query = (text or "").lstrip("#")
    params = {key: values[0] for key, values in parse_qs(query).items() if values}
    view = normalize_view(params.get(FRAGMENT_VIEW))
    return Selection(
        map=params.get(FRAGMENT_MAP) or None,
        klass=normalize_class(params.get(FRAGMENT_CLASS)) or CLASS_SOLLY,
        view=view,
        zone=(params.get(FRAGMENT_ZONE) or None) if view == VIEW_ZONES else None,
    )
