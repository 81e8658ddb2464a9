from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Iterable, Mapping

ZONE_BONUS = "bonus"
ZONE_COURSE = "course"
ZONE_SEGMENT = "segment"

ZONE_KIND_RANK = {
    ZONE_BONUS: 0,
    ZONE_COURSE: 1,
    ZONE_SEGMENT: 2,
}

_BONUS_RE = re.compile(r"^Bonus\s+(\d+)", re.IGNORECASE)
_COURSE_RE = re.compile(r"^Course\s+(\d+)", re.IGNORECASE)
_NAMED_SEGMENT_RE = re.compile(r"^C(\d+)\s*-\s*(.+)$", re.IGNORECASE)
_SEGMENT_RE = re.compile(r"^C(\d+)", re.IGNORECASE)
_FIRST_SUFFIX_RE = re.compile(r"\s+First$", re.IGNORECASE)


@dataclass(frozen=True)
class ZoneInfo:
    id: str
    label: str
    kind: str
    order: int

    def as_dict(self) -> dict:
        return asdict(self)


def sanitize_segment_name(value: str) -> str:
    return _FIRST_SUFFIX_RE.sub("", value.strip()).strip()


def classify_segment(source: str | None) -> ZoneInfo | None:
    """
    Map a segment label to its zone, or ``None`` for whole-map rows.

    "Bonus 2" -> bonus-2, "Course 1" -> course-1, "C3 - Rooftop First" ->
    segment-3 labelled "C3 - Rooftop", "C3" -> segment-3.
    """
    if not source:
        return None
    trimmed = source.strip()
    if not trimmed:
        return None

    match = _BONUS_RE.match(trimmed)
    if match:
        order = int(match.group(1))
        return ZoneInfo(id=f"bonus-{order}", label=f"Bonus {order}", kind=ZONE_BONUS, order=order)

    match = _COURSE_RE.match(trimmed)
    if match:
        order = int(match.group(1))
        return ZoneInfo(id=f"course-{order}", label=f"Course {order}", kind=ZONE_COURSE, order=order)

    match = _NAMED_SEGMENT_RE.match(trimmed)
    if match:
        order = int(match.group(1))
        name = sanitize_segment_name(match.group(2))
        label = f"C{order} - {name}" if name else f"C{order}"
        return ZoneInfo(id=f"segment-{order}", label=label, kind=ZONE_SEGMENT, order=order)

    match = _SEGMENT_RE.match(trimmed)
    if match:
        order = int(match.group(1))
        return ZoneInfo(id=f"segment-{order}", label=f"C{order}", kind=ZONE_SEGMENT, order=order)

    return None


def zone_sort_key(zone: ZoneInfo) -> tuple[int, int]:
    return ZONE_KIND_RANK.get(zone.kind, 99), zone.order


def collect_zones(rows: Iterable[Mapping[str, str]]) -> list[ZoneInfo]:
    zones: dict[str, ZoneInfo] = {}
    for row in rows:
        zone = classify_segment(row.get("segment"))
        if zone is not None:
            zones[zone.id] = zone
    return sorted(zones.values(), key=zone_sort_key)
