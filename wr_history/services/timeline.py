from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Sequence

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from wr_history.constants import EVIDENCE_ANNOUNCEMENT, EVIDENCE_RECORD
from wr_history.services.durations import parse_date_value, parse_time_to_seconds

logger = logging.getLogger(__name__)

TIME_EPSILON = 0.0001

DEFAULT_WIPE_TRIGGERS: tuple[tuple[str, str | None], ...] = (
    (EVIDENCE_RECORD, None),
    (EVIDENCE_ANNOUNCEMENT, "irc_set"),
)


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


@dataclass(frozen=True)
class WipePolicy:
    """
    Which evidence may reveal a wipe: a later, slower entry from one of these
    (evidence, evidence_source) pairs marks faster earlier entries as wiped.
    A source of ``None`` matches any source.
    """
    triggers: frozenset[tuple[str, str | None]]

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[str | None]]) -> "WipePolicy":
        triggers = set()
        for pair in pairs:
            if isinstance(pair, str) or len(pair) != 2:
                raise ImproperlyConfigured(
                    f"Wipe trigger must be an (evidence, source) pair, got {pair!r}"
                )
            evidence, source = pair
            if not evidence:
                raise ImproperlyConfigured("Wipe trigger evidence must not be empty")
            triggers.add((_norm(evidence), _norm(source) if source is not None else None))
        return cls(triggers=frozenset(triggers))

    @classmethod
    def from_settings(cls) -> "WipePolicy":
        return cls.from_pairs(getattr(settings, "WR_HISTORY_WIPE_TRIGGERS", DEFAULT_WIPE_TRIGGERS))

    def is_trigger(self, row: Mapping[str, str]) -> bool:
        evidence = _norm(row.get("evidence"))
        source = _norm(row.get("evidence_source"))
        return (evidence, None) in self.triggers or (evidence, source) in self.triggers


@dataclass(frozen=True)
class TimelinePoint:
    row: Mapping[str, str]
    row_index: int
    date_value: int
    record_seconds: float
    wiped: bool = False
    wiped_boundary: bool = False

    def __getitem__(self, key: str) -> str:
        return self.row[key]

    def get(self, key: str, default: str = "") -> str:
        return self.row.get(key, default)


def get_time_epsilon() -> float:
    return float(getattr(settings, "WR_HISTORY_TIME_EPSILON", TIME_EPSILON))


def _to_points(rows: Iterable[Mapping[str, str]]) -> list[TimelinePoint]:
    points: list[TimelinePoint] = []
    skipped = 0
    for row_index, row in enumerate(rows):
        date_value = parse_date_value(row.get("date"))
        record_seconds = parse_time_to_seconds(row.get("record_time"))
        if date_value is None or record_seconds is None:
            skipped += 1
            continue
        points.append(TimelinePoint(row=row, row_index=row_index, date_value=date_value, record_seconds=record_seconds))
    if skipped:
        logger.debug("Skipped %s rows without a usable date or record time", skipped)
    points.sort(key=lambda point: (point.date_value, point.row_index))
    return points


def build_timeline(
    rows: Iterable[Mapping[str, str]],
    policy: WipePolicy | None = None,
    epsilon: float | None = None,
) -> list[TimelinePoint]:
    """
    Rebuild the record history of one (map, class, segment) selection.

    Keeps the first entry, every improvement, and every slower entry from a
    wipe-trigger source (a correction). Everything else is dropped. A final
    right-to-left pass marks entries faster than a later correction as wiped;
    wiped entries stay in the result.
    """
    policy = policy or WipePolicy.from_settings()
    eps = get_time_epsilon() if epsilon is None else epsilon

    current: float | None = None
    timeline: list[TimelinePoint] = []

    for point in _to_points(rows):
        if current is None or point.record_seconds < current - eps:
            current = point.record_seconds
            timeline.append(point)
            continue

        if policy.is_trigger(point.row) and point.record_seconds > current + eps:
            # slower authoritative entry: the faster ones before it never stood
            current = point.record_seconds
            timeline.append(replace(point, wiped_boundary=True))

    max_boundary: float | None = None
    for index in range(len(timeline) - 1, -1, -1):
        point = timeline[index]
        if point.wiped_boundary:
            max_boundary = point.record_seconds if max_boundary is None else max(max_boundary, point.record_seconds)
        wiped = max_boundary is not None and point.record_seconds < max_boundary - eps
        if wiped != point.wiped:
            timeline[index] = replace(point, wiped=wiped)

    return timeline


def summarize_timeline(points: Sequence[TimelinePoint]) -> dict | None:
    if not points:
        return None
    first = points[0]
    current = points[-1]
    return {
        "count": len(points),
        "wiped_count": sum(1 for point in points if point.wiped),
        "current_time": current.get("record_time"),
        "current_date": current.get("date"),
        "first_date": first.get("date"),
    }
