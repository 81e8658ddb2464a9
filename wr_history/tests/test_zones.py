import pytest

from wr_history.services.zones import ZoneInfo, classify_segment, collect_zones, zone_sort_key


def test_named_segment_strips_first_suffix():
    assert classify_segment("C3 - Rooftop First") == ZoneInfo(id="segment-3", label="C3 - Rooftop", kind="segment", order=3)


@pytest.mark.parametrize(
    ("text", "zone_id", "label", "kind", "order"),
    [
        ("Bonus 2", "bonus-2", "Bonus 2", "bonus", 2),
        ("bonus   10", "bonus-10", "Bonus 10", "bonus", 10),
        ("Course 1", "course-1", "Course 1", "course", 1),
        ("COURSE 04", "course-4", "Course 4", "course", 4),
        ("C2", "segment-2", "C2", "segment", 2),
        ("c7-Lobby", "segment-7", "C7 - Lobby", "segment", 7),
        ("C5 - First", "segment-5", "C5 - First", "segment", 5),
        ("  C1 - Start  ", "segment-1", "C1 - Start", "segment", 1),
    ],
)
def test_classify_segment(text, zone_id, label, kind, order):
    zone = classify_segment(text)
    assert (zone.id, zone.label, zone.kind, zone.order) == (zone_id, label, kind, order)


@pytest.mark.parametrize("text", ["Map", "", "   ", None, "Bonus", "Checkpoint", "Course x", "whole map"])
def test_unclassified_text_is_no_zone(text):
    assert classify_segment(text) is None


@pytest.mark.parametrize("text", ["Map", "Bonus 1", "C3 - Rooftop First", "???", "C", "Course 9 extra"])
def test_classification_is_deterministic(text):
    assert classify_segment(text) == classify_segment(text)


def test_zone_order_is_bonus_course_segment_then_number():
    rows = [
        {"segment": "C2"},
        {"segment": "Course 2"},
        {"segment": "Bonus 3"},
        {"segment": "Map"},
        {"segment": "Course 1"},
        {"segment": "Bonus 1"},
        {"segment": "C1 - Start"},
        {"segment": "Bonus 1"},
    ]
    zones = collect_zones(rows)
    assert [zone.id for zone in zones] == ["bonus-1", "bonus-3", "course-1", "course-2", "segment-1", "segment-2"]
    assert zone_sort_key(zones[0]) == (0, 1)
