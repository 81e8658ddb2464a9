from wr_history.services.presentation import demo_links, format_details, format_evidence


def test_demo_links_only_for_record_evidence(settings):
    settings.WR_HISTORY_DEMO_URL = "https://demos.example/{demo_id}"
    assert demo_links({"evidence": "record", "demo_id": "77"})["demo_url"] == "https://demos.example/77"
    assert demo_links({"evidence": " Record ", "demo_id": "77"}) is not None
    assert demo_links({"evidence": "announcement", "demo_id": "77"}) is None
    assert demo_links({"evidence": "observed", "demo_id": "77"}) is None
    assert demo_links({"evidence": "record", "demo_id": ""}) is None


def test_format_evidence():
    assert format_evidence({"evidence": "Announcement", "evidence_source": "IRC_SET"}) == "announcement (irc set)"
    assert format_evidence({"evidence": "command", "evidence_source": ""}) == "command"
    assert format_evidence({}) == "unknown"


def test_format_details_hides_map_segment():
    row = {"segment": "Map", "evidence": "record", "evidence_source": "tempus"}
    assert format_details(row) == "record (tempus)"
    assert format_details({**row, "segment": "Course 2"}, wiped=True) == "Course 2 · record (tempus) · wiped"
