from wr_history.services.selection import (
    Selection,
    decode_fragment,
    effective_zone,
    encode_fragment,
    filter_rows,
    resolve_selection,
    zone_options,
)

ROWS = [
    {"segment": "Map", "player": "a"},
    {"segment": "Course 2", "player": "b"},
    {"segment": "Bonus 1", "player": "c"},
    {"segment": "", "player": "d"},
    {"segment": "Course 2", "player": "e"},
    {"segment": "C1 - Start", "player": "f"},
]

CATALOG = {
    "maps": [
        {"map": "jump_apex", "classes": ["Demo"], "files": {"Demo": "data/wr-history-all/wr_history_jump_apex_Demo.csv"}},
        {"map": "jump_beef", "classes": ["Demo", "Solly"], "files": {}},
    ]
}


def _players(rows):
    return [row["player"] for row in rows]


def test_map_view_keeps_only_whole_map_rows():
    assert _players(filter_rows(ROWS, Selection(map="m", view="map"))) == ["a", "d"]


def test_zone_view_narrows_to_selected_zone_in_order():
    assert _players(filter_rows(ROWS, Selection(map="m", view="zones", zone="course-2"))) == ["b", "e"]


def test_zone_view_defaults_to_lowest_zone():
    assert _players(filter_rows(ROWS, Selection(map="m", view="zones"))) == ["c"]


def test_zone_view_without_zones_is_empty():
    assert filter_rows([{"segment": "Map"}], Selection(map="m", view="zones")) == []


def test_zone_options_ignore_current_selection():
    ids = [zone.id for zone in zone_options(ROWS)]
    assert ids == ["bonus-1", "course-2", "segment-1"]


def test_effective_zone():
    zones = zone_options(ROWS)
    assert effective_zone(Selection(view="zones", zone="course-2"), zones) == "course-2"
    assert effective_zone(Selection(view="zones", zone="bonus-9"), zones) == "bonus-1"
    assert effective_zone(Selection(view="map", zone="course-2"), zones) is None
    assert effective_zone(Selection(view="zones"), []) is None


def test_resolve_selection_falls_back_to_available_map_and_class():
    selection = resolve_selection(CATALOG, Selection(map="jump_missing", klass="Solly", view="bogus", zone="bonus-1"))
    assert selection == Selection(map="jump_apex", klass="Demo", view="map", zone=None)

    selection = resolve_selection(CATALOG, Selection(map="jump_beef", klass="demo", view="zones", zone="bonus-1"))
    assert selection == Selection(map="jump_beef", klass="Demo", view="zones", zone="bonus-1")


def test_resolve_selection_without_catalog():
    assert resolve_selection(None, Selection(map="x", klass="", view="")) == Selection(map="x", klass="Solly", view="map")


def test_fragment_round_trip():
    selection = Selection(map="jump_beef", klass="Demo", view="zones", zone="bonus-1")
    fragment = encode_fragment(selection)
    assert fragment == "map=jump_beef&class=Demo&view=zones&zone=bonus-1"
    assert decode_fragment("#" + fragment) == selection


def test_fragment_map_view_omits_view_and_zone():
    assert encode_fragment(Selection(map="jump_beef", klass="Solly", view="map", zone="bonus-1")) == "map=jump_beef&class=Solly"
    assert decode_fragment("map=jump_beef&zone=bonus-1") == Selection(map="jump_beef", klass="Solly", view="map", zone=None)
    assert decode_fragment("") == Selection()
