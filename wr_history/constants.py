from __future__ import annotations

CSV_COLUMNS = (
    "date",
    "record_time",
    "player",
    "map",
    "record_type",
    "segment",
    "evidence",
    "evidence_source",
    "run_time",
    "split",
    "improvement",
    "demo_id",
    "steam_id64",
    "steam_id",
    "steam_candidates",
)

EVIDENCE_RECORD = "record"
EVIDENCE_ANNOUNCEMENT = "announcement"

CLASS_SOLLY = "Solly"
CLASS_DEMO = "Demo"
PLAYER_CLASSES = (CLASS_SOLLY, CLASS_DEMO)

VIEW_MAP = "map"
VIEW_ZONES = "zones"
VIEW_MODES = (VIEW_MAP, VIEW_ZONES)

SEGMENT_MAP_LABEL = "Map"

FRAGMENT_MAP = "map"
FRAGMENT_CLASS = "class"
FRAGMENT_VIEW = "view"
FRAGMENT_ZONE = "zone"

CSV_FILE_PREFIX = "wr_history_"
