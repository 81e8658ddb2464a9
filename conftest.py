import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")

CSV_HEADER = (
    "date,record_time,player,map,record_type,segment,evidence,evidence_source,"
    "run_time,split,improvement,demo_id,steam_id64,steam_id,steam_candidates\n"
)

BEEF_SOLLY_CSV = CSV_HEADER + (
    "2015-01-01,01:00.00,Alpha,jump_beef,map,Map,record,tempus,01:00.00,,,1001,76561197960287930,,\n"
    "2015-02-01,00:55.00,Bravo,jump_beef,map,Map,record,tempus,00:55.00,,-5.00,1002,,STEAM_0:1:12345,\n"
    "2015-02-15,00:58.00,Charlie,jump_beef,map,Map,command,wr_command,,,,,,,\n"
    "2015-03-01,01:05.00,Delta,jump_beef,map,Map,announcement,irc_set,,,,1003,,,"
    "\"Delta|76561197960265729|;Delta2||[U:1:42]\"\n"
    "2015-03-05,00:40.00,Echo,jump_beef,bonus,Bonus 1,record,tempus,,,,1004,,,\n"
    "2015-03-06,00:30.00,Foxtrot,jump_beef,course,C3 - Rooftop First,observed,split,,,,,,,\n"
    "not-a-date,00:20.00,Golf,jump_beef,map,Map,record,tempus,,,,,,,\n"
)

BEEF_DEMO_CSV = CSV_HEADER + (
    "2016-05-01,02:10.50,Hotel,jump_beef,map,Map,record,tempus,,,,2001,,,\n"
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_cache():
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def wr_data_root(tmp_path, settings):
    """A data root with two exports for jump_beef and a built index.json."""
    from wr_history.services.catalog import build_index, write_index

    root = tmp_path / "public"
    data_dir = root / "data" / "wr-history-all"
    _write(data_dir / "wr_history_jump_beef_Solly.csv", BEEF_SOLLY_CSV)
    _write(data_dir / "wr_history_jump_beef_Demo.csv", BEEF_DEMO_CSV)
    _write(data_dir / "wr_history_jump_apex_Demo.csv", CSV_HEADER)
    _write(data_dir / "notes.txt", "ignored")

    settings.WR_HISTORY_DATA_ROOT = root
    settings.WR_HISTORY_DATA_DIR = "data/wr-history-all"
    settings.WR_HISTORY_INDEX_PATH = "data/index.json"
    settings.WR_HISTORY_REMOTE_BASE_URL = ""

    write_index(build_index(data_dir, generated_at="2024-01-01T00:00:00.000Z"), root / "data" / "index.json")
    return root
