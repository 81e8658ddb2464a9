import logging
from pathlib import Path

from celery import shared_task

from wr_history.services.catalog import rebuild_index
from wr_history.services.sources import invalidate_catalog

logger = logging.getLogger(__name__)


@shared_task
def task_rebuild_index(data_dir: str | None = None, out_path: str | None = None) -> int:
    try:
        index = rebuild_index(
            data_dir=Path(data_dir) if data_dir else None,
            out_path=Path(out_path) if out_path else None,
        )
    except Exception:
        logger.exception("Failed to rebuild WR history index from %s", data_dir or "default data dir")
        raise
    invalidate_catalog()
    return index["count"]
