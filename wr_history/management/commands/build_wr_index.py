from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from wr_history.services.catalog import default_data_dir, default_index_path, rebuild_index
from wr_history.services.sources import invalidate_catalog
from wr_history.tasks import task_rebuild_index


class Command(BaseCommand):
    help = "Build the WR history catalog (index.json) from wr_history_<map>_<class>.csv exports."

    def add_arguments(self, parser):
        parser.add_argument("--data-dir", type=str, default=None)
        parser.add_argument("--out", type=str, default=None)
        parser.add_argument("--sync", action="store_true")

    def handle(self, *args, **options):
        data_dir = Path(options["data_dir"]) if options["data_dir"] else default_data_dir()
        out_path = Path(options["out"]) if options["out"] else default_index_path()
        if not data_dir.is_dir():
            raise CommandError(f"WR history directory not found: {data_dir}")

        if options["sync"]:
            index = rebuild_index(data_dir=data_dir, out_path=out_path)
            invalidate_catalog()
            self.stdout.write(self.style.SUCCESS(f"Wrote {out_path} ({index['count']} maps)"))
        else:
            result = task_rebuild_index.delay(data_dir=str(data_dir), out_path=str(out_path))
            self.stdout.write(f"Index rebuild queued: task_id={result.id} out={out_path}")
