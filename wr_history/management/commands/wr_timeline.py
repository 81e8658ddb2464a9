import json

from django.core.management.base import BaseCommand, CommandError

from wr_history.constants import CLASS_SOLLY, VIEW_MAP, VIEW_MODES
from wr_history.services.catalog import find_map
from wr_history.services.presentation import timeline_payload
from wr_history.services.selection import Selection, resolve_selection
from wr_history.services.sources import fetch_catalog, fetch_rows


class Command(BaseCommand):
    help = "Print the reconstructed WR timeline of a map/class/zone selection as JSON."

    def add_arguments(self, parser):
        parser.add_argument("--map", dest="map_name", required=True)
        parser.add_argument("--class", dest="klass", default=CLASS_SOLLY)
        parser.add_argument("--view", default=VIEW_MAP, choices=VIEW_MODES)
        parser.add_argument("--zone", default=None)

    def handle(self, *args, **options):
        catalog = fetch_catalog()
        if catalog is None:
            raise CommandError("WR history catalog is unavailable; run build_wr_index first")

        entry = find_map(catalog, options["map_name"])
        if entry is None:
            raise CommandError(f"Unknown map: {options['map_name']}")

        requested = Selection(
            map=entry["map"],
            klass=options["klass"],
            view=options["view"],
            zone=options["zone"],
        )
        payload = timeline_payload(catalog, requested, fetch_rows(entry, resolve_selection(catalog, requested).klass))
        self.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2))
