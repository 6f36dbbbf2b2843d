import json
import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from navigation.conf import get_max_depth
from navigation.converters import flatten, item_from_dict, nestify
from navigation.exceptions import MenuError
from navigation.models import Menu
from navigation.mutations import validate_depth
from navigation.persistence import save_menu_records
from navigation.tree import MenuTree

logger = logging.getLogger(__name__)

MENUS_DIR = Path("content_json/menus")


class Command(BaseCommand):
    help = "Load/Update menus + items from JSON files in content_json/menus"

    def add_arguments(self, parser):
        parser.add_argument(
            "--handle",
            help="Only load the JSON file whose stem matches this handle",
        )
        parser.add_argument(
            "--file",
            help="Path to a single JSON file to load (overrides --handle filter)",
        )

    def handle(self, *args, **options):
        target_handle = options.get("handle")
        target_file = options.get("file")

        if target_file:
            files = [Path(target_file)]
            if not files[0].exists():
                raise CommandError(f"File not found: {target_file}")
        else:
            if not MENUS_DIR.exists():
                raise CommandError(f"Folder not found: {MENUS_DIR}")
            files = sorted(MENUS_DIR.glob("*.json"))
            if target_handle:
                files = [f for f in files if f.stem == target_handle]

        if not files:
            self.stdout.write(self.style.WARNING(f"No menu JSON files found in {MENUS_DIR}"))
            return

        max_depth = get_max_depth()
        for f in files:
            try:
                self.load_file(f, max_depth)
            except (ValueError, KeyError, MenuError) as exc:
                self.stdout.write(self.style.WARNING(f"Skipping {f}: {exc}"))
            except Exception as exc:
                logger.exception("Loading %s failed", f)
                raise CommandError(f"Loading {f} failed: {exc}") from exc

        self.stdout.write(self.style.SUCCESS("All menus loaded successfully"))

    def load_file(self, path: Path, max_depth: int):
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top level is not an object")

        items_data = data.get("items", [])
        if not isinstance(items_data, list):
            raise ValueError("'items' is not a list")

        records = [item_from_dict(item) for item in items_data if isinstance(item, dict)]
        tree = validate_depth(MenuTree.from_nested(nestify(records)), max_depth)

        handle = data.get("handle") or path.stem
        menu, _ = Menu.objects.update_or_create(
            handle=handle,
            defaults={
                "name": data.get("name") or handle,
                "location": data.get("location", Menu.LOCATION_HEADER),
            },
        )
        save_menu_records(menu, flatten(tree.to_nested()))
        self.stdout.write(self.style.SUCCESS(f"Loaded menu: {menu.handle} ({len(tree)} items)"))
