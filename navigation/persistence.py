# backend/navigation/persistence.py
"""
Loads and saves the flat ``{id, label, link, linkTarget, position, parentId}``
records of a menu. Ids on the way out are database primary keys rendered as
strings; unknown ids on the way in (temporary ids from the editor) become
new rows.
"""
import logging

from django.db import transaction

from . import models
from .tree import MenuItem, is_temporary_id

logger = logging.getLogger(__name__)


def _to_record(row) -> MenuItem:
    return MenuItem(
        id=str(row.pk),
        label=row.label,
        link=row.link,
        link_target=row.link_target,
        position=row.position,
        parent_id=str(row.parent_id) if row.parent_id else None,
    )


def _visible(rows):
    """Active rows whose ancestors are all active."""
    by_pk = {row.pk: row for row in rows}

    def shown(row):
        seen = set()
        while row is not None and row.pk not in seen:
            if not row.is_active:
                return False
            seen.add(row.pk)
            row = by_pk.get(row.parent_id)
        return True

    return [row for row in rows if shown(row)]


def load_menu_records(menu, active_only: bool = False) -> list[MenuItem]:
    rows = list(menu.items.all().order_by("position", "id"))
    if active_only:
        rows = _visible(rows)
    return [_to_record(row) for row in rows]


@transaction.atomic
def save_menu_records(menu, records) -> dict[str, str]:
    """
    Replace the items of ``menu`` with ``records`` (flatten order expected).
    Returns ``{submitted id: new primary key}`` for every created row.
    """
    existing = {str(row.pk): row for row in menu.items.all()}
    saved = {}
    created = {}
    relink = []

    for record in records:
        row = None if is_temporary_id(record.id) else existing.get(record.id)
        is_new = row is None
        if is_new:
            row = models.MenuItem(menu=menu)
        row.label = record.label
        row.link = record.link
        row.link_target = record.link_target
        row.position = record.position
        if record.parent_id is None:
            row.parent = None
        elif record.parent_id in saved:
            row.parent = saved[record.parent_id]
        else:
            row.parent = None
            relink.append((row, record.parent_id))
        row.save()
        saved[record.id] = row
        if is_new:
            created[record.id] = str(row.pk)

    for row, parent_id in relink:
        parent = saved.get(parent_id)
        if parent is None:
            logger.warning(
                "Menu %s: item %s references missing parent %s; saved as root",
                menu.pk,
                row.pk,
                parent_id,
            )
            continue
        row.parent = parent
        row.save(update_fields=["parent"])

    stale = [pk for pk in existing if pk not in saved]
    if stale:
        menu.items.filter(pk__in=stale).delete()

    logger.info(
        "Saved menu %s: %s items (%s created, %s removed)",
        menu.pk,
        len(saved),
        len(created),
        len(stale),
    )
    return created
