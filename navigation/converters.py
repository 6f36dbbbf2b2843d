# backend/navigation/converters.py
"""
Conversions between the flat parent-pointer shape (what gets persisted) and
the nested shape (what gets edited).
"""
import logging
from dataclasses import replace

from .exceptions import InvalidMenuField
from .tree import DEFAULT_LABEL, DEFAULT_LINK, LinkTarget, MenuItem, temporary_id

logger = logging.getLogger(__name__)


def _collect(items) -> list[MenuItem]:
    """
    Pre-order list of every record exactly once, with ``children`` stripped.
    A record found inside another record's ``children`` takes that record's
    id as its parent.
    """
    result = []
    seen = set()
    stack = [(item, None, False) for item in reversed(list(items))]
    while stack:
        item, parent_id, embedded = stack.pop()
        if item.id in seen:
            continue
        seen.add(item.id)
        result.append(
            replace(
                item,
                parent_id=parent_id if embedded else item.parent_id,
                children=[],
            )
        )
        for child in reversed(item.children or []):
            stack.append((child, item.id, True))
    return result


def _break_cycles(order, parent_of) -> None:
    for item_id in order:
        seen = {item_id}
        previous, current = item_id, parent_of[item_id]
        while current is not None:
            if current in seen:
                logger.warning(
                    "Menu item %s closes a parent cycle; promoting it to root",
                    previous,
                )
                parent_of[previous] = None
                break
            seen.add(current)
            previous, current = current, parent_of[current]


def nestify(items) -> list[MenuItem]:
    """
    Build root records with nested ``children`` from flat or already nested
    records. Every sibling list is sorted by ``position``; the input is never
    modified.
    """
    flat = _collect(items)
    by_id = {item.id: item for item in flat}

    parent_of = {}
    for item in flat:
        if item.parent_id is not None and item.parent_id not in by_id:
            logger.warning(
                "Menu item %s points at unknown parent %s; promoting it to root",
                item.id,
                item.parent_id,
            )
            parent_of[item.id] = None
        else:
            parent_of[item.id] = item.parent_id
    _break_cycles([item.id for item in flat], parent_of)

    roots = []
    for item in flat:
        item.parent_id = parent_of[item.id]
        if item.parent_id is None:
            roots.append(item)
        else:
            by_id[item.parent_id].children.append(item)

    stack = [roots]
    while stack:
        siblings = stack.pop()
        siblings.sort(key=lambda record: record.position)
        stack.extend(record.children for record in siblings if record.children)
    return roots


def flatten(tree) -> list[MenuItem]:
    """
    Depth-first walk of nested records. ``parent_id`` and ``position`` come
    from where each record sits in ``tree``, not from its own fields.
    """
    result = []
    stack = [
        (item, None, position)
        for position, item in reversed(list(enumerate(tree)))
    ]
    while stack:
        item, parent_id, position = stack.pop()
        result.append(
            replace(item, parent_id=parent_id, position=position, children=[])
        )
        children = item.children or []
        for child_position in range(len(children) - 1, -1, -1):
            stack.append((children[child_position], item.id, child_position))
    return result


# -------------------------
# wire shape
# -------------------------
def coerce_link_target(value) -> str:
    try:
        return LinkTarget(value).value
    except ValueError:
        raise InvalidMenuField(f"Invalid link target: {value!r}") from None


def item_from_dict(data: dict) -> MenuItem:
    """``{id, label, link, linkTarget, position, parentId[, children]}`` -> record."""
    if not isinstance(data, dict):
        raise InvalidMenuField(f"Menu item is not an object: {data!r}")
    children = data.get("children") or []
    if not isinstance(children, list):
        raise InvalidMenuField(f"'children' is not a list: {children!r}")
    parent_id = data.get("parentId")
    return MenuItem(
        id=str(data.get("id") or temporary_id()),
        label=data.get("label", DEFAULT_LABEL),
        link=data.get("link", DEFAULT_LINK),
        link_target=coerce_link_target(data.get("linkTarget", LinkTarget.SAME_WINDOW)),
        position=int(data.get("position") or 0),
        parent_id=None if parent_id in (None, "") else str(parent_id),
        children=[item_from_dict(child) for child in children],
    )


def item_to_dict(item: MenuItem, nested: bool = False) -> dict:
    data = {
        "id": item.id,
        "label": item.label,
        "link": item.link,
        "linkTarget": coerce_link_target(item.link_target),
        "position": item.position,
        "parentId": item.parent_id,
    }
    if nested:
        data["children"] = [item_to_dict(child, nested=True) for child in item.children]
    return data
