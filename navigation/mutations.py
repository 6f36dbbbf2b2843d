# backend/navigation/mutations.py
"""
Pure tree-in/tree-out edits. Nothing here mutates its input, so callers can
keep old trees around for undo/redo.
"""
from dataclasses import replace

from .converters import coerce_link_target
from .exceptions import InvalidMenuField, MenuDepthExceeded, MenuError
from .tree import (
    DEFAULT_LABEL,
    DEFAULT_LINK,
    DEFAULT_MAX_DEPTH,
    LinkTarget,
    MenuNode,
    MenuTree,
    temporary_id,
)

EDITABLE_FIELDS = {
    "label": "label",
    "link": "link",
    "linkTarget": "link_target",
    "link_target": "link_target",
}


def add_item(
    tree: MenuTree,
    parent_id=None,
    *,
    item_id=None,
    label: str = DEFAULT_LABEL,
    link: str = DEFAULT_LINK,
    link_target: str = LinkTarget.SAME_WINDOW,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> MenuTree:
    """Append a new item to the end of ``parent_id``'s children (or the roots)."""
    if parent_id is not None and tree.depth(parent_id) + 1 >= max_depth:
        raise MenuDepthExceeded(max_depth)
    node = MenuNode(
        id=item_id or temporary_id(),
        label=label,
        link=link,
        link_target=coerce_link_target(link_target),
    )
    return tree.insert(node, parent_id)


def update_item(tree: MenuTree, item_id, field: str, value) -> MenuTree:
    try:
        attr = EDITABLE_FIELDS[field]
    except KeyError:
        raise InvalidMenuField(f"Field cannot be edited: {field!r}") from None
    if attr == "link_target":
        value = coerce_link_target(value)
    return tree.with_node(replace(tree.get(item_id), **{attr: value}))


def remove_item(tree: MenuTree, item_id) -> MenuTree:
    """Remove ``item_id`` and every descendant."""
    return tree.detach(item_id)


def duplicate_item(tree: MenuTree, item_id, *, new_id=None) -> MenuTree:
    """Copy one item (without its children) to the end of its sibling group."""
    source = tree.get(item_id)
    copy = replace(source, id=new_id or temporary_id(), label=f"{source.label} (Copy)")
    return tree.insert(copy, tree.parent_of(item_id))


def move_into(
    tree: MenuTree, item_id, container_id=None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> MenuTree:
    """
    Reparent ``item_id`` as the last child of ``container_id`` (``None`` is
    the root list). Dropping an item into itself or into its own subtree
    leaves the tree as it is.
    """
    tree.get(item_id)
    if container_id is not None:
        if tree.is_within(container_id, item_id):
            return tree
        target_depth = tree.depth(container_id) + 1
    else:
        target_depth = 0
    if target_depth + tree.height(item_id) >= max_depth:
        raise MenuDepthExceeded(max_depth)
    return tree.relocate(item_id, container_id)


def reorder(tree: MenuTree, item_id, over_id) -> MenuTree:
    """Move ``item_id`` to ``over_id``'s index within their shared sibling list."""
    parent_id = tree.parent_of(item_id)
    if tree.parent_of(over_id) != parent_id:
        raise MenuError(f"{item_id} and {over_id} are not siblings")
    return tree.relocate(item_id, parent_id, tree.position_of(over_id))


def validate_depth(tree: MenuTree, max_depth: int = DEFAULT_MAX_DEPTH) -> MenuTree:
    for _node, _parent_id, _position, depth in tree.walk():
        if depth > max_depth - 1:
            raise MenuDepthExceeded(max_depth)
    return tree
