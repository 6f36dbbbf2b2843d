# backend/navigation/presets.py
"""Starter menus an editor can drop into an empty (or existing) tree."""
from .exceptions import UnknownMenuPreset
from .links import default_link_target
from .mutations import add_item
from .tree import DEFAULT_MAX_DEPTH, MenuTree, temporary_id

MENU_PRESETS = {
    "ecommerce-starter": [
        ("Shop", "/products", [
            ("New Arrivals", "/collections/new", []),
            ("Best Sellers", "/collections/best-sellers", []),
            ("Sale", "/collections/sale", []),
        ]),
        ("About", "/about", []),
        ("Contact", "/contact", []),
    ],
    "simple-navigation": [
        ("Home", "/", []),
        ("Products", "/products", []),
        ("About", "/about", []),
        ("Contact", "/contact", []),
    ],
}


def apply_preset(tree: MenuTree, name: str, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Append preset ``name`` to the root list. Returns ``(tree, root_ids)``
    where ``root_ids`` are the temporary ids of the new top-level items.
    """
    try:
        entries = MENU_PRESETS[name]
    except KeyError:
        raise UnknownMenuPreset(name) from None

    root_ids = []
    stack = [(None, entry) for entry in reversed(entries)]
    while stack:
        parent_id, (label, link, children) = stack.pop()
        item_id = temporary_id()
        tree = add_item(
            tree,
            parent_id,
            item_id=item_id,
            label=label,
            link=link,
            link_target=default_link_target(link),
            max_depth=max_depth,
        )
        if parent_id is None:
            root_ids.append(item_id)
        stack.extend((item_id, child) for child in reversed(children))
    return tree, root_ids
