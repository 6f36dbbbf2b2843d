# backend/navigation/tree.py
"""
In-memory model of a navigation menu.

Two shapes are used:

* ``MenuItem`` records, the wire/persisted shape. In nested form every record
  carries its ``children``; in flat form ``children`` is empty and the tree is
  described by ``parent_id`` + ``position``.
* ``MenuTree``, the editing shape: an immutable id-indexed arena with a
  separate parent -> ordered child ids index. A node's position is its index
  in that index, so sibling positions are always ``0..n-1``.

Every ``MenuTree`` method that changes something returns a new tree and
leaves the original untouched.
"""
import uuid
from dataclasses import dataclass, field

from django.db import models

from .exceptions import MenuItemNotFound

DEFAULT_MAX_DEPTH = 3
DEFAULT_LABEL = "New Item"
DEFAULT_LINK = "/"
TEMP_ID_PREFIX = "temp-"


def temporary_id() -> str:
    """Local id for an item the database has not seen yet."""
    return f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}"


def is_temporary_id(item_id) -> bool:
    return str(item_id).startswith(TEMP_ID_PREFIX)


class LinkTarget(models.TextChoices):
    SAME_WINDOW = "same-window", "Same window"
    NEW_WINDOW = "new-window", "New window"


@dataclass
class MenuItem:
    id: str
    label: str = DEFAULT_LABEL
    link: str = DEFAULT_LINK
    link_target: str = LinkTarget.SAME_WINDOW
    position: int = 0
    parent_id: str | None = None
    children: list["MenuItem"] = field(default_factory=list)


@dataclass(frozen=True)
class MenuNode:
    id: str
    label: str = DEFAULT_LABEL
    link: str = DEFAULT_LINK
    link_target: str = LinkTarget.SAME_WINDOW

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuNode":
        return cls(
            id=item.id,
            label=item.label,
            link=item.link,
            link_target=item.link_target,
        )


class MenuTree:
    """Immutable arena of menu nodes. ``None`` is the key of the root group."""

    __slots__ = ("_nodes", "_parents", "_children")

    def __init__(self, nodes=None, parents=None, children=None):
        self._nodes = nodes or {}
        self._parents = parents or {}
        self._children = children or {}

    @classmethod
    def from_nested(cls, roots) -> "MenuTree":
        """Build from nested records; sibling order is list order."""
        nodes, parents, children = {}, {}, {}
        stack = [(None, list(roots))]
        while stack:
            parent_id, items = stack.pop()
            children[parent_id] = tuple(item.id for item in items)
            for item in items:
                nodes[item.id] = MenuNode.from_item(item)
                parents[item.id] = parent_id
                if item.children:
                    stack.append((item.id, list(item.children)))
        return cls(nodes, parents, children)

    def to_nested(self) -> list[MenuItem]:
        def build(parent_id):
            result = []
            for position, item_id in enumerate(self.children_of(parent_id)):
                node = self._nodes[item_id]
                result.append(
                    MenuItem(
                        id=node.id,
                        label=node.label,
                        link=node.link,
                        link_target=node.link_target,
                        position=position,
                        parent_id=parent_id,
                        children=build(item_id),
                    )
                )
            return result

        return build(None)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, item_id) -> bool:
        return item_id in self._nodes

    def __iter__(self):
        for node, _parent_id, _position, _depth in self.walk():
            yield node.id

    def __eq__(self, other) -> bool:
        if not isinstance(other, MenuTree):
            return NotImplemented
        return (
            self._nodes == other._nodes
            and self._parents == other._parents
            and self.children_of(None) == other.children_of(None)
            and all(
                self.children_of(item_id) == other.children_of(item_id)
                for item_id in self._nodes
            )
        )

    def __repr__(self) -> str:
        return f"MenuTree({len(self)} items)"

    # -------------------------
    # lookups
    # -------------------------
    def get(self, item_id) -> MenuNode:
        try:
            return self._nodes[item_id]
        except KeyError:
            raise MenuItemNotFound(item_id) from None

    def parent_of(self, item_id):
        self.get(item_id)
        return self._parents[item_id]

    def children_of(self, parent_id=None) -> tuple:
        return self._children.get(parent_id, ())

    def position_of(self, item_id) -> int:
        return self.children_of(self.parent_of(item_id)).index(item_id)

    def ancestors(self, item_id) -> list:
        """Parent first, root last."""
        result = []
        current = self.parent_of(item_id)
        while current is not None:
            result.append(current)
            current = self._parents[current]
        return result

    def depth(self, item_id) -> int:
        return len(self.ancestors(item_id))

    def is_within(self, item_id, ancestor_id) -> bool:
        """True when ``item_id`` is ``ancestor_id`` or one of its descendants."""
        return item_id == ancestor_id or ancestor_id in self.ancestors(item_id)

    def subtree(self, item_id) -> list:
        self.get(item_id)
        result = []
        stack = [item_id]
        while stack:
            current = stack.pop()
            result.append(current)
            stack.extend(reversed(self.children_of(current)))
        return result

    def height(self, item_id) -> int:
        """Number of descendant levels under ``item_id`` (0 for a leaf)."""
        base = self.depth(item_id)
        return max(self.depth(descendant) for descendant in self.subtree(item_id)) - base

    def walk(self):
        """Pre-order ``(node, parent_id, position, depth)`` tuples."""
        stack = [
            (item_id, None, position, 0)
            for position, item_id in reversed(list(enumerate(self.children_of(None))))
        ]
        while stack:
            item_id, parent_id, position, depth = stack.pop()
            yield self._nodes[item_id], parent_id, position, depth
            kids = self.children_of(item_id)
            for child_position in range(len(kids) - 1, -1, -1):
                stack.append((kids[child_position], item_id, child_position, depth + 1))

    # -------------------------
    # structural edits (each returns a new tree)
    # -------------------------
    def with_node(self, node: MenuNode) -> "MenuTree":
        self.get(node.id)
        nodes = dict(self._nodes)
        nodes[node.id] = node
        return MenuTree(nodes, self._parents, self._children)

    def insert(self, node: MenuNode, parent_id=None, index=None) -> "MenuTree":
        if parent_id is not None:
            self.get(parent_id)
        nodes = dict(self._nodes)
        nodes[node.id] = node
        parents = dict(self._parents)
        parents[node.id] = parent_id
        children = dict(self._children)
        siblings = list(children.get(parent_id, ()))
        siblings.insert(len(siblings) if index is None else index, node.id)
        children[parent_id] = tuple(siblings)
        return MenuTree(nodes, parents, children)

    def detach(self, item_id) -> "MenuTree":
        """Drop ``item_id`` together with its whole subtree."""
        doomed = set(self.subtree(item_id))
        parent_id = self._parents[item_id]
        nodes = {key: value for key, value in self._nodes.items() if key not in doomed}
        parents = {key: value for key, value in self._parents.items() if key not in doomed}
        children = {
            key: value for key, value in self._children.items() if key not in doomed
        }
        children[parent_id] = tuple(
            sibling for sibling in self.children_of(parent_id) if sibling != item_id
        )
        return MenuTree(nodes, parents, children)

    def relocate(self, item_id, parent_id=None, index=None) -> "MenuTree":
        """
        Move ``item_id`` (and its subtree) under ``parent_id`` at ``index``
        (append when ``index`` is None). Only the old and new sibling lists
        are rebuilt.
        """
        old_parent_id = self.parent_of(item_id)
        if parent_id is not None:
            self.get(parent_id)
        children = dict(self._children)
        old_siblings = [s for s in children.get(old_parent_id, ()) if s != item_id]
        children[old_parent_id] = tuple(old_siblings)
        new_siblings = list(children.get(parent_id, ()))
        new_siblings.insert(len(new_siblings) if index is None else index, item_id)
        children[parent_id] = tuple(new_siblings)
        parents = dict(self._parents)
        parents[item_id] = parent_id
        return MenuTree(self._nodes, parents, children)
