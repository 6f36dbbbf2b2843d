# backend/navigation/editor.py
"""
Editing session for one menu.

``MenuEditor`` owns the current ``MenuTree`` snapshot. Every operation swaps
in a new snapshot produced by the pure functions in ``mutations`` and keeps
the previous one for undo.
"""
import logging

from . import mutations
from .converters import flatten, nestify
from .drag import DragOutcome, DragSession
from .links import default_link_target, title_from_link
from .presets import apply_preset
from .tree import DEFAULT_LABEL, DEFAULT_MAX_DEPTH, MenuItem, MenuTree

logger = logging.getLogger(__name__)


class MenuEditor:
    def __init__(self, records=(), max_depth: int = DEFAULT_MAX_DEPTH, history_limit: int = 100):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self.history_limit = history_limit
        self.notices: list[str] = []
        self.drag = DragSession()
        self._undo_stack: list[MenuTree] = []
        self._redo_stack: list[MenuTree] = []
        # Presentation only: never part of the tree, never saved.
        self._expanded: dict[str, bool] = {}
        self.tree = MenuTree()
        self.load(records)

    def load(self, records) -> None:
        self.tree = mutations.validate_depth(
            MenuTree.from_nested(nestify(records)), self.max_depth
        )
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._expanded.clear()
        logger.debug("Loaded menu tree with %s items", len(self.tree))

    def records(self) -> list[MenuItem]:
        return flatten(self.tree.to_nested())

    def nested(self) -> list[MenuItem]:
        return self.tree.to_nested()

    def _commit(self, tree: MenuTree) -> None:
        if tree is self.tree:
            return
        self._undo_stack.append(self.tree)
        while len(self._undo_stack) > self.history_limit:
            self._undo_stack.pop(0)
        self._redo_stack.clear()
        self.tree = tree

    # -------------------------
    # item operations
    # -------------------------
    def create(self, parent_id=None, link: str | None = None) -> str:
        new_id = mutations.temporary_id()
        if link is None:
            tree = mutations.add_item(
                self.tree, parent_id, item_id=new_id, max_depth=self.max_depth
            )
        else:
            tree = mutations.add_item(
                self.tree,
                parent_id,
                item_id=new_id,
                label=title_from_link(link) or DEFAULT_LABEL,
                link=link,
                link_target=default_link_target(link),
                max_depth=self.max_depth,
            )
        self._commit(tree)
        if parent_id is not None:
            self._expanded[parent_id] = True
        return new_id

    def update(self, item_id, field: str, value) -> None:
        self._commit(mutations.update_item(self.tree, item_id, field, value))

    def delete(self, item_id) -> None:
        doomed = self.tree.subtree(item_id)
        self._commit(mutations.remove_item(self.tree, item_id))
        for removed in doomed:
            self._expanded.pop(removed, None)

    def duplicate(self, item_id) -> str:
        new_id = mutations.temporary_id()
        self._commit(mutations.duplicate_item(self.tree, item_id, new_id=new_id))
        return new_id

    def apply_preset(self, name: str) -> list[str]:
        tree, root_ids = apply_preset(self.tree, name, max_depth=self.max_depth)
        self._commit(tree)
        return root_ids

    # -------------------------
    # drag and drop
    # -------------------------
    def begin_drag(self, item_id) -> None:
        self.drag.begin(item_id)

    def hover_drag(self, over_id, container: bool = False) -> None:
        self.drag.hover(over_id, container=container)

    def cancel_drag(self) -> None:
        self.drag.cancel()

    def end_drag(self) -> DragOutcome:
        outcome = self.drag.end(self.tree, max_depth=self.max_depth)
        if outcome.notice:
            self.notices.append(outcome.notice)
        if outcome.changed:
            self._commit(outcome.tree)
        return outcome

    # -------------------------
    # history
    # -------------------------
    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        self._redo_stack.append(self.tree)
        self.tree = self._undo_stack.pop()
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        self._undo_stack.append(self.tree)
        self.tree = self._redo_stack.pop()
        return True

    # -------------------------
    # view state
    # -------------------------
    def is_expanded(self, item_id) -> bool:
        return self._expanded.get(item_id, True)

    def toggle_expanded(self, item_id) -> bool:
        self.tree.get(item_id)
        self._expanded[item_id] = not self.is_expanded(item_id)
        return self._expanded[item_id]

    def pop_notices(self) -> list[str]:
        notices, self.notices = self.notices, []
        return notices
