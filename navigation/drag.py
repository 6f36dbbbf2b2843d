# backend/navigation/drag.py
"""
Drag-and-drop reordering as a small state machine.

    session = DragSession()
    session.begin("c")
    session.hover("a", container=True)
    outcome = session.end(tree)

``end`` either reorders the dragged item among its siblings or reparents it,
and never raises for a rejected drop: the reason comes back as
``outcome.notice`` and ``outcome.tree`` is the tree that was passed in.
"""
import enum
import logging
from dataclasses import dataclass

from .exceptions import DragStateError, MenuDepthExceeded
from .mutations import move_into, reorder
from .tree import DEFAULT_MAX_DEPTH, MenuTree

logger = logging.getLogger(__name__)


class DragPhase(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class DragOutcome:
    tree: MenuTree
    changed: bool = False
    notice: str | None = None


class DragSession:
    def __init__(self):
        self.phase = DragPhase.IDLE
        self.active_id = None
        self.over_id = None
        self.over_container = False

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    def begin(self, item_id) -> None:
        if self.is_dragging:
            raise DragStateError(f"Already dragging {self.active_id}")
        self.phase = DragPhase.DRAGGING
        self.active_id = item_id
        self.over_id = None
        self.over_container = False

    def hover(self, over_id, container: bool = False) -> None:
        if not self.is_dragging:
            raise DragStateError("hover() called outside a drag")
        self.over_id = over_id
        self.over_container = bool(container) and over_id is not None

    def cancel(self) -> None:
        self.phase = DragPhase.RESOLVED
        self.over_id = None
        self.over_container = False

    def end(self, tree: MenuTree, max_depth: int = DEFAULT_MAX_DEPTH) -> DragOutcome:
        if not self.is_dragging:
            raise DragStateError("end() called outside a drag")
        active_id, over_id, container = self.active_id, self.over_id, self.over_container
        self.cancel()

        if over_id is None or over_id == active_id:
            return DragOutcome(tree)
        if active_id not in tree or over_id not in tree:
            logger.debug("Drag of %s over %s ignored: unknown item", active_id, over_id)
            return DragOutcome(tree)
        if tree.is_within(over_id, active_id):
            return DragOutcome(tree)

        try:
            if container:
                new_tree = move_into(tree, active_id, over_id, max_depth=max_depth)
            elif tree.parent_of(active_id) == tree.parent_of(over_id):
                new_tree = reorder(tree, active_id, over_id)
            else:
                new_tree = move_into(
                    tree, active_id, tree.parent_of(over_id), max_depth=max_depth
                )
        except MenuDepthExceeded as exc:
            logger.info("Rejected drop of %s onto %s: %s", active_id, over_id, exc)
            return DragOutcome(tree, notice=str(exc))

        return DragOutcome(new_tree, changed=new_tree != tree)
