import random

from django.test import SimpleTestCase

from navigation.editor import MenuEditor
from navigation.exceptions import MenuDepthExceeded, MenuItemNotFound, UnknownMenuPreset
from navigation.tree import LinkTarget, MenuItem

from .utils import assert_contiguous, node, shape


def flat(item_id, position, parent_id=None):
    return MenuItem(id=item_id, label=item_id.upper(), position=position, parent_id=parent_id)


class MenuEditorTest(SimpleTestCase):
    def setUp(self):
        self.editor = MenuEditor(
            [flat("c", 2), flat("a", 0), flat("b", 1), flat("b1", 0, "b")]
        )

    def test_load_and_records(self):
        self.assertEqual(shape(self.editor.tree), ["a", ("b", ["b1"]), "c"])
        self.assertEqual(
            [(r.id, r.parent_id, r.position) for r in self.editor.records()],
            [("a", None, 0), ("b", None, 1), ("b1", "b", 0), ("c", None, 2)],
        )
        self.assertEqual(self.editor.nested()[1].children[0].id, "b1")

    def test_load_nested_payload(self):
        self.editor.load([node("x", node("y"))])

        self.assertEqual(shape(self.editor.tree), [("x", ["y"])])
        self.assertFalse(self.editor.can_undo)

    def test_create_update_delete(self):
        new_id = self.editor.create("b")
        self.assertTrue(new_id.startswith("temp-"))
        self.assertEqual(self.editor.tree.children_of("b"), ("b1", new_id))

        self.editor.update(new_id, "label", "Sale")
        self.assertEqual(self.editor.tree.get(new_id).label, "Sale")

        self.editor.delete("b")
        self.assertEqual(shape(self.editor.tree), ["a", "c"])
        self.assertNotIn(new_id, self.editor.tree)

    def test_create_with_link_suggests_label_and_target(self):
        new_id = self.editor.create(link="https://example.com/pages/faq")

        created = self.editor.tree.get(new_id)
        self.assertEqual(created.label, "FAQ")
        self.assertEqual(created.link_target, LinkTarget.NEW_WINDOW)

    def test_create_too_deep(self):
        deep = self.editor.create("b1")
        with self.assertRaises(MenuDepthExceeded):
            self.editor.create(deep)

    def test_duplicate(self):
        copy_id = self.editor.duplicate("a")

        self.assertEqual(self.editor.tree.children_of(None), ("a", "b", "c", copy_id))
        self.assertEqual(self.editor.tree.get(copy_id).label, "A (Copy)")

    def test_drag_round(self):
        self.editor.begin_drag("c")
        self.editor.hover_drag("a", container=True)
        outcome = self.editor.end_drag()

        self.assertTrue(outcome.changed)
        self.assertEqual(shape(self.editor.tree), [("a", ["c"]), ("b", ["b1"])])

    def test_rejected_drag_raises_notice(self):
        deep = self.editor.create("b1")
        before = self.editor.tree

        self.editor.begin_drag("a")
        self.editor.hover_drag(deep, container=True)
        self.editor.end_drag()

        self.assertIs(self.editor.tree, before)
        self.assertEqual(self.editor.pop_notices(), ["Maximum menu depth is 3 levels"])
        self.assertEqual(self.editor.notices, [])

    def test_cancelled_drag_keeps_tree(self):
        before = self.editor.tree
        self.editor.begin_drag("a")
        self.editor.hover_drag("c")
        self.editor.cancel_drag()

        self.assertIs(self.editor.tree, before)

    def test_undo_redo(self):
        original = self.editor.tree
        self.editor.update("a", "label", "Home")
        edited = self.editor.tree

        self.assertTrue(self.editor.undo())
        self.assertIs(self.editor.tree, original)
        self.assertTrue(self.editor.redo())
        self.assertIs(self.editor.tree, edited)
        self.assertFalse(self.editor.redo())

        self.editor.undo()
        self.editor.delete("c")
        self.assertFalse(self.editor.can_redo)

    def test_history_is_bounded(self):
        editor = MenuEditor(history_limit=2)
        for _ in range(5):
            editor.create()

        self.assertTrue(editor.undo())
        self.assertTrue(editor.undo())
        self.assertFalse(editor.undo())
        self.assertEqual(len(editor.tree), 3)

    def test_expanded_state_stays_out_of_records(self):
        self.assertTrue(self.editor.is_expanded("b"))
        self.assertFalse(self.editor.toggle_expanded("b"))
        self.assertFalse(self.editor.is_expanded("b"))

        self.editor.create("b")
        self.assertTrue(self.editor.is_expanded("b"))
        with self.assertRaises(MenuItemNotFound):
            self.editor.toggle_expanded("ghost")
        self.assertFalse(hasattr(self.editor.records()[0], "expanded"))

    def test_presets(self):
        editor = MenuEditor()
        root_ids = editor.apply_preset("ecommerce-starter")

        self.assertEqual(len(root_ids), 3)
        shop = editor.tree.get(root_ids[0])
        self.assertEqual(shop.label, "Shop")
        labels = [editor.tree.get(i).label for i in editor.tree.children_of(shop.id)]
        self.assertEqual(labels, ["New Arrivals", "Best Sellers", "Sale"])

        with self.assertRaises(UnknownMenuPreset):
            editor.apply_preset("nope")

    def test_load_rejects_too_deep_tree(self):
        with self.assertRaises(MenuDepthExceeded):
            MenuEditor([node("a", node("b", node("c", node("d"))))])

        editor = MenuEditor([node("a", node("b", node("c", node("d"))))], max_depth=4)
        self.assertEqual(editor.tree.depth("d"), 3)

    def test_rejects_invalid_max_depth(self):
        with self.assertRaises(ValueError):
            MenuEditor(max_depth=0)


class EditorInvariantTest(SimpleTestCase):
    def test_random_edits_keep_invariants(self):
        rng = random.Random(7)
        editor = MenuEditor(max_depth=3)

        for _ in range(300):
            ids = list(editor.tree)
            roll = rng.random()
            if roll < 0.4 or not ids:
                parent = rng.choice(ids + [None]) if ids else None
                try:
                    editor.create(parent)
                except MenuDepthExceeded:
                    pass
            elif roll < 0.9:
                editor.begin_drag(rng.choice(ids))
                editor.hover_drag(rng.choice(ids + [None]), container=rng.random() < 0.5)
                editor.end_drag()
            else:
                editor.delete(rng.choice(ids))

            tree = editor.tree
            for item_id in tree:
                self.assertLessEqual(tree.depth(item_id), 2)
            assert_contiguous(self, tree)
            ancestry_ok = all(item_id not in tree.ancestors(item_id) for item_id in tree)
            self.assertTrue(ancestry_ok)
