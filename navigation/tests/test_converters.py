from django.test import SimpleTestCase

from navigation.converters import flatten, item_from_dict, item_to_dict, nestify
from navigation.exceptions import InvalidMenuField
from navigation.tree import LinkTarget, MenuItem

from .utils import node


def flat(item_id, position, parent_id=None, **fields):
    return MenuItem(id=item_id, position=position, parent_id=parent_id, **fields)


class NestifyTest(SimpleTestCase):
    def test_builds_children_sorted_by_position(self):
        roots = nestify(
            [
                flat("b", 1),
                flat("a2", 1, "a"),
                flat("a", 0),
                flat("a1", 0, "a"),
            ]
        )

        self.assertEqual([r.id for r in roots], ["a", "b"])
        self.assertEqual([c.id for c in roots[0].children], ["a1", "a2"])
        self.assertEqual(roots[0].children[0].parent_id, "a")

    def test_unknown_parent_is_promoted_to_root(self):
        with self.assertLogs("navigation.converters", level="WARNING") as logs:
            roots = nestify([flat("a", 0), flat("orphan", 1, "missing")])

        self.assertEqual([r.id for r in roots], ["a", "orphan"])
        self.assertIsNone(roots[1].parent_id)
        self.assertIn("orphan", logs.output[0])

    def test_parent_cycle_keeps_every_item(self):
        with self.assertLogs("navigation.converters", level="WARNING"):
            roots = nestify([flat("a", 0, "b"), flat("b", 0, "a"), flat("c", 0, "a")])

        seen = [record.id for record in flatten(roots)]
        self.assertEqual(sorted(seen), ["a", "b", "c"])

    def test_nested_input_is_not_nested_twice(self):
        nested = [node("a", node("a1"), node("a2", node("x"))), node("b")]

        once = nestify(nested)
        twice = nestify(once)

        self.assertEqual(once, twice)
        self.assertEqual(flatten(once), flatten(nestify(flatten(nested))))
        self.assertEqual(once[0].children[1].children[0].parent_id, "a2")

    def test_embedded_children_take_embedding_parent(self):
        # The child claims a different parent; its position in the payload wins.
        roots = nestify([node("a", node("c", parent_id="b")), node("b")])

        self.assertEqual([c.id for c in roots[0].children], ["c"])
        self.assertEqual(roots[1].children, [])

    def test_item_listed_twice_is_collected_once(self):
        roots = nestify([node("a", node("c")), flat("c", 0, "a")])

        self.assertEqual(len(flatten(roots)), 2)

    def test_input_records_are_left_untouched(self):
        records = [flat("a", 0), flat("b", 0, "a")]

        nestify(records)

        self.assertEqual(records[0].children, [])
        self.assertEqual(records[1].parent_id, "a")


class FlattenTest(SimpleTestCase):
    def test_positions_and_parents_come_from_placement(self):
        records = flatten(
            [
                node("a", node("a1", position=7), node("a2", parent_id="zzz")),
                node("b", position=4),
            ]
        )

        self.assertEqual(
            [(r.id, r.parent_id, r.position) for r in records],
            [("a", None, 0), ("a1", "a", 0), ("a2", "a", 1), ("b", None, 1)],
        )
        self.assertTrue(all(r.children == [] for r in records))

    def test_round_trip_of_valid_flat_list(self):
        records = [
            flat("home", 0, label="Home"),
            flat("shop", 1, label="Shop"),
            flat("sale", 0, "shop", label="Sale", link_target=LinkTarget.NEW_WINDOW),
            flat("new", 1, "shop", label="New"),
            flat("about", 2, label="About"),
        ]

        result = flatten(nestify(records))

        self.assertEqual(
            sorted(result, key=lambda r: r.id), sorted(records, key=lambda r: r.id)
        )


class WireShapeTest(SimpleTestCase):
    def test_dict_round_trip(self):
        data = {
            "id": 12,
            "label": "Shop",
            "link": "/products",
            "linkTarget": "new-window",
            "position": 2,
            "parentId": 3,
        }

        item = item_from_dict(data)

        self.assertEqual(item.id, "12")
        self.assertEqual(item.parent_id, "3")
        self.assertEqual(item_to_dict(item), {**data, "id": "12", "parentId": "3"})

    def test_nested_children_are_read_and_written(self):
        item = item_from_dict({"id": "a", "children": [{"id": "b", "parentId": ""}]})

        self.assertEqual(item.children[0].id, "b")
        self.assertIsNone(item.children[0].parent_id)
        self.assertEqual(item_to_dict(item, nested=True)["children"][0]["id"], "b")

    def test_missing_id_gets_temporary_id(self):
        self.assertTrue(item_from_dict({"label": "x"}).id.startswith("temp-"))

    def test_invalid_link_target(self):
        with self.assertRaises(InvalidMenuField):
            item_from_dict({"id": "a", "linkTarget": "_blank"})

    def test_malformed_children(self):
        with self.assertRaises(InvalidMenuField):
            item_from_dict({"id": "a", "children": ["x"]})
        with self.assertRaises(InvalidMenuField):
            item_from_dict({"id": "a", "children": {"id": "b"}})
