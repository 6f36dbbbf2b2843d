from collections import defaultdict

from navigation.converters import flatten
from navigation.tree import MenuItem, MenuTree


def node(item_id, *children, **fields):
    fields.setdefault("label", item_id.upper())
    return MenuItem(id=item_id, children=list(children), **fields)


def tree_of(*roots) -> MenuTree:
    return MenuTree.from_nested(list(roots))


def shape(tree, parent_id=None):
    """Ids as nested lists: leaves as 'a', parents as ('a', [...])."""
    result = []
    for item_id in tree.children_of(parent_id):
        if tree.children_of(item_id):
            result.append((item_id, shape(tree, item_id)))
        else:
            result.append(item_id)
    return result


def sibling_positions(records):
    groups = defaultdict(list)
    for record in records:
        groups[record.parent_id].append(record.position)
    return groups


def assert_contiguous(testcase, tree):
    for parent_id, positions in sibling_positions(flatten(tree.to_nested())).items():
        testcase.assertEqual(sorted(positions), list(range(len(positions))), parent_id)
