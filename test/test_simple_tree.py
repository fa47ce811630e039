import json
from typing import NamedTuple, Optional, Tuple

import pytest

from newickcore import FromNewick, SimpleTree, ToNewick, parse_newick, to_newick


class FrozenTree(NamedTuple):
    """Immutable tree: ``with_length`` returns a new value."""

    name: str
    length: Optional[float]
    children: Tuple["FrozenTree", ...]

    @classmethod
    def leaf(cls, name):
        return cls(name, None, ())

    @classmethod
    def internal(cls, name, children):
        return cls(name, None, tuple(children))

    def with_length(self, length):
        return self._replace(length=length)

    def get_name(self):
        return self.name

    def get_children(self):
        return self.children

    def get_length(self):
        return self.length


def test_simple_tree_satisfies_both_capabilities():
    tree = SimpleTree("A")
    assert isinstance(tree, FromNewick)
    assert isinstance(tree, ToNewick)


def test_parse_into_immutable_tree():
    tree = parse_newick("(A:1,(B,C)D:2)E;", FrozenTree)

    assert tree == FrozenTree(
        "E",
        None,
        (
            FrozenTree("A", 1.0, ()),
            FrozenTree("D", 2.0, (FrozenTree("B", None, ()), FrozenTree("C", None, ()))),
        ),
    )
    assert to_newick(tree) == "(A:1.0,(B,C)D:2.0)E;"


def test_with_length_called_once_per_node():
    calls = []

    class Recording(SimpleTree):
        __slots__ = ()

        def with_length(self, length):
            calls.append((self.name, length))
            return super().with_length(length)

    parse_newick("((A:1,B)C:2,D)E;", Recording)

    assert calls == [
        ("A", 1.0),
        ("B", None),
        ("C", 2.0),
        ("D", None),
        ("E", None),
    ]


def test_internal_receives_children_in_order():
    received = []

    class Recording(SimpleTree):
        __slots__ = ()

        @classmethod
        def internal(cls, name, children):
            received.append((name, [child.name for child in children]))
            return super().internal(name, children)

    parse_newick("((A,B)X,C,(D)Y)Z;", Recording)

    assert received == [("X", ["A", "B"]), ("Y", ["D"]), ("Z", ["X", "C", "Y"])]


def test_structural_equality():
    a = SimpleTree.from_newick("(A:1,B:2)C;")
    b = SimpleTree.from_newick("(A:1.0,B:2.0)C;")
    c = SimpleTree.from_newick("(B:2,A:1)C;")
    d = SimpleTree.from_newick("(A:1,B:2.5)C;")

    assert a == b
    assert a != c
    assert a != d
    assert a != "(A:1,B:2)C;"


def test_simple_tree_is_not_hashable():
    with pytest.raises(TypeError):
        hash(SimpleTree("A"))


def test_structure_helpers():
    tree = SimpleTree.from_newick("((A,B)X,C,(D)Y)Z;")

    assert [node.name for node in tree.traverse()] == ["Z", "X", "A", "B", "C", "Y", "D"]
    assert [leaf.name for leaf in tree.leaves] == ["A", "B", "C", "D"]
    assert tree.get_current_order() == ("A", "B", "C", "D")
    assert tree.is_internal()
    assert not tree.is_leaf()
    assert tree.children[1].is_leaf()


def test_to_newick_and_str():
    tree = SimpleTree.from_newick("(A:0.1,B:0.2)C;")
    assert tree.to_newick() == "(A:0.1,B:0.2)C;"
    assert tree.to_newick(lengths=False) == "(A,B)C;"
    assert str(tree) == "(A:0.1,B:0.2)C;"


def test_repr():
    assert repr(SimpleTree("A", 0.5)) == "SimpleTree('A', 0.5, [])"


def test_dict_round_trip():
    tree = SimpleTree.from_newick("(A:0.1,(B,C)D:0.5):0.0;")

    data = tree.to_dict()
    assert data == {
        "name": "",
        "length": 0.0,
        "children": [
            {"name": "A", "length": 0.1, "children": []},
            {
                "name": "D",
                "length": 0.5,
                "children": [
                    {"name": "B", "length": None, "children": []},
                    {"name": "C", "length": None, "children": []},
                ],
            },
        ],
    }
    assert SimpleTree.from_dict(data) == tree


def test_from_dict_defaults():
    tree = SimpleTree.from_dict({"children": [{"name": "A", "length": 1}]})
    assert tree == SimpleTree("", None, [SimpleTree("A", 1.0)])


def test_json_round_trip():
    tree = SimpleTree.from_newick("('A B':1.5,C)root;")

    text = tree.to_json()
    assert json.loads(text)["children"][0]["name"] == "A B"
    assert SimpleTree.from_json(text) == tree


def test_helpers_on_deeply_nested_tree():
    depth = 5000
    tree = SimpleTree.from_newick("(" * depth + "A:1" + ")" * depth + ";")

    data = tree.to_dict()
    assert SimpleTree.from_dict(data) == tree

    inner = data
    for _ in range(depth):
        assert len(inner["children"]) == 1
        inner = inner["children"][0]
    assert inner == {"name": "A", "length": 1.0, "children": []}

    text = repr(tree)
    assert text.startswith("SimpleTree('', None, [" * 2)
    assert text.endswith("SimpleTree('A', 1.0, [])" + "])" * depth)

    document = tree.to_json()
    assert document.count('"children"') == depth + 1
    assert document.endswith('"children": [' + "]}" * (depth + 1))


def test_repr_lists_children_in_order():
    tree = SimpleTree.from_newick("((A,B)X,C);")
    assert repr(tree) == (
        "SimpleTree('', None, ["
        "SimpleTree('X', None, [SimpleTree('A', None, []), SimpleTree('B', None, [])]), "
        "SimpleTree('C', None, [])])"
    )


def test_to_json_format():
    tree = SimpleTree.from_newick("(A:0.5,B);")
    assert tree.to_json() == (
        '{"name": "", "length": null, "children": ['
        '{"name": "A", "length": 0.5, "children": []}, '
        '{"name": "B", "length": null, "children": []}]}'
    )
