import io
import json

import hypothesis.strategies as st
import pytest
from hypothesis import given

from minipas.minipas_ast import ASTNode


def sample_tree() -> ASTNode:
    return ASTNode(
        "Assignment",
        [
            ASTNode("Target: x"),
            ASTNode("+", [ASTNode("Number: 1"), ASTNode("Variable: y")]),
        ],
    )


def test_astnode_repr() -> None:
    assert repr(ASTNode("Break statement")) == "ASTNode('Break statement')"


def test_astnode_repr_truncates_children() -> None:
    node = ASTNode("Statement list", [ASTNode(str(i)) for i in range(5)])
    assert repr(node) == (
        "ASTNode('Statement list', children=[ASTNode('0'), ASTNode('1'), ASTNode('2'), ...])"
    )


def test_astnode_eq_equal() -> None:
    assert sample_tree() == sample_tree()


def test_astnode_eq_not_equal_children() -> None:
    n1 = ASTNode("Assignment", [ASTNode("Target: x")])
    n2 = ASTNode("Assignment", [ASTNode("Target: y")])
    assert n1 != n2


def test_astnode_eq_non_astnode() -> None:
    assert ASTNode("Block") != "Block"


def test_add_returns_child() -> None:
    parent = ASTNode("Block")
    child = parent.add(ASTNode("Statement list"))
    assert parent.children == [child]


def test_default_children_are_not_shared() -> None:
    a = ASTNode("a")
    b = ASTNode("b")
    a.add(ASTNode("c"))
    assert b.children == []


def test_dump_indents_two_spaces_per_level() -> None:
    assert sample_tree().dump() == (
        "Assignment\n"
        "  Target: x\n"
        "  +\n"
        "    Number: 1\n"
        "    Variable: y\n"
    )


def test_print_matches_dump() -> None:
    buf = io.StringIO()
    sample_tree().print(out=buf)
    assert buf.getvalue() == sample_tree().dump()


def test_print_with_starting_level() -> None:
    buf = io.StringIO()
    ASTNode("Block", [ASTNode("Statement list")]).print(level=1, out=buf)
    assert buf.getvalue() == "  Block\n    Statement list\n"


def test_print_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    ASTNode("Program").print()
    assert capsys.readouterr().out == "Program\n"


def test_walk_is_preorder() -> None:
    labels = [n.label for n in sample_tree().walk()]
    assert labels == ["Assignment", "Target: x", "+", "Number: 1", "Variable: y"]


def test_astnode_to_dict() -> None:
    d = sample_tree().to_dict()
    assert d["label"] == "Assignment"
    assert d["children"][1]["label"] == "+"
    assert d["children"][1]["children"][0] == {"label": "Number: 1", "children": []}
    json.dumps(d)


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_astnode_eq_same_label(label: str, child: str) -> None:
    assert ASTNode(label, [ASTNode(child)]) == ASTNode(label, [ASTNode(child)])


@given(st.text(min_size=1))  # type: ignore[misc]
def test_astnode_eq_different_label(label: str) -> None:
    assert ASTNode(label) != ASTNode(label + "x")


@st.composite  # type: ignore[misc]
def trees(draw: st.DrawFn, depth: int = 3) -> ASTNode:
    label = draw(st.text(alphabet="abc+:", min_size=1, max_size=5))
    if depth == 0:
        return ASTNode(label)
    children = draw(st.lists(trees(depth=depth - 1), max_size=3))
    return ASTNode(label, children)


@given(trees())  # type: ignore[misc]
def test_dump_has_one_line_per_node(tree: ASTNode) -> None:
    lines = tree.dump().splitlines()
    nodes = list(tree.walk())
    assert len(lines) == len(nodes)
    for line, node in zip(lines, nodes):
        assert line.strip() == node.label
