"""
Defines the syntax tree node structure produced by the minipas parser.

Classes:
    ASTNode:
        A labeled node owning an ordered list of child nodes. One node is created
        per grammar rule application, so the tree shape mirrors the derivation.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

Each ASTNode tracks:
    label (str): Descriptive text chosen by the grammar procedure that built the node
        (e.g. "Program", "Target: x", "Number: 42", "+").
    children (list[ASTNode]): Owned child nodes, in source order.

Usage:
    The parser returns the root node; the driver prints it with `print()` (one line per
    node, two spaces of indentation per depth level) or serializes it with `to_dict()`.

Example:
    >>> node = ASTNode("+", [ASTNode("Number: 1"), ASTNode("Number: 2")])
    >>> print(node.dump(), end="")
    +
      Number: 1
      Number: 2
"""

import sys
from collections.abc import Iterator
from typing import Any, TextIO, TypedDict


class ASTDict(TypedDict):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        label (str): The node's label.
        children (list[ASTDict]): Serialized child nodes.
    """

    label: str
    children: list["ASTDict"]


class ASTNode:
    """
    Represents a node in the minipas syntax tree.

    Nodes exclusively own their children: a node is attached to exactly one parent
    and never shared, so the structure is a strict tree with no cycles.

    Args:
        label (str): Descriptive label of the node.
        children (list[ASTNode], optional): Child nodes in order.

    Methods:
        add(child): Appends a child and returns it.
        walk(): Pre-order iterator over this node and its descendants.
        print(level, out): Writes the indented pre-order dump.
        dump(): Returns the indented pre-order dump as a string.
        to_dict(): Converts the node (and all descendants) into nested dictionaries.
    """

    def __init__(self, label: str, children: list["ASTNode"] | None = None):
        self.label = label
        self.children: list["ASTNode"] = children or []

    def add(self, child: "ASTNode") -> "ASTNode":
        self.children.append(child)
        return child

    def walk(self) -> Iterator["ASTNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def print(self, level: int = 0, out: TextIO | None = None) -> None:
        """Writes the subtree depth-first, one label per line, indented 2 spaces per level."""
        out = out if out is not None else sys.stdout
        out.write(" " * (level * 2) + self.label + "\n")
        for child in self.children:
            child.print(level + 1, out)

    def dump(self) -> str:
        lines: list[str] = []

        def visit(node: "ASTNode", level: int) -> None:
            lines.append(" " * (level * 2) + node.label)
            for child in node.children:
                visit(child, level + 1)

        visit(self, 0)
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        parts = [repr(self.label)]
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ASTNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return self.label == other.label and self.children == other.children

    def to_dict(self) -> ASTDict:
        return {
            "label": self.label,
            "children": [c.to_dict() for c in self.children],
        }
