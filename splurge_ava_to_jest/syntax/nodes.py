"""Lossless concrete syntax tree used by the transformation passes.

Every byte of the parsed source is owned either by a token's ``text`` or by
the whitespace ``prefix`` stored on that token, in the same way libcst
attaches whitespace to its nodes. Printing an unmodified tree therefore
reproduces the input exactly, and printing a modified tree only changes the
regions that were replaced.

Nodes form a single-parent tree: a node is attached to at most one parent
and replacement always detaches the old subtree before attaching the new one
in the same slot.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterator


class Node:
    """A node of the concrete syntax tree.

    ``type`` is the grammar kind (``call_expression``, ``identifier``,
    ``"("`` for anonymous tokens, ...). ``field`` names the grammar field the
    node occupies inside its parent (``function``, ``arguments``, ``name``,
    ...). Leaves carry ``text`` and the whitespace ``prefix`` that preceded
    them in the source; interior nodes carry ``children``.
    """

    __slots__ = ("type", "children", "field", "parent", "prefix", "text", "is_named", "point")

    def __init__(
        self,
        type: str,
        children: list[Node] | None = None,
        *,
        text: str | None = None,
        prefix: str = "",
        field: str | None = None,
        is_named: bool = True,
        point: tuple[int, int] | None = None,
    ) -> None:
        self.type = type
        self.children: list[Node] = []
        self.field = field
        self.parent: Node | None = None
        self.prefix = prefix
        self.text = text
        self.is_named = is_named
        self.point = point
        for child in children or []:
            self.append(child)

    @property
    def is_leaf(self) -> bool:
        return self.text is not None

    @property
    def code(self) -> str:
        """Source text of this subtree, including its leading whitespace."""
        return "".join(leaf.prefix + (leaf.text or "") for leaf in self.leaves())

    @property
    def source(self) -> str:
        """Source text of this subtree without its leading whitespace."""
        return self.code[len(self.leading) :]

    @property
    def leading(self) -> str:
        """Whitespace preceding the first token of this subtree."""
        leaf = self.first_leaf()
        return leaf.prefix if leaf is not None else ""

    @leading.setter
    def leading(self, value: str) -> None:
        leaf = self.first_leaf()
        if leaf is not None:
            leaf.prefix = value

    @property
    def position(self) -> tuple[int, int] | None:
        """1-based ``(line, column)`` of the first parsed token, if known."""
        for leaf in self.leaves():
            if leaf.point is not None:
                row, column = leaf.point
                return row + 1, column + 1
        return None

    @property
    def named_children(self) -> list[Node]:
        """Named children excluding comments."""
        return [child for child in self.children if child.is_named and child.type != "comment"]

    def first_leaf(self) -> Node | None:
        for leaf in self.leaves():
            return leaf
        return None

    def leaves(self) -> Iterator[Node]:
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
            else:
                stack.extend(reversed(node.children))

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants in pre-order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def child_by_field(self, name: str) -> Node | None:
        for child in self.children:
            if child.field == name:
                return child
        return None

    def index(self, child: Node) -> int:
        for i, candidate in enumerate(self.children):
            if candidate is child:
                return i
        raise ValueError(f"{child!r} is not a child of {self!r}")

    def append(self, child: Node) -> None:
        self.insert(len(self.children), child)

    def insert(self, index: int, child: Node) -> None:
        if child.parent is not None:
            raise ValueError(f"{child!r} is already attached to {child.parent!r}")
        child.parent = self
        self.children.insert(index, child)

    def remove(self, child: Node) -> None:
        del self.children[self.index(child)]
        child.parent = None

    def replace(self, old: Node, new: Node) -> None:
        """Detach ``old`` and attach ``new`` in the same slot and field."""
        if new.parent is not None:
            raise ValueError(f"{new!r} is already attached to {new.parent!r}")
        i = self.index(old)
        new.field = old.field
        new.parent = self
        self.children[i] = new
        old.parent = None

    def next_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        i = self.parent.index(self)
        return siblings[i + 1] if i + 1 < len(siblings) else None

    def previous_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        i = self.parent.index(self)
        return self.parent.children[i - 1] if i > 0 else None

    def clone(self) -> Node:
        """Return a detached deep copy of this subtree."""
        copy = Node(
            self.type,
            text=self.text,
            prefix=self.prefix,
            field=self.field,
            is_named=self.is_named,
            point=self.point,
        )
        for child in self.children:
            copy.append(child.clone())
        return copy

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"Node({self.type!r}, text={self.text!r})"
        return f"Node({self.type!r}, children={len(self.children)})"


class SourceTree:
    """The parsed representation of one input file.

    A ``SourceTree`` is owned by a single transformation run; passes mutate
    ``root`` in place and the printer renders ``code`` once all passes have
    completed.
    """

    def __init__(self, root: Node, trailing: str = "", source_file: str = "<string>", dialect: str = "typescript"):
        self.root = root
        self.trailing = trailing
        self.source_file = source_file
        self.dialect = dialect

    @property
    def code(self) -> str:
        """Print the tree back to source text."""
        return self.root.code + self.trailing

    def __repr__(self) -> str:
        return f"SourceTree(source_file={self.source_file!r}, dialect={self.dialect!r})"
