"""tree-sitter adapter that builds a :class:`SourceTree` from source text.

The TypeScript grammar from ``tree-sitter-typescript`` is used for ``.ts`` and
``.js`` inputs; the TSX grammar is used for ``.tsx`` and ``.jsx`` inputs.
Parsing is strict: any error or missing node in the tree-sitter output raises
:class:`~splurge_ava_to_jest.exceptions.ParseError`.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from functools import cache
from pathlib import Path

import tree_sitter_typescript
from tree_sitter import Language, Parser, TreeCursor
from tree_sitter import Node as TSNode

from ..exceptions import ParseError
from .nodes import Node, SourceTree

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

DIALECTS = {"typescript": TS_LANGUAGE, "tsx": TSX_LANGUAGE}


def dialect_for_path(path: str | Path) -> str:
    """Pick the grammar dialect for a file name."""
    return "tsx" if Path(path).suffix.lower() in {".tsx", ".jsx"} else "typescript"


@cache
def _parser(dialect: str) -> Parser:
    try:
        return Parser(DIALECTS[dialect])
    except KeyError:
        raise ValueError(f"Unknown dialect {dialect!r}; expected one of {sorted(DIALECTS)}") from None


def parse_source(source: str, source_file: str = "<string>", dialect: str | None = None) -> SourceTree:
    """Parse ``source`` into a lossless :class:`SourceTree`.

    Args:
        source: TypeScript/JavaScript source text.
        source_file: File name used for diagnostics and dialect selection.
        dialect: Optional explicit dialect (``typescript`` or ``tsx``).

    Returns:
        The parsed tree.

    Raises:
        ParseError: If the source contains syntax errors.
    """
    dialect = dialect or dialect_for_path(source_file)
    data = source.encode("utf-8")
    ts_tree = _parser(dialect).parse(data)
    ts_root = ts_tree.root_node

    if ts_root.has_error:
        bad = _first_error(ts_root)
        line, column = (bad.start_point[0] + 1, bad.start_point[1] + 1) if bad is not None else (None, None)
        kind = "missing token" if bad is not None and bad.is_missing else "syntax error"
        raise ParseError(f"Cannot parse {source_file}: {kind} at line {line}", source_file, line, column)

    builder = _TreeBuilder(data)
    root = builder.build(ts_tree.walk())
    trailing = data[builder.offset :].decode("utf-8")
    return SourceTree(root, trailing=trailing, source_file=source_file, dialect=dialect)


def _first_error(root: TSNode) -> TSNode | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


class _TreeBuilder:
    """Convert a tree-sitter tree into :class:`Node` objects.

    ``offset`` tracks the end of the last emitted token so the bytes between
    two tokens become the ``prefix`` of the second one.
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def build(self, cursor: TreeCursor) -> Node:
        root = Node(cursor.node.type)
        self._children(cursor, root)
        return root

    def _node(self, cursor: TreeCursor) -> Node:
        ts = cursor.node
        if ts.child_count == 0:
            prefix = self.data[self.offset : ts.start_byte].decode("utf-8")
            text = self.data[ts.start_byte : ts.end_byte].decode("utf-8")
            self.offset = max(self.offset, ts.end_byte)
            return Node(
                ts.type,
                text=text,
                prefix=prefix,
                field=cursor.field_name,
                is_named=ts.is_named,
                point=(ts.start_point[0], ts.start_point[1]),
            )
        node = Node(ts.type, field=cursor.field_name, is_named=ts.is_named)
        self._children(cursor, node)
        return node

    def _children(self, cursor: TreeCursor, parent: Node) -> None:
        if not cursor.goto_first_child():
            return
        while True:
            parent.append(self._node(cursor))
            if not cursor.goto_next_sibling():
                break
        cursor.goto_parent()
