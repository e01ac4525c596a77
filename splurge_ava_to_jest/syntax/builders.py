"""Builders for freshly constructed syntax nodes.

Each builder returns a detached subtree shaped the way tree-sitter-typescript
would have parsed the equivalent source, so later passes and later runs can
match synthesized code with the same queries they use for parsed code.
Synthesized code follows the output style of the tool: single quotes, no
statement-terminating semicolons and no trailing commas.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable

from .nodes import Node


def _field(node: Node, name: str) -> Node:
    node.field = name
    return node


def token(text: str, prefix: str = "") -> Node:
    """Anonymous token such as ``(``, ``=>`` or ``const``."""
    return Node(text, text=text, prefix=prefix, is_named=False)


def identifier(name: str, prefix: str = "") -> Node:
    return Node("identifier", text=name, prefix=prefix)


def property_identifier(name: str, prefix: str = "") -> Node:
    return Node("property_identifier", text=name, prefix=prefix)


def type_identifier(name: str, prefix: str = "") -> Node:
    return Node("type_identifier", text=name, prefix=prefix)


def null_literal(prefix: str = "") -> Node:
    return Node("null", text="null", prefix=prefix)


def member_expression(obj: Node, prop: str) -> Node:
    """``obj.prop``."""
    return Node(
        "member_expression",
        [_field(obj, "object"), token("."), _field(property_identifier(prop), "property")],
    )


def dotted(path: str, base: Node | None = None) -> Node:
    """Build a member chain from a dotted path.

    ``dotted("test.only")`` builds ``test.only``; ``dotted("not.toBe", base)``
    appends ``.not.toBe`` to ``base``.
    """
    parts = path.split(".")
    node = base if base is not None else identifier(parts.pop(0))
    for part in parts:
        node = member_expression(node, part)
    return node


def arguments(args: Iterable[Node]) -> Node:
    """``(a, b)`` from detached argument nodes.

    Whitespace in front of each argument is normalized; comments carried
    in its leading text are kept.
    """
    children = [token("(")]
    for i, arg in enumerate(args):
        if i:
            children.append(token(","))
        arg.leading = (" " if i else "") + arg.leading.lstrip()
        children.append(arg)
    children.append(token(")"))
    return Node("arguments", children)


def call_expression(callee: Node, args: Iterable[Node] = ()) -> Node:
    return Node("call_expression", [_field(callee, "function"), _field(arguments(args), "arguments")])


def formal_parameters() -> Node:
    """An empty parameter list ``()``."""
    return Node("formal_parameters", [token("("), token(")")])


def statement_block() -> Node:
    """An empty block ``{}``."""
    return Node("statement_block", [token("{"), token("}")])


def arrow_function() -> Node:
    """``() => {}``."""
    body = _field(statement_block(), "body")
    body.leading = " "
    return Node("arrow_function", [_field(formal_parameters(), "parameters"), token("=>", " "), body])


def pair(key: str, value: Node) -> Node:
    """``key: value`` inside an object literal."""
    value.leading = " "
    return Node("pair", [_field(property_identifier(key), "key"), token(":"), _field(value, "value")])


def object_literal(pairs: Iterable[Node]) -> Node:
    """``{ a: null, b: null }`` or ``{}``."""
    children = [token("{")]
    for i, item in enumerate(pairs):
        if i:
            children.append(token(","))
        item.leading = " "
        children.append(item)
    children.append(token("}", " " if len(children) > 1 else ""))
    return Node("object", children)


def type_annotation(type_node: Node) -> Node:
    """``: Type`` as attached to a declarator name."""
    type_node.leading = " "
    return Node("type_annotation", [token(":"), type_node])


def type_alias_declaration(name: str, value: Node) -> Node:
    """``type Name = value``."""
    value.leading = " "
    return Node(
        "type_alias_declaration",
        [token("type"), _field(type_identifier(name, " "), "name"), token("=", " "), _field(value, "value")],
    )


def variable_declarator(name: str, value: Node, type_node: Node | None = None) -> Node:
    """``name: Type = value``."""
    children = [_field(identifier(name), "name")]
    if type_node is not None:
        children.append(_field(type_annotation(type_node), "type"))
    value.leading = " "
    children.extend([token("=", " "), _field(value, "value")])
    return Node("variable_declarator", children)


def lexical_declaration(kind: str, declarators: Iterable[Node]) -> Node:
    """``const a = 1, b = 2``."""
    children = [_field(token(kind), "kind")]
    for i, declarator in enumerate(declarators):
        if i:
            children.append(token(","))
        declarator.leading = " "
        children.append(declarator)
    return Node("lexical_declaration", children)


def export_statement(declaration: Node) -> Node:
    """``export <declaration>``."""
    declaration.leading = " "
    return Node("export_statement", [token("export"), _field(declaration, "declaration")])
