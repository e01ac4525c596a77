"""Tree query layer: search, match and in-place edits on a :class:`Node` tree.

The helpers here are deliberately generic; they know the shape of the
TypeScript grammar but nothing about AVA or Jest. Passes combine them to
recognize framework idioms.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from . import builders
from .nodes import Node

FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function"})
COMMA_SEPARATED = frozenset(
    {"arguments", "formal_parameters", "lexical_declaration", "variable_declaration", "object", "array"}
)

Predicate = Callable[[Node], bool]


def find(root: Node, types: str | Collection[str], predicate: Predicate | None = None) -> list[Node]:
    """Return all nodes of the given type(s) matching ``predicate``, in pre-order."""
    wanted = {types} if isinstance(types, str) else set(types)
    return [node for node in root.walk() if node.type in wanted and (predicate is None or predicate(node))]


def find_first(root: Node, types: str | Collection[str], predicate: Predicate | None = None) -> Node | None:
    wanted = {types} if isinstance(types, str) else set(types)
    for node in root.walk():
        if node.type in wanted and (predicate is None or predicate(node)):
            return node
    return None


def is_identifier(node: Node | None, name: str) -> bool:
    return node is not None and node.type == "identifier" and node.text == name


def is_member_access(node: Node | None, object_name: str, property_name: str | None = None) -> bool:
    """Match ``object_name.property`` (plain ``.`` access, not ``?.``)."""
    if node is None or node.type != "member_expression":
        return False
    if any(child.type == "optional_chain" for child in node.children):
        return False
    prop = node.child_by_field("property")
    if prop is None or prop.type != "property_identifier":
        return False
    if property_name is not None and prop.text != property_name:
        return False
    return is_identifier(node.child_by_field("object"), object_name)


def property_name(member: Node) -> str | None:
    prop = member.child_by_field("property")
    return prop.text if prop is not None else None


def call_arguments(call: Node) -> list[Node]:
    args = call.child_by_field("arguments")
    if args is None or args.type != "arguments":
        return []
    return args.named_children


def clone_with_comments(node: Node) -> Node:
    """Clone ``node`` together with the comments directly in front of it.

    The comments become part of the clone's leading text, so a list
    builder that resets separators keeps them.
    """
    comments: list[Node] = []
    sibling = node.previous_sibling()
    while sibling is not None and sibling.type == "comment":
        comments.append(sibling)
        sibling = sibling.previous_sibling()
    copy = node.clone()
    if comments:
        copy.leading = "".join(comment.code for comment in reversed(comments)) + copy.leading
    return copy


def string_value(node: Node | None) -> str | None:
    """Return the content of a quoted string literal, or ``None``."""
    if node is None or node.type != "string":
        return None
    return node.source[1:-1]


def is_function(node: Node | None) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def function_parameters(fn: Node) -> list[Node]:
    """Parameters of a function, including the bare ``t => ...`` form."""
    bare = fn.child_by_field("parameter")
    if bare is not None:
        return [bare]
    params = fn.child_by_field("parameters")
    return params.named_children if params is not None else []


def parameter_name(param: Node) -> str | None:
    if param.type == "identifier":
        return param.text
    pattern = param.child_by_field("pattern")
    if pattern is not None and pattern.type == "identifier":
        return pattern.text
    return None


def clear_parameters(fn: Node) -> bool:
    """Replace the parameter list of ``fn`` with ``()``.

    Returns True when the function had parameters.
    """
    if not function_parameters(fn):
        return False
    old = fn.child_by_field("parameter") or fn.child_by_field("parameters")
    assert old is not None
    new = replace(old, builders.formal_parameters())
    new.field = "parameters"
    return True


def remove_parameter(fn: Node, param: Node) -> None:
    if fn.child_by_field("parameter") is param:
        clear_parameters(fn)
    else:
        remove(param)


def replace(old: Node, new: Node) -> Node:
    """Substitute ``new`` for ``old`` in the same parent slot.

    ``new`` takes over the leading whitespace of ``old``.
    """
    if old.parent is None:
        raise ValueError(f"Cannot replace detached node {old!r}")
    new.leading = old.leading
    old.parent.replace(old, new)
    return new


def remove(node: Node) -> None:
    """Detach ``node`` from its parent, fixing up separators and whitespace."""
    parent = node.parent
    if parent is None:
        raise ValueError(f"Cannot remove detached node {node!r}")
    if parent.type in COMMA_SEPARATED:
        _remove_list_item(parent, node)
    else:
        _remove_statement(parent, node)


def _remove_list_item(parent: Node, node: Node) -> None:
    after = node.next_sibling()
    before = node.previous_sibling()
    if after is not None and after.text == ",":
        following = after.next_sibling()
        parent.remove(after)
        if following is not None:
            following.leading = node.leading
    elif before is not None and before.text == ",":
        parent.remove(before)
    parent.remove(node)


def _remove_statement(parent: Node, node: Node) -> None:
    before = node.previous_sibling()
    after = node.next_sibling()
    # The first statement's whitespace moves to its successor so the
    # surrounding block keeps its layout.
    if after is not None and after.is_named and (before is None or not before.is_named):
        after.leading = node.leading
    parent.remove(node)


def _indent_of(node: Node) -> str:
    leading = node.leading
    return leading[leading.rfind("\n") + 1 :] if "\n" in leading else ""


def insert_before(anchor: Node, new: Node) -> Node:
    """Insert statement ``new`` on its own line before statement ``anchor``."""
    parent = anchor.parent
    if parent is None:
        raise ValueError(f"Cannot insert next to detached node {anchor!r}")
    indent = _indent_of(anchor)
    parent.insert(parent.index(anchor), new)
    new.leading = anchor.leading
    anchor.leading = "\n" + indent
    return new


def insert_after(anchor: Node, new: Node) -> Node:
    """Insert statement ``new`` on its own line after statement ``anchor``."""
    parent = anchor.parent
    if parent is None:
        raise ValueError(f"Cannot insert next to detached node {anchor!r}")
    parent.insert(parent.index(anchor) + 1, new)
    new.leading = "\n" + _indent_of(anchor)
    return new
