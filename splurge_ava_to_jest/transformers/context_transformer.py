"""Convert AVA's typed ``t.context`` into a plain shared variable.

AVA threads a per-test context object through the ``t`` parameter and types
it through the generic argument of the registration function::

    const test = anyTest as TestFn<{ server: Server; port: number }>

Jest has no such object, so the generic argument is hoisted into a type
alias and a module-level variable takes the place of ``t.context``::

    type SharedContextType = { server: Server; port: number }
    const sharedContext: SharedContextType = { server: null, port: null }

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..syntax import Node, SourceTree
from ..syntax import builders as b
from ..syntax import query as q
from .report import TransformReport
from .rules import (
    ASSERTION_IDENTIFIER,
    CONTEXT_PROPERTY,
    SHARED_CONTEXT_NAME,
    SHARED_CONTEXT_TYPE_NAME,
    TEST_IDENTIFIER,
)

EXTRACT_PASS = "extract_shared_context"
REWRITE_PASS = "rewrite_context_references"

_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})
_STATEMENT_LISTS = frozenset({"program", "statement_block"})

_logger = logging.getLogger(__name__)


def extract_shared_context(tree: SourceTree, report: TransformReport) -> None:
    """Hoist the ``test`` variable's context type into a shared variable.

    Every unmet precondition is a soft abort: a diagnostic is recorded and
    the tree is left untouched.
    """
    declarator = q.find_first(
        tree.root,
        "variable_declarator",
        lambda node: q.is_identifier(node.child_by_field("name"), TEST_IDENTIFIER),
    )
    if declarator is None:
        _abort(report, "No test variable found.")
        return

    annotation = _asserted_type(declarator.child_by_field("value"))
    if annotation is None or annotation.type != "generic_type":
        _abort(report, "No test variable found or invalid type.", declarator)
        return

    type_arguments = annotation.child_by_field("type_arguments")
    params = type_arguments.named_children if type_arguments is not None else []
    if not params:
        _abort(report, "No type parameters found in TestFn.", declarator)
        return
    if len(params) > 1:
        _abort(report, f"Expected one type parameter in TestFn, found {len(params)}.", declarator)
        return

    literal = params[0]
    if literal.type != "object_type":
        _abort(report, "Invalid type literal.", literal)
        return

    statement = _enclosing_statement(declarator)
    if statement is None:
        _abort(report, "Unsupported placement of the test variable declaration.", declarator)
        return

    alias = b.type_alias_declaration(SHARED_CONTEXT_TYPE_NAME, literal.clone())
    fields = [b.pair(name, b.null_literal()) for name in _property_names(literal)]
    kind = "let" if _context_is_reassigned(tree.root) else "const"
    shared = b.lexical_declaration(
        kind,
        [
            b.variable_declarator(
                SHARED_CONTEXT_NAME, b.object_literal(fields), b.type_identifier(SHARED_CONTEXT_TYPE_NAME)
            )
        ],
    )

    if statement.type == "export_statement":
        alias, shared = b.export_statement(alias), b.export_statement(shared)

    q.insert_before(statement, alias)
    q.insert_after(statement, shared)
    _remove_declarator(declarator, statement)

    _logger.debug(f"Created {SHARED_CONTEXT_NAME} with {len(fields)} field(s) in {tree.source_file}")
    report.record(EXTRACT_PASS, 1)


def rewrite_context_references(tree: SourceTree, report: TransformReport) -> None:
    """Replace every ``t.context`` with a reference to the shared variable."""
    accesses = q.find(
        tree.root,
        "member_expression",
        lambda node: q.is_member_access(node, ASSERTION_IDENTIFIER, CONTEXT_PROPERTY),
    )
    for node in accesses:
        q.replace(node, b.identifier(SHARED_CONTEXT_NAME))
    report.record(REWRITE_PASS, len(accesses))


def _abort(report: TransformReport, message: str, node: Node | None = None) -> None:
    _logger.info(message)
    report.add(EXTRACT_PASS, message, node=node)


def _asserted_type(value: Node | None) -> Node | None:
    """Return the type of ``x as T`` or ``<T>x``."""
    while value is not None and value.type == "parenthesized_expression":
        inner = value.named_children
        value = inner[0] if inner else None
    if value is None:
        return None
    if value.type == "as_expression":
        parts = value.named_children
        return parts[-1] if len(parts) == 2 else None
    if value.type == "type_assertion":
        type_arguments = value.named_children[0] if value.named_children else None
        if type_arguments is not None and type_arguments.type == "type_arguments":
            types = type_arguments.named_children
            return types[0] if types else None
    return None


def _property_names(literal: Node) -> list[str]:
    """Names of ``identifier: type`` property signatures; other members are skipped."""
    names = []
    for member in literal.named_children:
        if member.type != "property_signature":
            continue
        name = member.child_by_field("name")
        if name is not None and name.type == "property_identifier":
            names.append(name.text or "")
    return names


def _enclosing_statement(declarator: Node) -> Node | None:
    declaration = declarator.parent
    if declaration is None or declaration.type not in _DECLARATIONS:
        return None
    statement = declaration
    if statement.parent is not None and statement.parent.type == "export_statement":
        statement = statement.parent
    if statement.parent is None or statement.parent.type not in _STATEMENT_LISTS:
        return None
    return statement


def _remove_declarator(declarator: Node, statement: Node) -> None:
    declaration = declarator.parent
    assert declaration is not None
    siblings = [child for child in declaration.named_children if child.type == "variable_declarator"]
    if len(siblings) == 1:
        q.remove(statement)
    else:
        q.remove(declarator)


def _context_is_reassigned(root: Node) -> bool:
    """True when some ``t.context = ...`` assigns the whole context object."""
    return any(
        q.is_member_access(node.child_by_field("left"), ASSERTION_IDENTIFIER, CONTEXT_PROPERTY)
        for node in q.find(root, "assignment_expression")
    )
