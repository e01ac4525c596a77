"""Rewrite ``t.<assertion>(...)`` calls into ``expect`` matchers.

The mapping lives in :data:`~.rules.ASSERTION_RULES`. Most entries are a
plain matcher rename::

    t.is(a, b)        ->  expect(a).toBe(b)
    t.notRegex(s, r)  ->  expect(s).not.toMatch(r)

and three families need bespoke construction:

    t.true(a)         ->  expect(a).toBeTruthy()
    t.throws(fn, E)   ->  expect(() => {}).toThrow(E)
    t.plan(3)         ->  expect.assertions(3)

``t.throws`` keeps only its expected-error argument; the thrower itself is
replaced by an empty arrow function and must be filled in by hand.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..syntax import Node, SourceTree
from ..syntax import builders as b
from ..syntax import query as q
from .report import Severity, TransformReport
from .rules import (
    ASSERTION_IDENTIFIER,
    BOOLEAN_MATCHERS,
    EXCLUDED_ASSERTIONS,
    THROW_MATCHERS,
    SpecialAssertion,
    lookup_assertion,
)

PASS_NAME = "rewrite_assertions"
EXPECT = "expect"

_logger = logging.getLogger(__name__)


def _is_assertion_call(call: Node) -> bool:
    callee = call.child_by_field("function")
    return q.is_member_access(callee, ASSERTION_IDENTIFIER) and q.property_name(callee) not in EXCLUDED_ASSERTIONS


def _expect(args: list[Node], matcher: str, matcher_args: list[Node]) -> Node:
    """``expect(args).matcher(matcher_args)``."""
    subject = b.call_expression(b.identifier(EXPECT), args)
    return b.call_expression(b.dotted(matcher, subject), matcher_args)


def build_expectation(name: str, rule: str | SpecialAssertion, args: list[Node]) -> Node:
    """Build the Jest call for assertion ``name`` from detached ``args``."""
    first, second = args[:1], args[1:2]
    if rule is SpecialAssertion.BOOLEAN_ASSERTION:
        return _expect(first, BOOLEAN_MATCHERS[name], [])
    if rule is SpecialAssertion.THROW_ASSERTION:
        return _expect([b.arrow_function()], THROW_MATCHERS[name], second)
    if rule is SpecialAssertion.PLAN_ASSERTION:
        return b.call_expression(b.dotted(f"{EXPECT}.assertions"), first)
    return _expect(first, rule, second)


def rewrite_assertions(tree: SourceTree, report: TransformReport) -> None:
    """Replace every mapped ``t.<name>(...)`` call with its ``expect`` form.

    Calls are visited innermost first, so an assertion nested inside the
    arguments of another is already converted when its parent is cloned.
    Unmapped names produce one warning diagnostic each and stay as written.
    """
    changed = 0
    for call in reversed(q.find(tree.root, "call_expression", _is_assertion_call)):
        name = q.property_name(call.child_by_field("function")) or ""
        rule = lookup_assertion(name)
        if rule is None:
            _logger.warning(f'"{name}" is currently not supported')
            report.add(PASS_NAME, f'"{name}" is currently not supported', Severity.WARNING, call)
            continue

        args = [q.clone_with_comments(arg) for arg in q.call_arguments(call)]
        q.replace(call, build_expectation(name, rule, args))
        changed += 1

    report.record(PASS_NAME, changed)
