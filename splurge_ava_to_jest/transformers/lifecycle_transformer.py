"""Rewrite ``test.<hook>`` and ``test.<modifier>`` calls.

Hooks become Jest globals and lose their title, modifiers keep the
``test.`` prefix and their title::

    test.beforeEach('setup', t => {...})  ->  beforeEach(() => {...})
    test.failing('x', t => {...})         ->  test.skip('x', () => {...})

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..syntax import Node, SourceTree
from ..syntax import builders as b
from ..syntax import query as q
from .report import TransformReport
from .rules import ASSERTION_IDENTIFIER, LIFECYCLE_RULES, TEST_IDENTIFIER, TITLELESS_HOOKS

PASS_NAME = "rewrite_lifecycle_calls"

_TITLE_TYPES = frozenset({"string", "template_string"})

_logger = logging.getLogger(__name__)


def _is_lifecycle_call(call: Node) -> bool:
    callee = call.child_by_field("function")
    return q.is_member_access(callee, TEST_IDENTIFIER) and q.property_name(callee) in LIFECYCLE_RULES


def _drop_title(call: Node) -> None:
    args = q.call_arguments(call)
    if args and args[0].type in _TITLE_TYPES:
        q.remove(args[0])


def _drop_context_parameter(call: Node) -> None:
    callback = next((arg for arg in q.call_arguments(call) if q.is_function(arg)), None)
    if callback is None:
        return
    params = q.function_parameters(callback)
    if params and q.parameter_name(params[0]) == ASSERTION_IDENTIFIER:
        q.remove_parameter(callback, params[0])


def rewrite_lifecycle_calls(tree: SourceTree, report: TransformReport) -> None:
    """Map every ``test.<name>`` call listed in the lifecycle table."""
    calls = q.find(tree.root, "call_expression", _is_lifecycle_call)
    for call in calls:
        callee = call.child_by_field("function")
        assert callee is not None
        name = q.property_name(callee) or ""
        q.replace(callee, b.dotted(LIFECYCLE_RULES[name]))
        if name in TITLELESS_HOOKS:
            _drop_title(call)
        _drop_context_parameter(call)
    if calls:
        _logger.debug(f"Rewrote {len(calls)} lifecycle call(s) in {tree.source_file}")
    report.record(PASS_NAME, len(calls))
