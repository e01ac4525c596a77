"""Unit tests for the assertion rewrite pass."""

import logging

import pytest

from splurge_ava_to_jest.syntax import builders as b
from splurge_ava_to_jest.transformers.assert_transformer import PASS_NAME, build_expectation, rewrite_assertions
from splurge_ava_to_jest.transformers.report import Severity
from splurge_ava_to_jest.transformers.rules import ASSERTION_RULES, SpecialAssertion
from tests.test_utils import apply_pass

RENAME_RULES = sorted((name, rule) for name, rule in ASSERTION_RULES.items() if isinstance(rule, str))


@pytest.mark.parametrize("name,matcher", RENAME_RULES)
def test_rename_rules_preserve_argument_order(name, matcher):
    code, report = apply_pass(f"t.{name}(p, q)\n", rewrite_assertions)

    assert code == f"expect(p).{matcher}(q)\n"
    assert report.changes == {PASS_NAME: 1}
    assert report.diagnostics == []


@pytest.mark.parametrize(
    "source,expected",
    [
        ("t.true(p)", "expect(p).toBeTruthy()"),
        ("t.false(p)", "expect(p).toBeFalsy()"),
        ("t.plan(3)", "expect.assertions(3)"),
        ("t.throws(() => boom())", "expect(() => {}).toThrow()"),
        ("t.throws(() => boom(), TypeError)", "expect(() => {}).toThrow(TypeError)"),
        ("t.notThrows(() => ok())", "expect(() => {}).not.toThrow()"),
        ("t.truthy(p)", "expect(p).toBeTruthy()"),
        ("t.snapshot(tree)", "expect(tree).toMatchSnapshot()"),
        ("t.is(a, b, 'a message')", "expect(a).toBe(b)"),
        ("t.deepEqual(\n  actual,\n  expected\n)", "expect(actual).toEqual(expected)"),
        ("t.is(t.true(x), y)", "expect(expect(x).toBeTruthy()).toBe(y)"),
        ("await t.is(await load(), 1)", "await expect(await load()).toBe(1)"),
        ("t.is(a, /* expected */ b)", "expect(a).toBe(/* expected */ b)"),
        ("t.true(/* flag */ ok)", "expect(/* flag */ ok).toBeTruthy()"),
    ],
)
def test_special_and_edge_conversions(source, expected):
    code, _ = apply_pass(source, rewrite_assertions)
    assert code == expected


def test_unmapped_assertion_is_kept_with_one_warning(caplog):
    source = "test('x', () => {\n  t.banana(p)\n})\n"

    with caplog.at_level(logging.WARNING):
        code, report = apply_pass(source, rewrite_assertions)

    assert code == source
    assert len(report.diagnostics) == 1
    diagnostic = report.diagnostics[0]
    assert diagnostic.message == '"banana" is currently not supported'
    assert diagnostic.severity is Severity.WARNING
    assert (diagnostic.line, diagnostic.column) == (2, 3)
    assert report.changes == {PASS_NAME: 0}
    assert '"banana" is currently not supported' in caplog.text


@pytest.mark.parametrize("name", ["pass", "fail", "end"])
def test_excluded_assertions_are_silent(name):
    source = f"t.{name}()\n"
    code, report = apply_pass(source, rewrite_assertions)

    assert code == source
    assert report.diagnostics == []


def test_calls_on_other_objects_are_ignored():
    source = "x.is(a, b)\nt.context.is(a, b)\nassert.is(a, b)\n"
    code, report = apply_pass(source, rewrite_assertions)

    assert code == source
    assert report.diagnostics == []


def test_build_expectation_directly():
    def args(*names):
        return [b.identifier(n) for n in names]

    assert build_expectation("is", "toBe", args("a", "b")).code == "expect(a).toBe(b)"
    assert build_expectation("not", "not.toBe", args("a", "b")).code == "expect(a).not.toBe(b)"
    assert build_expectation("false", SpecialAssertion.BOOLEAN_ASSERTION, args("a")).code == "expect(a).toBeFalsy()"
    assert build_expectation("plan", SpecialAssertion.PLAN_ASSERTION, args("n")).code == "expect.assertions(n)"
    assert (
        build_expectation("throws", SpecialAssertion.THROW_ASSERTION, args("fn", "Err")).code
        == "expect(() => {}).toThrow(Err)"
    )
    assert build_expectation("truthy", "toBeTruthy", []).code == "expect().toBeTruthy()"
