"""Unit tests for the hook and modifier rewrite pass."""

import pytest

from splurge_ava_to_jest.transformers.lifecycle_transformer import PASS_NAME, rewrite_lifecycle_calls
from tests.test_utils import apply_pass


@pytest.mark.parametrize(
    "source,expected",
    [
        ("test.before('connect', t => {})", "beforeAll(() => {})"),
        ("test.after(t => {})", "afterAll(() => {})"),
        ("test.beforeEach(async t => {})", "beforeEach(async () => {})"),
        ("test.afterEach(`cleanup`, (t) => {})", "afterEach(() => {})"),
        ("test.before(function (t) {})", "beforeAll(function () {})"),
        ("test.before(setup)", "beforeAll(setup)"),
        ("test.before(ctx => {})", "beforeAll(ctx => {})"),
        ("test.beforeEach((t, extra) => {})", "beforeEach((extra) => {})"),
    ],
)
def test_hooks_become_jest_globals(source, expected):
    code, report = apply_pass(source, rewrite_lifecycle_calls)

    assert code == expected
    assert report.changes == {PASS_NAME: 1}


@pytest.mark.parametrize(
    "source,expected",
    [
        ("test.only('focused', t => {})", "test.only('focused', () => {})"),
        ("test.skip('skipped', async t => {})", "test.skip('skipped', async () => {})"),
        ("test.failing('known bug', t => {})", "test.skip('known bug', () => {})"),
        ("test.todo('later')", "test.todo('later')"),
    ],
)
def test_modifiers_keep_their_title(source, expected):
    code, _ = apply_pass(source, rewrite_lifecycle_calls)
    assert code == expected


@pytest.mark.parametrize(
    "source",
    [
        "test.serial('x', t => {})",
        "test.after.always(t => {})",
        "other.before(t => {})",
        "test('x', t => {})",
    ],
)
def test_names_outside_the_table_are_untouched(source):
    code, report = apply_pass(source, rewrite_lifecycle_calls)

    assert code == source
    assert report.changes == {PASS_NAME: 0}


def test_rewritten_modifiers_are_stable():
    once, _ = apply_pass("test.failing('x', t => {})\n", rewrite_lifecycle_calls)
    twice, report = apply_pass(once, rewrite_lifecycle_calls)

    assert twice == once == "test.skip('x', () => {})\n"
    assert report.changes == {PASS_NAME: 1}
