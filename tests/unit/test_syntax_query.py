"""Tests for the tree query and edit helpers."""

import pytest

from splurge_ava_to_jest.syntax import Node
from splurge_ava_to_jest.syntax import builders as b
from splurge_ava_to_jest.syntax import query as q
from tests.test_utils import parse


def _calls(tree):
    return q.find(tree.root, "call_expression")


def test_find_returns_pre_order_matches():
    tree = parse("outer(inner(1))\n")
    calls = _calls(tree)

    assert [c.child_by_field("function").text for c in calls] == ["outer", "inner"]
    assert q.find_first(tree.root, "call_expression") is calls[0]
    assert q.find_first(tree.root, "class_declaration") is None


def test_find_with_predicate_and_several_types():
    tree = parse("a(1)\nconst b = 2\n")
    found = q.find(tree.root, {"number", "identifier"}, lambda n: n.text != "a")
    assert [n.text for n in found] == ["1", "b", "2"]


def test_clone_with_comments_keeps_comments_in_front():
    tree = parse("f(a, /* one */ /* two */ b, c)\n")
    args = q.call_arguments(_calls(tree)[0])

    assert [arg.text for arg in args] == ["a", "b", "c"]
    copy = q.clone_with_comments(args[1])
    assert copy.code == " /* one */ /* two */ b"
    assert copy.parent is None
    assert q.clone_with_comments(args[2]).code == " c"
    assert tree.code == "f(a, /* one */ /* two */ b, c)\n"


def test_member_access_matching():
    tree = parse("t.context\nt?.context\nx.context\nt['context']\n")
    members = q.find(tree.root, "member_expression")

    assert q.is_member_access(members[0], "t", "context")
    assert q.is_member_access(members[0], "t")
    assert not q.is_member_access(members[0], "t", "other")
    assert not q.is_member_access(members[1], "t", "context")
    assert not q.is_member_access(members[2], "t", "context")
    assert not q.is_member_access(None, "t")
    assert q.property_name(members[0]) == "context"


def test_string_value():
    tree = parse("f('ava', \"jest\", `tpl`)\n")
    args = q.call_arguments(_calls(tree)[0])

    assert q.string_value(args[0]) == "ava"
    assert q.string_value(args[1]) == "jest"
    assert q.string_value(args[2]) is None
    assert q.string_value(None) is None


@pytest.mark.parametrize(
    "source,names",
    [
        ("f(t => 1)", ["t"]),
        ("f((t, u) => 1)", ["t", "u"]),
        ("f(async (t: Ctx) => 1)", ["t"]),
        ("f(function (t) {})", ["t"]),
        ("f(() => 1)", []),
        ("f(({ a }) => a)", [None]),
    ],
)
def test_function_parameters(source, names):
    fn = q.call_arguments(_calls(parse(source))[0])[0]

    assert q.is_function(fn)
    assert [q.parameter_name(p) for p in q.function_parameters(fn)] == names


@pytest.mark.parametrize(
    "source,expected",
    [
        ("f(t => 1)", "f(() => 1)"),
        ("f(async t => 1)", "f(async () => 1)"),
        ("f((t, u) => 1)", "f(() => 1)"),
        ("f(function named(t) {})", "f(function named() {})"),
    ],
)
def test_clear_parameters(source, expected):
    tree = parse(source)
    fn = q.call_arguments(_calls(tree)[0])[0]

    assert q.clear_parameters(fn) is True
    assert tree.code == expected
    assert q.clear_parameters(fn) is False


def test_remove_parameter_keeps_the_rest():
    tree = parse("f((t, u) => u)")
    fn = q.call_arguments(_calls(tree)[0])[0]

    q.remove_parameter(fn, q.function_parameters(fn)[0])
    assert tree.code == "f((u) => u)"


@pytest.mark.parametrize(
    "index,expected",
    [(0, "f(b, c)"), (1, "f(a, c)"), (2, "f(a, b)")],
)
def test_remove_list_item_fixes_separators(index, expected):
    tree = parse("f(a, b, c)")
    q.remove(q.call_arguments(_calls(tree)[0])[index])
    assert tree.code == expected


def test_remove_statement_keeps_layout():
    tree = parse("a()\nb()\nc()\n")
    statements = tree.root.named_children

    q.remove(statements[1])
    assert tree.code == "a()\nc()\n"

    q.remove(statements[0])
    assert tree.code == "c()\n"


def test_replace_takes_over_leading_whitespace():
    tree = parse("f(\n  old)")
    old = q.find_first(tree.root, "identifier", lambda n: n.text == "old")

    new = q.replace(old, b.identifier("new"))
    assert new.parent is not None
    assert tree.code == "f(\n  new)"

    with pytest.raises(ValueError):
        q.replace(old, b.identifier("again"))


def test_insert_before_and_after_use_anchor_indentation():
    tree = parse("function f() {\n  a()\n}\n")
    anchor = q.find_first(tree.root, "expression_statement")

    q.insert_before(anchor, Node("expression_statement", [b.call_expression(b.identifier("before"))]))
    q.insert_after(anchor, Node("expression_statement", [b.call_expression(b.identifier("after"))]))

    assert tree.code == "function f() {\n  before()\n  a()\n  after()\n}\n"


def test_edits_on_detached_nodes_raise():
    orphan = b.identifier("x")
    with pytest.raises(ValueError):
        q.remove(orphan)
    with pytest.raises(ValueError):
        q.insert_after(orphan, b.identifier("y"))
