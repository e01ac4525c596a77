"""Static rule tables mapping AVA API names to their Jest equivalents.

All tables are read-only constants built once at import time.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class SpecialAssertion(Enum):
    """Assertions whose Jest form needs bespoke construction."""

    BOOLEAN_ASSERTION = "boolean"
    THROW_ASSERTION = "throws"
    PLAN_ASSERTION = "plan"


AVA_MODULE = "ava"
TEST_IDENTIFIER = "test"
ASSERTION_IDENTIFIER = "t"
CONTEXT_PROPERTY = "context"
SHARED_CONTEXT_NAME = "sharedContext"
SHARED_CONTEXT_TYPE_NAME = "SharedContextType"

ASSERTION_RULES: MappingProxyType[str, str | SpecialAssertion] = MappingProxyType(
    {
        "ok": "toBeTruthy",
        "truthy": "toBeTruthy",
        "falsy": "toBeFalsy",
        "notOk": "toBeFalsy",
        "true": SpecialAssertion.BOOLEAN_ASSERTION,
        "false": SpecialAssertion.BOOLEAN_ASSERTION,
        "is": "toBe",
        "not": "not.toBe",
        "same": "toEqual",
        "deepEqual": "toEqual",
        "notSame": "not.toEqual",
        "notDeepEqual": "not.toEqual",
        "throws": SpecialAssertion.THROW_ASSERTION,
        "notThrows": SpecialAssertion.THROW_ASSERTION,
        "regex": "toMatch",
        "notRegex": "not.toMatch",
        "ifError": "toBeFalsy",
        "error": "toBeFalsy",
        "plan": SpecialAssertion.PLAN_ASSERTION,
        "snapshot": "toMatchSnapshot",
    }
)

# Terminal assertions with no Jest counterpart; left exactly as written.
EXCLUDED_ASSERTIONS = frozenset({"end", "fail", "pass"})

BOOLEAN_MATCHERS = MappingProxyType({"true": "toBeTruthy", "false": "toBeFalsy"})
THROW_MATCHERS = MappingProxyType({"throws": "toThrow", "notThrows": "not.toThrow"})

LIFECYCLE_RULES: MappingProxyType[str, str] = MappingProxyType(
    {
        "before": "beforeAll",
        "after": "afterAll",
        "beforeEach": "beforeEach",
        "afterEach": "afterEach",
        "only": "test.only",
        "skip": "test.skip",
        "failing": "test.skip",
        "todo": "test.todo",
    }
)

# Jest hooks take no title argument; modifiers keep theirs.
TITLELESS_HOOKS = frozenset({"before", "after", "beforeEach", "afterEach"})


def lookup_assertion(name: str) -> str | SpecialAssertion | None:
    """Return the Jest form for an AVA assertion name, or ``None`` if unmapped."""
    return ASSERTION_RULES.get(name)
