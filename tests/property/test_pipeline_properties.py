"""Property-based tests for the whole AVA to Jest transformation."""

import re

from hypothesis import given

from splurge_ava_to_jest.syntax import parse_source
from splurge_ava_to_jest.transformers.rules import ASSERTION_RULES
from tests.hypothesis_config import PIPELINE_SETTINGS
from tests.property.strategies import ava_sources, binary_assertions
from tests.test_utils import transform

ASSERTION_CALL = re.compile(r"\bt\.[a-zA-Z]+\(")


class TestPipelineProperties:
    @PIPELINE_SETTINGS
    @given(source=ava_sources())
    def test_output_parses_and_has_no_ava_left(self, source: str) -> None:
        code, _ = transform(source)

        parse_source(code, source_file="out.test.ts")
        assert "from 'ava'" not in code
        assert not ASSERTION_CALL.search(code)
        assert "t =>" not in code

    @PIPELINE_SETTINGS
    @given(source=ava_sources())
    def test_transform_is_idempotent(self, source: str) -> None:
        once, _ = transform(source)
        twice, _ = transform(once)

        assert twice == once

    @PIPELINE_SETTINGS
    @given(assertion=binary_assertions())
    def test_renamed_assertions_keep_their_arguments(self, assertion: tuple[str, str, str]) -> None:
        name, actual, expected = assertion
        source = f"import test from 'ava'\n\ntest('x', t => {{\n  t.{name}({actual}, {expected})\n}})\n"

        code, report = transform(source)

        assert code == f"test('x', () => {{\n  expect({actual}).{ASSERTION_RULES[name]}({expected})\n}})\n"
        assert report.warnings() == []
