"""Property-based tests for removal of ``ava`` imports."""

from hypothesis import given

from splurge_ava_to_jest.transformers.import_transformer import remove_ava_imports
from tests.hypothesis_config import DEFAULT_SETTINGS
from tests.property.strategies import ava_sources, plain_sources
from tests.test_utils import apply_pass


class TestImportRemovalProperties:
    @DEFAULT_SETTINGS
    @given(source=plain_sources())
    def test_sources_without_ava_import_are_unchanged(self, source: str) -> None:
        code, report = apply_pass(source, remove_ava_imports)

        assert code == source
        assert report.total_changes == 0

    @DEFAULT_SETTINGS
    @given(source=ava_sources())
    def test_ava_import_is_removed(self, source: str) -> None:
        code, report = apply_pass(source, remove_ava_imports)

        assert "from 'ava'" not in code
        assert report.total_changes == 1

    @DEFAULT_SETTINGS
    @given(source=ava_sources())
    def test_removal_is_idempotent(self, source: str) -> None:
        once, _ = apply_pass(source, remove_ava_imports)
        twice, _ = apply_pass(once, remove_ava_imports)

        assert twice == once
