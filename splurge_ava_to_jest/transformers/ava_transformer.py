"""AVA -> Jest transformation driver.

This module composes the structural rewrite passes into a single run over
one source file. The passes are applied in a fixed order, each mutating
the shared :class:`~splurge_ava_to_jest.syntax.SourceTree` in place:

- remove imports of ``ava``;
- hoist the typed ``t.context`` into ``sharedContext``;
- rewrite ``t.context`` references to ``sharedContext``;
- drop the ``t`` parameter from ``test(...)`` callbacks;
- rewrite ``t.<assertion>`` calls into ``expect`` matchers;
- rewrite ``test.<hook>``/``test.<modifier>`` calls.

The order matters: ``t.context`` must be gone before ``t`` parameters are
removed, and lifecycle callbacks are handled last so their bodies have
already been converted.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple

from ..exceptions import MigrationError, TransformationError
from ..syntax import SourceTree, parse_source
from . import (
    assert_transformer,
    context_transformer,
    import_transformer,
    lifecycle_transformer,
    test_definition_transformer,
)
from .report import TransformReport


class TransformationPass(NamedTuple):
    name: str
    apply: Callable[[SourceTree, TransformReport], None]


TRANSFORMATION_PASSES: tuple[TransformationPass, ...] = (
    TransformationPass(import_transformer.PASS_NAME, import_transformer.remove_ava_imports),
    TransformationPass(context_transformer.EXTRACT_PASS, context_transformer.extract_shared_context),
    TransformationPass(context_transformer.REWRITE_PASS, context_transformer.rewrite_context_references),
    TransformationPass(test_definition_transformer.PASS_NAME, test_definition_transformer.adjust_test_definitions),
    TransformationPass(assert_transformer.PASS_NAME, assert_transformer.rewrite_assertions),
    TransformationPass(lifecycle_transformer.PASS_NAME, lifecycle_transformer.rewrite_lifecycle_calls),
)


class AvaToJestTransformer:
    """Run the AVA -> Jest passes over source text or a parsed tree.

    A transformer holds no per-file state, so one instance can convert
    any number of files sequentially.

    Args:
        passes: Passes to apply, in order. Defaults to
            :data:`TRANSFORMATION_PASSES`.
    """

    def __init__(self, passes: Sequence[TransformationPass] = TRANSFORMATION_PASSES) -> None:
        self.passes = tuple(passes)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def transform_tree(self, tree: SourceTree) -> TransformReport:
        """Apply every pass to ``tree`` in place.

        Raises:
            TransformationError: If a pass fails unexpectedly. Soft
                aborts are reported through the returned report instead.
        """
        report = TransformReport(source_file=tree.source_file)
        for transformation in self.passes:
            try:
                transformation.apply(tree, report)
            except MigrationError:
                raise
            except Exception as e:
                raise TransformationError(
                    f"Pass '{transformation.name}' failed on {tree.source_file}: {e}",
                    pass_name=transformation.name,
                ) from e
        self._logger.debug(f"Applied {len(self.passes)} passes to {tree.source_file}: {report.changes}")
        return report

    def transform(
        self, source: str, source_file: str = "<string>", dialect: str | None = None
    ) -> tuple[str, TransformReport]:
        """Parse, transform and print ``source``.

        Returns:
            The printed Jest source and the report of the run.

        Raises:
            ParseError: If ``source`` cannot be parsed.
            TransformationError: If a pass fails unexpectedly.
        """
        tree = parse_source(source, source_file=source_file, dialect=dialect)
        report = self.transform_tree(tree)
        return tree.code, report

    def transform_code(self, code: str) -> str:
        """Convenience wrapper returning only the transformed text."""
        transformed, _ = self.transform(code)
        return transformed
