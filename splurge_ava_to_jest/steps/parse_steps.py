"""Parsing and transformation steps for the migration pipeline.

These steps parse TypeScript source into a :class:`SourceTree`, apply
the AVA -> Jest passes to it and print the result back to text for the
formatting and output steps.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import time
from typing import Any

from ..context import PipelineContext
from ..events import DiagnosticEvent, EventBus
from ..exceptions import ParseError
from ..pipeline import Step
from ..result import Result
from ..syntax import SourceTree, parse_source
from ..transformers import AvaToJestTransformer, Severity


class ParseSourceStep(Step[str, SourceTree]):
    """Parse source text with the grammar matching the source file extension."""

    def execute(self, context: PipelineContext, source_code: str) -> Result[SourceTree]:
        try:
            tree = parse_source(source_code, source_file=context.source_file)
        except ParseError as e:
            return Result.failure(e, {"source_file": context.source_file})
        return Result.success(tree, {"dialect": tree.dialect})


class TransformAvaStep(Step[SourceTree, SourceTree]):
    """Apply the AVA -> Jest passes to the parsed tree in place.

    Every diagnostic reported by a pass is published as a
    :class:`DiagnosticEvent`. Warning diagnostics turn the result into a
    warning; informational ones are kept in ``metadata["notes"]``.
    """

    def __init__(self, name: str, event_bus: EventBus, transformer: AvaToJestTransformer | None = None) -> None:
        super().__init__(name, event_bus)
        self.transformer = transformer or AvaToJestTransformer()

    def execute(self, context: PipelineContext, tree: SourceTree) -> Result[SourceTree]:
        report = self.transformer.transform_tree(tree)

        for diagnostic in report.diagnostics:
            self.event_bus.publish(
                DiagnosticEvent(
                    timestamp=time.time(),
                    run_id=context.run_id,
                    context=context,
                    pass_name=diagnostic.pass_name,
                    message=diagnostic.message,
                    severity=diagnostic.severity.value,
                    line=diagnostic.line,
                    column=diagnostic.column,
                )
            )

        metadata: dict[str, Any] = {"changes": dict(report.changes), "total_changes": report.total_changes}
        notes = report.messages(Severity.INFO)
        if notes:
            metadata["notes"] = notes
        warnings = report.messages(Severity.WARNING)
        if warnings:
            return Result.warning(tree, warnings, metadata)
        return Result.success(tree, metadata)


class GenerateCodeStep(Step[SourceTree, str]):
    """Print the transformed tree back to source text."""

    def execute(self, context: PipelineContext, tree: SourceTree) -> Result[str]:
        return Result.success(tree.code)
