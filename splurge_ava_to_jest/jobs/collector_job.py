"""Collector job: parse AVA source, convert it and print the result.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import GenerateCodeStep, ParseSourceStep, TransformAvaStep
from ..transformers import AvaToJestTransformer


class CollectorJob(Job[str, str]):
    """Turn AVA source text into unformatted Jest source text."""

    def __init__(self, event_bus: EventBus, transformer: AvaToJestTransformer | None = None):
        super().__init__("collector", [self._create_parsing_task(event_bus, transformer)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_parsing_task(self, event_bus: EventBus, transformer: AvaToJestTransformer | None) -> Task[str, str]:
        steps: list[Any] = [
            ParseSourceStep("parse_source", event_bus),
            TransformAvaStep("transform_ava", event_bus, transformer),
            GenerateCodeStep("generate_code", event_bus),
        ]
        return Task("parsing", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the job on ``initial_input``, the source text of ``context.source_file``."""
        self._logger.info(f"Converting {context.source_file}")
        if not isinstance(initial_input, str):
            return Result.failure(TypeError(f"Expected source text for {context.source_file}"))

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Conversion failed for {context.source_file}: {result.error}")
        elif result.is_warning():
            self._logger.info(f"Converted {context.source_file} with {len(result.warnings or [])} diagnostic(s)")
        return result
