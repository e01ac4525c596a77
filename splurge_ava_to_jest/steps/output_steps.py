"""Output steps used by the migration pipeline.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from pathlib import Path

from ..context import PipelineContext
from ..pipeline import Step
from ..result import Result


class WriteOutputStep(Step[str, str]):
    """Write generated code to ``context.target_file``.

    In dry-run mode nothing is written; the generated code is returned in
    the result metadata so callers (for example the CLI) can present it.
    """

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        if context.is_dry_run():
            return Result.success(
                str(context.target_file),
                metadata={"dry_run": True, "target_file": context.target_file, "generated_code": code},
            )

        try:
            target_path = context.get_target_path()
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(code, encoding="utf-8")
        except OSError as e:
            return Result.failure(e, {"target_file": context.target_file})
        return Result.success(str(Path(context.target_file)), metadata={"target_file": context.target_file})
