"""Formatting and validation steps used by the migration pipeline.

Generated code is formatted by running ``prettier`` as an external
process with a fixed house style. A missing or failing formatter never
fails the migration: the unformatted code is passed on with a warning.
The result is then validated by parsing it again.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import subprocess

from ..context import MigrationConfig, PipelineContext
from ..exceptions import FormattingError, ParseError
from ..pipeline import Step
from ..result import Result
from ..syntax import parse_source

PRETTIER_STYLE = ("--no-semi", "--single-quote", "--trailing-comma", "none")
PRETTIER_PARSER = "babel-ts"


def build_prettier_command(config: MigrationConfig) -> list[str]:
    """Return the prettier command line reading source from stdin."""
    return [
        *config.prettier_command,
        *PRETTIER_STYLE,
        "--print-width",
        str(config.print_width),
        "--parser",
        PRETTIER_PARSER,
    ]


def run_prettier(code: str, config: MigrationConfig) -> str:
    """Format ``code`` with prettier.

    Raises:
        FormattingError: If prettier is not installed, times out or exits
            with a non-zero status.
    """
    cmd = build_prettier_command(config)
    try:
        completed = subprocess.run(
            cmd,
            input=code,
            capture_output=True,
            text=True,
            timeout=config.formatter_timeout,
        )
    except FileNotFoundError as e:
        raise FormattingError(f"Formatter not found: {cmd[0]}", cmd) from e
    except subprocess.TimeoutExpired as e:
        raise FormattingError(f"Formatter timed out after {config.formatter_timeout}s", cmd) from e

    if completed.returncode != 0:
        raise FormattingError(f"Formatter exited with status {completed.returncode}", cmd, completed.stderr.strip())
    return completed.stdout


class FormatCodeStep(Step[str, str]):
    """Format generated code with prettier when ``format_output`` is set."""

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        if not context.should_format_code():
            return Result.success(code, metadata={"prettier_applied": False})

        try:
            formatted_code = run_prettier(code, context.config)
        except FormattingError as e:
            self._logger.warning(f"{e.message} for {context.source_file}")
            return Result.warning(
                code,
                [f"{context.source_file}: code formatting failed: {e.message}"],
                metadata={"prettier_applied": False, "formatting_failed": True, **e.details},
            )

        return Result.success(
            formatted_code,
            metadata={
                "prettier_applied": True,
                "original_lines": len(code.splitlines()),
                "formatted_lines": len(formatted_code.splitlines()),
            },
        )


class ValidateGeneratedCodeStep(Step[str, str]):
    """Re-parse generated code; a parse error here fails the file."""

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        try:
            parse_source(code, source_file=context.source_file)
        except ParseError as e:
            return Result.failure(e, {"source_file": context.source_file, "stage": "validation"})
        return Result.success(code)
