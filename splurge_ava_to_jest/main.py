"""Programmatic API for splurge_ava_to_jest.

``migrate`` runs the full file pipeline (used by the CLI); ``transform_code``
converts a source string in memory without formatting or file output.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .context import MigrationConfig
from .migration_orchestrator import MigrationOrchestrator
from .result import Result
from .transformers import AvaToJestTransformer

_logger = logging.getLogger(__name__)


def _expand_sources(
    orchestrator: MigrationOrchestrator, sources: list[str], config: MigrationConfig
) -> list[tuple[str, str | None]]:
    """Replace directories by the AVA test files they contain.

    Each file is paired with the directory it was found in, or ``None``
    when it was given explicitly.
    """
    files: list[tuple[str, str | None]] = []
    for src in sources:
        path = Path(src)
        if path.is_dir():
            found = orchestrator.find_ava_files(path, config)
            _logger.info(f"Found {len(found)} AVA test file(s) in {src}")
            files.extend((file, src) for file in found)
        else:
            files.append((src, None))
    return files


def migrate(source_files: Iterable[str] | str, config: MigrationConfig | None = None) -> Result[list[str]]:
    """Migrate one or more files (or directories) from AVA to Jest.

    Args:
        source_files: Iterable of paths, or a single path string.
            Directories are searched for AVA test files.
        config: Optional ``MigrationConfig`` to control migration behavior.

    Returns:
        ``Result`` with the list of target paths. Unconverted constructs
        and formatting problems are reported as warnings; informational
        diagnostics are listed in ``metadata["notes"]``. Directory
        contents keep their layout below ``target_root`` and
        ``backup_root``; of two files that would write the same path the
        later one fails. In dry-run mode ``metadata["generated_code"]``
        maps each target path to its code.
        Files that failed are listed in ``metadata["failed_files"]``; the
        result is a failure when every file failed or when ``fail_fast``
        is set and one file failed.
    """
    sources = [source_files] if isinstance(source_files, str) else list(source_files)
    config = config or MigrationConfig()

    orchestrator = MigrationOrchestrator()
    files = _expand_sources(orchestrator, sources, config)

    written: list[str] = []
    warnings: list[str] = []
    notes: list[str] = []
    generated: dict[str, str] = {}
    origins: dict[str, str] = {}
    failed: dict[str, str] = {}
    first_error: Exception | None = None

    for src, result in orchestrator.migrate_files(files, config):
        if result.is_error():
            error = result.error or RuntimeError(f"Migration failed: {src}")
            if config.fail_fast:
                return Result.failure(error, {"source_file": src, "completed": written})
            first_error = first_error or error
            failed[src] = str(error)
            continue

        target = str(result.data) if result.data is not None else src
        written.append(target)
        warnings.extend(result.warnings or [])
        result_metadata = result.metadata or {}
        notes.extend(result_metadata.get("notes", []))
        if "generated_code" in result_metadata:
            generated[target] = result_metadata["generated_code"]
            origins[target] = src

    if failed and not written and first_error is not None:
        return Result.failure(first_error, {"failed_files": failed})

    metadata: dict[str, object] = {}
    if generated:
        metadata["generated_code"] = generated
        metadata["sources"] = origins
    if notes:
        metadata["notes"] = notes
    if failed:
        metadata["failed_files"] = failed
        warnings.extend(f"{src}: {message}" for src, message in failed.items())

    if warnings:
        return Result.warning(written, warnings, metadata)
    return Result.success(written, metadata)


def transform_code(source: str, source_file: str = "<string>") -> str:
    """Convert AVA source text to Jest source text in memory.

    Diagnostics are logged but not returned; use
    :class:`~splurge_ava_to_jest.transformers.AvaToJestTransformer` directly
    to get the report.

    Raises:
        ParseError: If ``source`` cannot be parsed.
    """
    code, _ = AvaToJestTransformer().transform(source, source_file=source_file)
    return code
