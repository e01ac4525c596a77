"""Main migration orchestrator that coordinates all jobs.

Each source file is migrated by its own pipeline run:
collector (parse, convert, print) -> formatter (prettier, re-parse) ->
output (backup, write or dry-run). Files are processed sequentially and
independently.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from .context import MigrationConfig, PipelineContext
from .detectors import AvaFileDetector
from .events import EventBus, LoggingSubscriber
from .helpers.path_utils import PathValidationError, target_path_for, validate_source_path
from .jobs import CollectorJob, FormatterJob, OutputJob
from .jobs.output_job import backup_path_for
from .pipeline import Pipeline
from .result import Result
from .transformers import AvaToJestTransformer


class MigrationOrchestrator:
    """Wire the migration jobs together and run them per file.

    Args:
        event_bus: Optional external event bus; a new one is created
            when omitted.
        transformer: Optional transformer shared by every file.
    """

    def __init__(self, event_bus: EventBus | None = None, transformer: AvaToJestTransformer | None = None) -> None:
        self.event_bus = event_bus or EventBus()
        self.logger_subscriber = LoggingSubscriber(self.event_bus)
        self._logger = logging.getLogger(__name__)
        self._detector = AvaFileDetector()

        self.collector_job = CollectorJob(self.event_bus, transformer)
        self.formatter_job = FormatterJob(self.event_bus)
        self.output_job = OutputJob(self.event_bus)

    def migrate_file(
        self, source_file: str, config: MigrationConfig | None = None, source_root: str | None = None
    ) -> Result[str]:
        """Migrate a single AVA file to Jest.

        Args:
            source_file: The AVA test file.
            config: Optional ``MigrationConfig``.
            source_root: Directory the file was found in. Its relative
                location below it is kept under ``target_root`` and
                ``backup_root``.

        Returns:
            ``Result`` with the target path. In dry-run mode the metadata
            holds ``generated_code``. Unconverted constructs appear as
            warnings; informational diagnostics are in ``metadata["notes"]``.
        """
        config = config or MigrationConfig()
        self._logger.info(f"Starting migration of {source_file}")

        try:
            validated_source = validate_source_path(source_file)
            target_file = target_path_for(validated_source, config, source_root)
        except PathValidationError as e:
            return Result.failure(e, {"source_file": source_file})

        if not validated_source.is_file():
            return Result.failure(
                PathValidationError(f"Not a file: {source_file}", source_file, "not_a_file"),
                {"source_file": source_file},
            )

        size_mb = validated_source.stat().st_size / (1024 * 1024)
        if size_mb > config.max_file_size_mb:
            return Result.failure(
                PathValidationError(
                    f"File is larger than {config.max_file_size_mb} MB: {source_file}", source_file, "file_size"
                ),
                {"source_file": source_file},
            )

        try:
            source_code = validated_source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(f"Cannot read {source_file}: {e}")
            return Result.failure(e, {"source_file": source_file})

        context = PipelineContext.create(source_file=str(validated_source), target_file=str(target_file), config=config)
        if source_root is not None:
            context = context.with_metadata("source_root", str(source_root))
        result = self._create_migration_pipeline().execute(context, source_code)

        if result.is_error():
            self._logger.error(f"Migration failed for {source_file}: {result.error}")
        else:
            self._logger.info(f"Migration completed for {source_file}")
        return result

    def migrate_files(
        self, sources: Iterable[tuple[str, str | None]], config: MigrationConfig | None = None
    ) -> Iterator[tuple[str, Result[str]]]:
        """Migrate ``(source_file, source_root)`` pairs one after the other.

        A file whose target or backup path was already claimed by an
        earlier file of the same run fails with a ``path_collision``
        error before anything is written for it.

        Yields:
            The source file and its migration result.
        """
        config = config or MigrationConfig()
        claimed: dict[Path, str] = {}
        for source_file, source_root in sources:
            collision = self._claim_paths(claimed, source_file, config, source_root)
            if collision is not None:
                self._logger.error(f"Skipping {source_file}: {collision}")
                yield source_file, Result.failure(collision, {"source_file": source_file})
                continue
            yield source_file, self.migrate_file(source_file, config, source_root)

    def _claim_paths(
        self, claimed: dict[Path, str], source_file: str, config: MigrationConfig, source_root: str | None
    ) -> PathValidationError | None:
        try:
            paths = [target_path_for(source_file, config, source_root)]
            if config.backup_originals and config.backup_root:
                paths.append(backup_path_for(source_file, config.backup_root, source_root))
        except PathValidationError as e:
            return e

        owner_key = str(Path(source_file).resolve())
        keys = [path.resolve() for path in paths]
        for key in keys:
            owner = claimed.get(key)
            if owner is not None and owner != owner_key:
                return PathValidationError(f"{key} is already used by {owner}", source_file, "path_collision")
        for key in keys:
            claimed[key] = owner_key
        return None

    def find_ava_files(self, source_dir: Path, config: MigrationConfig) -> list[str]:
        """List AVA test files under ``source_dir`` matching ``file_patterns``."""
        candidates: set[Path] = set()
        for pattern in config.file_patterns:
            matches = source_dir.rglob(pattern) if config.recurse_directories else source_dir.glob(pattern)
            candidates.update(path for path in matches if path.is_file() and "node_modules" not in path.parts)
        return [str(path) for path in sorted(candidates) if self._detector.is_ava_file(path)]

    def migrate_directory(self, source_dir: str, config: MigrationConfig | None = None) -> Result[list[str]]:
        """Migrate every AVA test file under a directory.

        Returns:
            ``Result`` with the migrated source paths. Partial failures
            produce a warning result listing the failed files in
            ``metadata["failed_files"]``.
        """
        config = config or MigrationConfig()

        try:
            source_path = validate_source_path(source_dir)
        except PathValidationError as e:
            return Result.failure(e)
        if not source_path.is_dir():
            return Result.failure(PathValidationError(f"Not a directory: {source_dir}", source_dir, "not_a_directory"))

        ava_files = self.find_ava_files(source_path, config)
        if not ava_files:
            self._logger.warning(f"No AVA test files found in {source_dir}")
            return Result.success([])
        self._logger.info(f"Found {len(ava_files)} AVA test files to migrate")

        migrated: list[str] = []
        failed: list[str] = []
        warnings: list[str] = []
        notes: list[str] = []
        per_file: dict[str, Any] = {}

        for ava_file, result in self.migrate_files(((path, str(source_path)) for path in ava_files), config):
            per_file[ava_file] = result
            if result.is_error():
                failed.append(ava_file)
                if config.fail_fast:
                    break
            else:
                migrated.append(ava_file)
                warnings.extend(result.warnings or [])
                notes.extend((result.metadata or {}).get("notes", []))

        self._logger.info(f"Migration completed: {len(migrated)} successful, {len(failed)} failed")

        if failed:
            warnings.append(f"Failed to migrate {len(failed)} files")
        metadata = {"failed_files": failed, "notes": notes, "results": per_file}
        if warnings:
            return Result.warning(migrated, warnings, metadata)
        return Result.success(migrated, metadata)

    def _create_migration_pipeline(self) -> Pipeline[str, str]:
        jobs: list[Any] = [self.collector_job, self.formatter_job, self.output_job]
        return Pipeline("migration", jobs, self.event_bus)
