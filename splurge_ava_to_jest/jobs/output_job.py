"""Output job: back up the original file and write the converted one.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import shutil
from pathlib import Path
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..helpers.path_utils import relative_directory
from ..pipeline import Job, Task
from ..result import Result
from ..steps import WriteOutputStep

BACKUP_SUFFIX = ".backup"


def backup_path_for(
    source_file: str | Path, backup_root: str | None = None, source_root: str | Path | None = None
) -> Path:
    """Return where the backup of ``source_file`` goes.

    ``foo.test.ts`` is backed up as ``foo.test.ts.backup``, next to the
    source or inside ``backup_root`` when one is configured. With a
    ``source_root`` the backup keeps the source's sub-directories below
    ``backup_root``.
    """
    source_path = Path(source_file)
    name = f"{source_path.name}{BACKUP_SUFFIX}"
    if not backup_root:
        return source_path.with_name(name)
    directory = Path(backup_root)
    if source_root is not None:
        directory = directory / relative_directory(source_path, source_root)
    return directory / name


class OutputJob(Job[str, str]):
    """Write converted files, optionally backing up the originals first."""

    def __init__(self, event_bus: EventBus):
        super().__init__("output", [self._create_output_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_output_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [WriteOutputStep("write_output", event_bus)]
        return Task("output", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        if context.config.backup_originals and not context.is_dry_run():
            self._create_backup(context.source_file, context.config.backup_root, context.metadata.get("source_root"))

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Output job failed for {context.target_file}: {result.error}")
        elif context.is_dry_run():
            self._logger.info(f"Dry-run: would write output to {context.target_file}")
        else:
            self._logger.info(f"Wrote {context.target_file}")
        return result

    def _create_backup(self, source_file: str, backup_root: str | None = None, source_root: str | None = None) -> None:
        """Copy the original file aside unless a backup already exists.

        A failed backup is logged and does not stop the write.
        """
        backup_path = backup_path_for(source_file, backup_root, source_root)
        try:
            if backup_path.exists():
                self._logger.info(f"Backup already exists, skipping: {backup_path}")
                return
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_file, backup_path)
            self._logger.info(f"Created backup: {backup_path}")
        except OSError as e:
            self._logger.warning(f"Failed to create backup for {source_file}: {e}")
