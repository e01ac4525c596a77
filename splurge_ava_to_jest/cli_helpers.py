"""CLI helper functions for the AVA to Jest migration tool.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import glob
import logging
import os
from pathlib import Path
from typing import Any

from .context import MigrationConfig
from .detectors import AvaFileDetector

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(debug_mode: bool = False) -> None:
    setup_logging_with_level("DEBUG" if debug_mode else "INFO")


def setup_logging_with_level(log_level: str) -> None:
    """Configure root logging; replaces handlers installed earlier."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)


def set_quiet_mode(quiet: bool = False) -> None:
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)


def build_config(base_config: MigrationConfig, overrides: dict[str, Any]) -> MigrationConfig:
    """Apply CLI overrides to ``base_config``; ``None`` values are ignored.

    Raises:
        ConfigurationError: If the resulting configuration is invalid.
    """
    config = base_config.with_override(**{k: v for k, v in overrides.items() if v is not None})
    config.validate()
    return config


def validate_source_files_with_patterns(
    source_files: list[str],
    root_directory: str | None,
    file_patterns: list[str],
    recurse: bool = True,
) -> list[str]:
    """Collect the inputs to migrate.

    Explicit files and directories are kept as given (directories are
    searched later). Files matched by ``file_patterns`` under
    ``root_directory`` are kept only when they import from ``ava``.
    Missing paths are dropped.
    """
    valid_files: list[str] = []
    for file_path in source_files:
        if os.path.isfile(file_path) or os.path.isdir(file_path):
            valid_files.append(file_path)
        else:
            logging.getLogger(__name__).warning(f"Skipping missing path: {file_path}")

    if root_directory and os.path.isdir(root_directory):
        detector = AvaFileDetector()
        for pattern in file_patterns:
            if recurse:
                matched = glob.glob(os.path.join(root_directory, "**", pattern), recursive=True)
            else:
                matched = glob.glob(os.path.join(root_directory, pattern))
            for file_path in sorted(matched):
                if "node_modules" in Path(file_path).parts:
                    continue
                if os.path.isfile(file_path) and detector.is_ava_file(file_path):
                    valid_files.append(file_path)

    return list(dict.fromkeys(valid_files))
