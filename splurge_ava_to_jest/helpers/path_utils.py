"""Path validation and target-path computation.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import platform
from pathlib import Path

from ..context import MigrationConfig
from ..exceptions import ValidationError

INVALID_NAME_CHARS = '<>:"|?*'


class PathValidationError(ValidationError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: str, validation_type: str = "path"):
        self.path = path
        self.validation_type = validation_type
        super().__init__(message, validation_type, field=path)


def validate_source_path(source_path: str | Path) -> Path:
    """Validate and normalize a source file or directory path.

    Raises:
        PathValidationError: If the path is empty, malformed or missing.
    """
    path_str = str(source_path)
    if not path_str.strip():
        raise PathValidationError("Source path cannot be empty", path_str, "empty_path")

    path = Path(source_path)
    if len(path_str) > 260 and platform.system() == "Windows":
        raise PathValidationError(
            f"Path length exceeds Windows limit of 260 characters: {len(path_str)}", path_str, "path_length"
        )
    if any(char in path.name for char in INVALID_NAME_CHARS):
        raise PathValidationError(f"Path contains invalid characters: {INVALID_NAME_CHARS}", path_str, "invalid_chars")
    if not path.exists():
        raise PathValidationError(f"Source path does not exist: {path_str}", path_str, "not_found")
    return path


def validate_target_path(target_path: str | Path) -> Path:
    """Validate a target path without touching the filesystem."""
    path_str = str(target_path)
    if not path_str.strip():
        raise PathValidationError("Target path cannot be empty", path_str, "empty_path")

    path = Path(target_path)
    if any(char in path.name for char in INVALID_NAME_CHARS):
        raise PathValidationError(f"Path contains invalid characters: {INVALID_NAME_CHARS}", path_str, "invalid_chars")
    return path


def relative_directory(source_file: str | Path, source_root: str | Path) -> Path:
    """Return the directory of ``source_file`` relative to ``source_root``.

    Raises:
        PathValidationError: If ``source_file`` is not below ``source_root``.
    """
    try:
        return Path(source_file).parent.relative_to(source_root)
    except ValueError:
        raise PathValidationError(
            f"{source_file} is not inside {source_root}", str(source_file), "outside_root"
        ) from None


def target_path_for(source_file: str | Path, config: MigrationConfig, source_root: str | Path | None = None) -> Path:
    """Compute where the converted version of ``source_file`` is written.

    ``target_suffix`` is appended to the stem, ``target_extension`` (with
    or without a leading dot) replaces the extension, and ``target_root``
    relocates the file. With a ``source_root`` the file keeps its
    sub-directories below ``target_root``. With the defaults the source
    is overwritten.
    """
    source = Path(source_file)
    extension = source.suffix
    if config.target_extension is not None:
        extension = "." + config.target_extension.lstrip(".")

    name = f"{source.stem}{config.target_suffix}{extension}"
    directory = source.parent
    if config.target_root:
        directory = Path(config.target_root)
        if source_root is not None:
            directory = directory / relative_directory(source, source_root)
    return validate_target_path(directory / name)
