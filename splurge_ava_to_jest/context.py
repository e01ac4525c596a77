"""Pipeline context and migration configuration helpers.

``MigrationConfig`` holds the options controlling file discovery, output
placement and formatting; ``PipelineContext`` carries the per-file
runtime information (paths, run id and metadata) between pipeline
stages. ``ContextManager`` loads configuration from YAML files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import dataclasses
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .result import Result

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class MigrationConfig:
    """Migration behavior configuration.

    The dataclass is serializable so callers can build it from
    dictionaries or YAML configuration files.
    """

    # Output settings
    target_root: str | None = None
    # Appended to the target file stem, e.g. '.jest' for 'foo.jest.ts'.
    target_suffix: str = ""
    # Replaces the extension of target files; None keeps the original.
    target_extension: str | None = None
    backup_originals: bool = True
    backup_root: str | None = None

    # Discovery settings
    file_patterns: list[str] = field(default_factory=lambda: ["*.ts", "*.tsx", "*.js"])
    recurse_directories: bool = True
    max_file_size_mb: int = 10

    # Formatting settings
    format_output: bool = True
    """Whether to run prettier over the generated code"""
    prettier_command: list[str] = field(default_factory=lambda: ["prettier"])
    print_width: int = 140
    formatter_timeout: float = 30.0
    """Seconds to wait for the formatter process"""

    # Behavior settings
    dry_run: bool = False
    fail_fast: bool = False
    log_level: str = "INFO"

    def with_override(self, **kwargs: Any) -> "MigrationConfig":
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **kwargs)

    def validate(self) -> None:
        """Check field values.

        Raises:
            ConfigurationError: On the first invalid field.
        """
        if not self.file_patterns:
            raise ConfigurationError("file_patterns must not be empty", "file_patterns")
        if not self.prettier_command:
            raise ConfigurationError("prettier_command must not be empty", "prettier_command")
        if self.print_width <= 0:
            raise ConfigurationError("print_width must be positive", "print_width")
        if self.formatter_timeout <= 0:
            raise ConfigurationError("formatter_timeout must be positive", "formatter_timeout")
        if self.max_file_size_mb <= 0:
            raise ConfigurationError("max_file_size_mb must be positive", "max_file_size_mb")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}", "log_level")
        if self.target_extension is not None and not self.target_extension.strip("."):
            raise ConfigurationError("target_extension must not be blank", "target_extension")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MigrationConfig":
        """Create and validate a config from a mapping.

        Unknown keys are ignored.

        Raises:
            ConfigurationError: If the resulting configuration is invalid.
        """
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        try:
            config = cls(**filtered)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PipelineContext:
    """Immutable context passed through the migration pipeline.

    Instances are frozen; use :meth:`with_metadata` and
    :meth:`with_config` to derive modified copies.
    """

    source_file: str
    target_file: str
    config: MigrationConfig
    run_id: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        source_file: str,
        target_file: str | None = None,
        config: MigrationConfig | None = None,
        run_id: str | None = None,
    ) -> "PipelineContext":
        """Construct a context, defaulting the target to the source path,
        the config to ``MigrationConfig()`` and the run id to a UUID.
        """
        return cls(
            source_file=source_file,
            target_file=target_file or str(Path(source_file)),
            config=config or MigrationConfig(),
            run_id=run_id or str(uuid.uuid4()),
            metadata={},
        )

    def with_metadata(self, key: str, value: Any) -> "PipelineContext":
        return dataclasses.replace(self, metadata={**self.metadata, key: value})

    def with_config(self, **config_overrides: Any) -> "PipelineContext":
        return dataclasses.replace(self, config=self.config.with_override(**config_overrides))

    def get_source_path(self) -> Path:
        return Path(self.source_file)

    def get_target_path(self) -> Path:
        return Path(self.target_file)

    def is_dry_run(self) -> bool:
        return self.config.dry_run

    def should_format_code(self) -> bool:
        return self.config.format_output

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "target_file": self.target_file,
            "config": self.config.to_dict(),
            "run_id": self.run_id,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        return f"PipelineContext(source={self.source_file}, target={self.target_file}, run_id={self.run_id[:8]}...)"


class ContextManager:
    """Load and sanity-check :class:`MigrationConfig` instances.

    Methods return ``Result`` values so callers can react to failures or
    warnings in a structured way.
    """

    @staticmethod
    def load_config_from_file(config_file: str) -> Result[MigrationConfig]:
        """Load a ``MigrationConfig`` from a YAML file.

        Unknown top-level keys are ignored.

        Args:
            config_file: Path to the YAML configuration file.

        Returns:
            A ``Result`` with the configuration, or a failure describing
            why the file could not be used.
        """
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError:
            return Result.failure(
                ConfigurationError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
            )
        except (OSError, yaml.YAMLError) as e:
            return Result.failure(
                ConfigurationError(f"Error loading configuration: {e}"), {"config_file": config_file}
            )

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            return Result.failure(
                ConfigurationError("Configuration file must contain a mapping"), {"config_file": config_file}
            )

        try:
            return Result.success(MigrationConfig.from_dict(config_data))
        except ConfigurationError as e:
            return Result.failure(e, {"config_file": config_file})

    @staticmethod
    def validate_config(config: MigrationConfig) -> Result[MigrationConfig]:
        """Flag settings that are legal but probably unintended."""
        issues = []

        if config.print_width < 60 or config.print_width > 320:
            issues.append("print_width should be between 60 and 320")
        if config.dry_run and config.backup_originals:
            issues.append("backup_originals has no effect in dry-run mode")

        if issues:
            return Result.warning(config, [f"Configuration issues: {', '.join(issues)}"])
        return Result.success(config)
