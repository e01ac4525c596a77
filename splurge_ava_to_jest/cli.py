"""Command-line interface for the AVA to Jest migration tool.

The ``typer`` application is a thin wrapper: it builds a
:class:`MigrationConfig` from a YAML file and command-line options,
collects the input files and delegates to
:func:`splurge_ava_to_jest.main.migrate`.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import difflib
import logging
import shlex
from pathlib import Path
from typing import cast

import typer

from . import main as main_module
from .cli_helpers import (
    build_config,
    set_quiet_mode,
    setup_logging,
    setup_logging_with_level,
    validate_source_files_with_patterns,
)
from .context import ContextManager, MigrationConfig
from .exceptions import ConfigurationError
from .result import Result

app = typer.Typer(name="splurge-ava-to-jest", help="Migrate AVA test suites to Jest", add_completion=False)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

logger = logging.getLogger(__name__)


def _display(path: str, posix: bool) -> str:
    p = Path(path)
    return p.as_posix() if posix else str(p)


def _echo_dry_run(result: Result[list[str]], list_files: bool, diff: bool, posix: bool) -> None:
    """Print dry-run output: file list, unified diffs or converted code."""
    generated = cast(dict[str, str], (result.metadata or {}).get("generated_code", {}))
    originals = cast(dict[str, str], (result.metadata or {}).get("sources", {}))

    for target, code in generated.items():
        display = _display(target, posix)
        if list_files:
            typer.echo(f"== FILES: {display} ==")
            continue
        if not diff:
            typer.echo(f"== JEST: {display} ==")
            typer.echo(code)
            continue

        source = originals.get(target, target)
        try:
            original = Path(source).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            original = ""
        diff_lines = list(
            difflib.unified_diff(
                original.splitlines(keepends=True),
                code.splitlines(keepends=True),
                fromfile=f"orig:{_display(source, posix)}",
                tofile=f"new:{display}",
            )
        )
        typer.echo(f"== DIFF: {display} ==")
        typer.echo("".join(diff_lines) if diff_lines else "<no differences detected>")


@app.command("migrate")
def migrate(
    source_files: list[str] = typer.Argument(None, help="AVA test files or directories to migrate"),
    root_directory: str | None = typer.Option(None, "--dir", "-d", help="Root directory to search with --file"),
    file_patterns: list[str] | None = typer.Option(
        None, "--file", "-f", help="Glob patterns for input files (repeatable, default: *.ts *.tsx *.js)"
    ),
    recurse: bool | None = typer.Option(
        None, "--recurse/--no-recurse", help="Recurse directories when searching (default: on)"
    ),
    target_root: str | None = typer.Option(None, "--target-root", "-t", help="Target root directory for output files"),
    skip_backup: bool = typer.Option(False, "--skip-backup", help="Skip backup of original files"),
    backup_root: str | None = typer.Option(None, "--backup-root", help="Directory for backup files"),
    suffix: str | None = typer.Option(None, "--suffix", help="Suffix appended to the target filename stem"),
    ext: str | None = typer.Option(None, "--ext", help="Override target file extension (e.g. 'ts' or '.mts')"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the converted code without writing files"),
    diff: bool = typer.Option(False, "--diff", help="With --dry-run, show unified diffs instead of full code"),
    list_files: bool = typer.Option(False, "--list", help="With --dry-run, list files only"),
    posix: bool = typer.Option(False, "--posix", help="Use forward slashes in displayed paths"),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop on first error"),
    format_output: bool | None = typer.Option(
        None, "--format/--no-format", help="Run prettier over the generated code (default: on)"
    ),
    prettier: str | None = typer.Option(None, "--prettier", help="Prettier command, e.g. 'npx prettier'"),
    print_width: int | None = typer.Option(None, "--print-width", help="Prettier print width (default: 140)"),
    config_file: str | None = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    max_file_size: int | None = typer.Option(None, "--max-file-size", help="Maximum file size in MB to process"),
    info: bool = typer.Option(False, "--info", help="Enable info logging output"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Migrate AVA test files to Jest.

    Examples:
        # Preview the conversion of one file
        splurge-ava-to-jest migrate --dry-run test/user.test.ts

        # Convert every AVA file under test/ into out/ without backups
        splurge-ava-to-jest migrate test/ --target-root out --skip-backup

        # Search with patterns and settings from a YAML file
        splurge-ava-to-jest migrate -d test -f "*.spec.ts" --config ava2jest.yaml
    """
    if info and debug:
        typer.echo("Error: --info and --debug cannot be used together.")
        raise typer.Exit(code=2)

    base_config = MigrationConfig()
    if config_file is not None:
        config_result = ContextManager.load_config_from_file(config_file)
        if config_result.is_error():
            typer.echo(f"Error loading configuration file: {config_result.error}")
            raise typer.Exit(code=1)
        base_config = cast(MigrationConfig, config_result.data)

    try:
        config = build_config(
            base_config,
            {
                "target_root": target_root,
                "backup_root": backup_root,
                "backup_originals": False if skip_backup else None,
                "target_suffix": suffix,
                "target_extension": ext,
                "file_patterns": file_patterns or None,
                "recurse_directories": recurse,
                "dry_run": dry_run or None,
                "fail_fast": fail_fast or None,
                "format_output": format_output,
                "prettier_command": shlex.split(prettier) if prettier else None,
                "print_width": print_width,
                "max_file_size_mb": max_file_size,
                "log_level": log_level,
            },
        )
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e.message}")
        raise typer.Exit(code=2) from None

    if debug or info:
        setup_logging(debug)
    else:
        setup_logging_with_level(config.log_level)
        # Quiet unless a level was explicitly requested.
        set_quiet_mode(log_level is None and config_file is None)

    valid_files = validate_source_files_with_patterns(
        source_files or [], root_directory, config.file_patterns, config.recurse_directories
    )
    if not valid_files:
        typer.echo("No input files found.")
        raise typer.Exit(code=1)
    logger.info(f"Found {len(valid_files)} input path(s) to process")

    try:
        result = main_module.migrate(valid_files, config=config)
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        raise typer.Exit(code=1) from None

    if result.is_error():
        logger.error(f"Migration failed: {result.error}")
        raise typer.Exit(code=1)

    for warning in result.warnings or []:
        logger.warning(warning)
    for note in (result.metadata or {}).get("notes", []):
        logger.info(note)
    logger.info(f"Migrated: {len(result.data or [])} files")

    if config.dry_run:
        _echo_dry_run(result, list_files=list_files, diff=diff, posix=posix)


@app.command("version")
def version() -> None:
    """Show the version of splurge-ava-to-jest."""
    from . import __version__

    typer.echo(f"splurge-ava-to-jest {__version__}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
