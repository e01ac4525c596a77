import logging

import pytest

from splurge_ava_to_jest.cli_helpers import (
    build_config,
    set_quiet_mode,
    setup_logging_with_level,
    validate_source_files_with_patterns,
)
from splurge_ava_to_jest.context import MigrationConfig
from splurge_ava_to_jest.exceptions import ConfigurationError

AVA = "import test from 'ava'\n"


def test_build_config_ignores_none_values():
    base = MigrationConfig(print_width=100)

    config = build_config(base, {"print_width": None, "target_suffix": ".jest", "dry_run": None})

    assert config.print_width == 100
    assert config.target_suffix == ".jest"
    assert config.dry_run is False


def test_build_config_validates():
    with pytest.raises(ConfigurationError) as exc_info:
        build_config(MigrationConfig(), {"log_level": "LOUD"})

    assert exc_info.value.details == {"config_key": "log_level"}


def test_setup_logging_with_level_and_quiet_mode():
    root = logging.getLogger()
    previous = root.level
    try:
        setup_logging_with_level("debug")
        assert root.level == logging.DEBUG
        set_quiet_mode(False)
        assert root.level == logging.DEBUG
        set_quiet_mode(True)
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)


def test_explicit_paths_are_kept_and_missing_dropped(tmp_path):
    src = tmp_path / "a.test.ts"
    src.write_text("export {}\n")

    files = validate_source_files_with_patterns(
        [str(src), str(tmp_path), str(tmp_path / "missing.ts"), str(src)], None, ["*.ts"]
    )

    assert files == [str(src), str(tmp_path)]


def test_patterns_select_ava_files_only(tmp_path):
    (tmp_path / "a.test.ts").write_text(AVA)
    (tmp_path / "b.ts").write_text("export const b = 1\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.test.tsx").write_text(AVA)
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "d.test.ts").write_text(AVA)

    files = validate_source_files_with_patterns([], str(tmp_path), ["*.ts", "*.tsx"])
    assert files == [str(tmp_path / "a.test.ts"), str(tmp_path / "sub" / "c.test.tsx")]

    flat = validate_source_files_with_patterns([], str(tmp_path), ["*.ts", "*.tsx"], recurse=False)
    assert flat == [str(tmp_path / "a.test.ts")]
