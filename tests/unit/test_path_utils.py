"""Tests for path validation and target path computation."""

from pathlib import Path

import pytest

from splurge_ava_to_jest.context import MigrationConfig
from splurge_ava_to_jest.exceptions import ValidationError
from splurge_ava_to_jest.helpers.path_utils import (
    PathValidationError,
    target_path_for,
    validate_source_path,
    validate_target_path,
)


def test_validate_source_path_accepts_existing_file(tmp_path):
    src = tmp_path / "a.test.ts"
    src.write_text("x")
    assert validate_source_path(str(src)) == src


@pytest.mark.parametrize(
    "path,validation_type",
    [("", "empty_path"), ("   ", "empty_path"), ("does/not/exist.ts", "not_found"), ("bad|name.ts", "invalid_chars")],
)
def test_validate_source_path_errors(path, validation_type):
    with pytest.raises(PathValidationError) as exc_info:
        validate_source_path(path)

    assert exc_info.value.validation_type == validation_type
    assert isinstance(exc_info.value, ValidationError)


def test_validate_target_path_does_not_require_existence(tmp_path):
    assert validate_target_path(tmp_path / "new.ts") == tmp_path / "new.ts"
    with pytest.raises(PathValidationError):
        validate_target_path("out/what?.ts")


@pytest.mark.parametrize(
    "overrides,expected",
    [
        ({}, "src/math.test.ts"),
        ({"target_suffix": ".jest"}, "src/math.test.jest.ts"),
        ({"target_extension": "mts"}, "src/math.test.mts"),
        ({"target_extension": ".js"}, "src/math.test.js"),
        ({"target_root": "out"}, "out/math.test.ts"),
        ({"target_root": "out", "target_suffix": "_jest", "target_extension": "tsx"}, "out/math.test_jest.tsx"),
    ],
)
def test_target_path_for(overrides, expected):
    assert target_path_for("src/math.test.ts", MigrationConfig(**overrides)) == Path(expected)


def test_target_path_for_keeps_layout_below_source_root():
    config = MigrationConfig(target_root="out")

    assert target_path_for("src/a/math.test.ts", config, "src") == Path("out/a/math.test.ts")
    assert target_path_for("src/b/math.test.ts", config, "src") == Path("out/b/math.test.ts")
    assert target_path_for("src/a/math.test.ts", MigrationConfig(), "src") == Path("src/a/math.test.ts")


def test_target_path_for_rejects_files_outside_source_root():
    with pytest.raises(PathValidationError) as exc_info:
        target_path_for("lib/math.test.ts", MigrationConfig(target_root="out"), "src")

    assert exc_info.value.validation_type == "outside_root"
