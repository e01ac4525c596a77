"""Tests for the programmatic API in ``splurge_ava_to_jest.main``."""

import pytest

import splurge_ava_to_jest
from splurge_ava_to_jest.context import MigrationConfig
from splurge_ava_to_jest.exceptions import ParseError
from splurge_ava_to_jest.main import migrate, transform_code

AVA = "import test from 'ava'\n\ntest('x', t => {\n  t.false(done)\n})\n"
JEST = "test('x', () => {\n  expect(done).toBeFalsy()\n})\n"

DRY_RUN = MigrationConfig(dry_run=True, format_output=False)


def test_transform_code():
    assert transform_code(AVA) == JEST


def test_transform_code_raises_on_invalid_source():
    with pytest.raises(ParseError):
        transform_code("test('x', t => {")


def test_migrate_single_path_string(tmp_path):
    src = tmp_path / "a.test.ts"
    src.write_text(AVA)

    result = migrate(str(src), DRY_RUN)

    assert result.is_success()
    assert result.metadata["notes"] == [f"{src}:[extract_shared_context] No test variable found."]
    assert result.data == [str(src)]
    assert result.metadata["generated_code"] == {str(src): JEST}
    assert result.metadata["sources"] == {str(src): str(src)}


def test_migrate_expands_directories(tmp_path):
    (tmp_path / "a.test.ts").write_text(AVA)
    (tmp_path / "b.test.ts").write_text(AVA)
    (tmp_path / "plain.ts").write_text("export {}\n")

    result = migrate([str(tmp_path)], DRY_RUN.with_override(target_suffix=".jest"))

    assert result.data == [str(tmp_path / "a.test.jest.ts"), str(tmp_path / "b.test.jest.ts")]


def test_migrate_partial_failure_is_a_warning(tmp_path):
    good = tmp_path / "a.test.ts"
    good.write_text(AVA)
    bad = tmp_path / "b.test.ts"
    bad.write_text("test('x', t => {")

    result = migrate([str(good), str(bad)], DRY_RUN)

    assert result.is_warning()
    assert result.data == [str(good)]
    assert list(result.metadata["failed_files"]) == [str(bad)]
    assert any(w.startswith(f"{bad}: ") for w in result.warnings)


def test_migrate_fail_fast(tmp_path):
    bad = tmp_path / "a.test.ts"
    bad.write_text("test('x', t => {")
    good = tmp_path / "b.test.ts"
    good.write_text(AVA)

    result = migrate([str(bad), str(good)], DRY_RUN.with_override(fail_fast=True))

    assert result.is_error()
    assert result.metadata == {"source_file": str(bad), "completed": []}


def test_migrate_all_failed(tmp_path):
    result = migrate([str(tmp_path / "missing.ts")], DRY_RUN)

    assert result.is_error()
    assert str(tmp_path / "missing.ts") in result.metadata["failed_files"]


def _same_named_sources(tmp_path):
    sources = []
    for folder in ("a", "b"):
        src = tmp_path / "src" / folder / "x.test.ts"
        src.parent.mkdir(parents=True)
        src.write_text(AVA.replace("'x'", f"'{folder}'"))
        sources.append(src)
    return sources


def test_migrate_directory_keeps_layout_below_target_and_backup_roots(tmp_path):
    first, second = _same_named_sources(tmp_path)
    out, bak = tmp_path / "out", tmp_path / "bak"
    config = MigrationConfig(format_output=False, target_root=str(out), backup_root=str(bak))

    result = migrate([str(tmp_path / "src")], config)

    assert result.data == [str(out / "a" / "x.test.ts"), str(out / "b" / "x.test.ts")]
    assert (out / "a" / "x.test.ts").read_text() == JEST.replace("'x'", "'a'")
    assert (out / "b" / "x.test.ts").read_text() == JEST.replace("'x'", "'b'")
    assert (bak / "a" / "x.test.ts.backup").read_text() == first.read_text()
    assert (bak / "b" / "x.test.ts.backup").read_text() == second.read_text()


def test_migrate_fails_the_later_of_two_files_with_the_same_target(tmp_path):
    first, second = _same_named_sources(tmp_path)
    out, bak = tmp_path / "out", tmp_path / "bak"
    config = MigrationConfig(format_output=False, target_root=str(out), backup_root=str(bak))

    result = migrate([str(first), str(second)], config)

    assert result.is_warning()
    assert result.data == [str(out / "x.test.ts")]
    assert list(result.metadata["failed_files"]) == [str(second)]
    assert (out / "x.test.ts").read_text() == JEST.replace("'x'", "'a'")
    assert (bak / "x.test.ts.backup").read_text() == first.read_text()
    assert second.read_text() == AVA.replace("'x'", "'b'")


def test_migrate_same_named_files_in_place_do_not_collide(tmp_path):
    first, second = _same_named_sources(tmp_path)

    result = migrate([str(first), str(second)], DRY_RUN)

    assert result.data == [str(first), str(second)]
    assert "failed_files" not in result.metadata


def test_package_exports_are_lazy():
    assert splurge_ava_to_jest.transform_code is transform_code
    assert "MigrationConfig" in dir(splurge_ava_to_jest)
    with pytest.raises(AttributeError):
        splurge_ava_to_jest.does_not_exist  # noqa: B018
