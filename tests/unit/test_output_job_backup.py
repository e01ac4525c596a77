from pathlib import Path

import pytest

from splurge_ava_to_jest.context import MigrationConfig, PipelineContext
from splurge_ava_to_jest.events import EventBus
from splurge_ava_to_jest.helpers.path_utils import PathValidationError
from splurge_ava_to_jest.jobs.output_job import OutputJob, backup_path_for


def test_backup_path_for(tmp_path):
    src = tmp_path / "math.test.ts"

    assert backup_path_for(src) == tmp_path / "math.test.ts.backup"
    assert backup_path_for(src, str(tmp_path / "bak")) == tmp_path / "bak" / "math.test.ts.backup"


def test_backup_path_for_keeps_layout_below_source_root(tmp_path):
    src = tmp_path / "src" / "a" / "math.test.ts"
    backup_root = str(tmp_path / "bak")

    assert backup_path_for(src, backup_root, tmp_path / "src") == tmp_path / "bak" / "a" / "math.test.ts.backup"
    assert backup_path_for(src, None, tmp_path / "src") == src.with_name("math.test.ts.backup")
    with pytest.raises(PathValidationError):
        backup_path_for(tmp_path / "lib" / "math.test.ts", backup_root, tmp_path / "src")


def test_same_named_files_get_separate_backups(tmp_path):
    sources = []
    for folder in ("a", "b"):
        src = tmp_path / "src" / folder / "x.test.ts"
        src.parent.mkdir(parents=True)
        src.write_text(f"// {folder}\n")
        sources.append(src)

    job = OutputJob(EventBus())
    for src in sources:
        job._create_backup(str(src), str(tmp_path / "bak"), str(tmp_path / "src"))

    assert (tmp_path / "bak" / "a" / "x.test.ts.backup").read_text() == "// a\n"
    assert (tmp_path / "bak" / "b" / "x.test.ts.backup").read_text() == "// b\n"


def test_execute_uses_source_root_from_context(tmp_path):
    src = tmp_path / "src" / "a" / "x.test.ts"
    src.parent.mkdir(parents=True)
    src.write_text("original")
    config = MigrationConfig(backup_root=str(tmp_path / "bak"))
    context = PipelineContext.create(str(src), str(src), config).with_metadata("source_root", str(tmp_path / "src"))

    OutputJob(EventBus()).execute(context, "converted")

    assert (tmp_path / "bak" / "a" / "x.test.ts.backup").read_text() == "original"
    assert src.read_text() == "converted"


def test_create_backup_creates_file(tmp_path):
    src = tmp_path / "source.test.ts"
    src.write_text("import test from 'ava'\n")

    OutputJob(EventBus())._create_backup(str(src))

    backup = tmp_path / "source.test.ts.backup"
    assert backup.read_text() == "import test from 'ava'\n"


def test_create_backup_skips_if_exists(tmp_path):
    src = tmp_path / "source.test.ts"
    src.write_text("new")
    backup = tmp_path / "source.test.ts.backup"
    backup.write_text("old")

    OutputJob(EventBus())._create_backup(str(src))
    assert backup.read_text() == "old"


def test_create_backup_with_custom_root(tmp_path):
    src = tmp_path / "source.test.ts"
    src.write_text("x")
    backup_root = tmp_path / "custom_backups"

    OutputJob(EventBus())._create_backup(str(src), str(backup_root))

    assert (backup_root / "source.test.ts.backup").exists()


def test_create_backup_failure_is_logged_not_raised(tmp_path, caplog):
    OutputJob(EventBus())._create_backup(str(tmp_path / "missing.test.ts"))
    assert "Failed to create backup" in caplog.text


def test_execute_writes_target_and_backup(tmp_path):
    src = tmp_path / "a.test.ts"
    src.write_text("original")
    target = tmp_path / "out" / "a.test.ts"
    context = PipelineContext.create(str(src), str(target), MigrationConfig())

    result = OutputJob(EventBus()).execute(context, "converted")

    assert result.is_success()
    assert result.data == str(target)
    assert target.read_text() == "converted"
    assert Path(str(src) + ".backup").read_text() == "original"


def test_execute_dry_run_writes_nothing(tmp_path):
    src = tmp_path / "a.test.ts"
    src.write_text("original")
    context = PipelineContext.create(str(src), config=MigrationConfig(dry_run=True))

    result = OutputJob(EventBus()).execute(context, "converted")

    assert result.metadata["generated_code"] == "converted"
    assert result.metadata["dry_run"] is True
    assert src.read_text() == "original"
    assert not Path(str(src) + ".backup").exists()
