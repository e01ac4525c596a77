#!/usr/bin/env python3
"""Small API examples for splurge-ava-to-jest.

These examples exercise the public programmatic API in a minimal way.
They are intended for documentation and quick manual testing.
"""

from pathlib import Path

from splurge_ava_to_jest.context import MigrationConfig
from splurge_ava_to_jest.main import transform_code
from splurge_ava_to_jest.migration_orchestrator import MigrationOrchestrator

AVA_SOURCE = """import anyTest, {TestFn} from 'ava'

const test = anyTest as TestFn<{ total: number }>

test.beforeEach(t => {
  t.context.total = 5 + 3
})

test('addition', t => {
  t.is(t.context.total, 8)
  t.true(t.context.total > 0)
})
"""


def in_memory_example() -> None:
    """Convert a source string without touching the filesystem."""
    print("=== In memory ===")
    print(transform_code(AVA_SOURCE))


def basic_migration_example() -> None:
    """Write a tiny AVA file, run migration in dry-run and print the code."""
    example_file = Path("example_math.test.ts")
    example_file.write_text(AVA_SOURCE, encoding="utf-8")

    orchestrator = MigrationOrchestrator()
    # No prettier needed for the example.
    config = MigrationConfig(dry_run=True, backup_originals=False, format_output=False)

    try:
        result = orchestrator.migrate_file(str(example_file), config)
    finally:
        example_file.unlink()

    if result.is_error():
        print(f"Migration failed: {result.error}")
        return

    print(f"=== Generated: {result.data} ===")
    print((result.metadata or {}).get("generated_code", "<no generated code available>"))
    for warning in result.warnings or []:
        print(f"warning: {warning}")


def configuration_example() -> None:
    """Show a couple of MigrationConfig defaults."""
    cfg = MigrationConfig()
    print("MigrationConfig defaults:")
    print(f"  print_width: {cfg.print_width}")
    print(f"  prettier_command: {cfg.prettier_command}")
    print(f"  backup_originals: {cfg.backup_originals}")
    print(f"  dry_run: {cfg.dry_run}")


if __name__ == "__main__":
    in_memory_example()
    basic_migration_example()
    configuration_example()
