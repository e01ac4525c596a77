"""splurge_ava_to_jest package.

Submodules are imported lazily on attribute access so that importing the
package (for example during test collection) does not load the parser
and the whole pipeline.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.1.0"
__author__ = "Jim Schilling"
__description__ = "Automated AVA to Jest test migration tool"

__all__ = [
    "main",
    "migrate",
    "transform_code",
    "AvaToJestTransformer",
    "MigrationOrchestrator",
    "PipelineContext",
    "MigrationConfig",
    "Result",
    "ResultStatus",
    "EventBus",
    "LoggingSubscriber",
    "Step",
    "Task",
    "Job",
    "Pipeline",
    # Exceptions
    "MigrationError",
    "ParseError",
    "TransformationError",
    "FormattingError",
    "ValidationError",
    "ConfigurationError",
]


def __getattr__(name: str):
    """Import the submodule providing ``name`` on first access."""
    import importlib

    mapping = {
        "main": "splurge_ava_to_jest.main",
        "cli": "splurge_ava_to_jest.cli",
        "migrate": "splurge_ava_to_jest.main",
        "transform_code": "splurge_ava_to_jest.main",
        "AvaToJestTransformer": "splurge_ava_to_jest.transformers",
        "MigrationOrchestrator": "splurge_ava_to_jest.migration_orchestrator",
        "PipelineContext": "splurge_ava_to_jest.context",
        "MigrationConfig": "splurge_ava_to_jest.context",
        "EventBus": "splurge_ava_to_jest.events",
        "LoggingSubscriber": "splurge_ava_to_jest.events",
        "Result": "splurge_ava_to_jest.result",
        "ResultStatus": "splurge_ava_to_jest.result",
        "Job": "splurge_ava_to_jest.pipeline",
        "Pipeline": "splurge_ava_to_jest.pipeline",
        "Task": "splurge_ava_to_jest.pipeline",
        "Step": "splurge_ava_to_jest.pipeline",
        "MigrationError": "splurge_ava_to_jest.exceptions",
        "ParseError": "splurge_ava_to_jest.exceptions",
        "TransformationError": "splurge_ava_to_jest.exceptions",
        "FormattingError": "splurge_ava_to_jest.exceptions",
        "ValidationError": "splurge_ava_to_jest.exceptions",
        "ConfigurationError": "splurge_ava_to_jest.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])
    if name in {"main", "cli"}:
        return module
    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
