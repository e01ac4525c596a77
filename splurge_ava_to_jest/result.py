"""Result type for step, job and pipeline outcomes.

A ``Result[T]`` is either a success, a success carrying warnings (for
example a file converted with unmapped assertions, or output left
unformatted because ``prettier`` was unavailable), an error, or a skip.
Warnings never block the data from flowing to the next step.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class ResultStatus(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable outcome with data, an error, warnings and metadata.

    Success and warning results carry data; error results carry an
    exception and never data.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    warnings: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.status == ResultStatus.SUCCESS and self.error is not None:
            raise ValueError("Success results cannot have errors")
        if self.status == ResultStatus.ERROR and self.data is not None:
            raise ValueError("Error results cannot have data")
        if self.warnings is None:
            object.__setattr__(self, "warnings", [])
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        return cls(status=ResultStatus.SUCCESS, data=data, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def warning(cls, data: T, warnings: list[str], metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a result that produced ``data`` but needs attention."""
        return cls(status=ResultStatus.WARNING, data=data, warnings=list(warnings), metadata=metadata or {})

    @classmethod
    def skipped(cls, reason: str, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a skipped result; ``reason`` is kept in the metadata."""
        return cls(status=ResultStatus.SKIPPED, metadata={**(metadata or {}), "reason": reason})

    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    def is_warning(self) -> bool:
        return self.status == ResultStatus.WARNING

    def is_skipped(self) -> bool:
        return self.status == ResultStatus.SKIPPED

    def has_data(self) -> bool:
        """True for success and warning results that carry a value."""
        return self.status in (ResultStatus.SUCCESS, ResultStatus.WARNING) and self.data is not None

    def map(self, func: Callable[[T], R]) -> "Result[R]":
        """Apply ``func`` to the data, keeping warnings and metadata.

        Errors and skips propagate unchanged; an exception raised by
        ``func`` becomes an error result.
        """
        if self.is_error():
            return Result[R](
                status=ResultStatus.ERROR, error=self.error, warnings=self.warnings, metadata=self.metadata
            )
        if self.is_skipped():
            return Result[R](status=ResultStatus.SKIPPED, metadata=self.metadata)
        if self.data is None:
            return Result.failure(ValueError("Cannot map over None data"), self.metadata)

        try:
            new_data = func(self.data)
        except Exception as e:
            return Result.failure(e, self.metadata)
        status = ResultStatus.WARNING if self.warnings else ResultStatus.SUCCESS
        return Result[R](status=status, data=new_data, warnings=self.warnings, metadata=self.metadata)

    def bind(self, func: Callable[[T], "Result[R]"]) -> "Result[R]":
        """Chain a function returning a ``Result``; earlier warnings are kept."""
        if self.is_error():
            return Result[R](
                status=ResultStatus.ERROR, error=self.error, warnings=self.warnings, metadata=self.metadata
            )
        if self.is_skipped():
            return Result[R](status=ResultStatus.SKIPPED, metadata=self.metadata)
        if self.data is None:
            return Result.failure(ValueError("Cannot bind over None data"), self.metadata)

        try:
            result = func(self.data)
        except Exception as e:
            return Result.failure(e, self.metadata)
        if not self.warnings:
            return result
        merged = list(self.warnings) + list(result.warnings or [])
        if result.is_success():
            return Result.warning(result.data, merged, result.metadata)  # type: ignore[arg-type]
        return Result[R](
            status=result.status, data=result.data, error=result.error, warnings=merged, metadata=result.metadata
        )

    def unwrap(self) -> T:
        """Return the data of a success or warning result.

        Raises:
            Exception: The stored error for error results, or
                ``RuntimeError`` when skipped or empty.
        """
        if self.is_error():
            raise self.error or RuntimeError("Result contains error")
        if self.is_skipped():
            raise RuntimeError("Result was skipped")
        if self.data is None:
            raise RuntimeError("Result contains no data")
        return self.data

    def unwrap_or(self, default_value: T) -> T:
        if self.has_data():
            return self.data  # type: ignore[return-value]
        return default_value

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "data": self.data,
            "error": str(self.error) if self.error else None,
            "warnings": self.warnings,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        if self.is_success():
            return f"Result(success, data={self.data})"
        elif self.is_error():
            return f"Result(error, error={self.error})"
        elif self.is_warning():
            return f"Result(warning, data={self.data}, warnings={self.warnings})"
        else:
            return f"Result(skipped, metadata={self.metadata})"
