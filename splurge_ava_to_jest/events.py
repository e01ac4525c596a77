"""Event system for pipeline observability.

A small thread-safe publish/subscribe bus plus the frozen event
dataclasses emitted by the migration pipeline. Steps, jobs and the
pipeline publish start/completion events; :class:`LoggingSubscriber`
turns them into log records.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .context import PipelineContext
from .result import Result

T = TypeVar("T")
EventHandler = Callable[[Any], None]


@dataclass(frozen=True)
class BaseEvent:
    """Common event metadata: wall-clock timestamp and run id."""

    timestamp: float
    run_id: str

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError("Timestamp cannot be negative")


@dataclass(frozen=True)
class PipelineStartedEvent(BaseEvent):
    context: PipelineContext


@dataclass(frozen=True)
class PipelineCompletedEvent(BaseEvent):
    context: PipelineContext
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class StepStartedEvent(BaseEvent):
    context: PipelineContext
    step_name: str
    step_type: str


@dataclass(frozen=True)
class StepCompletedEvent(BaseEvent):
    context: PipelineContext
    step_name: str
    step_type: str
    result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class JobStartedEvent(BaseEvent):
    context: PipelineContext
    job_name: str
    job_type: str
    task_count: int


@dataclass(frozen=True)
class JobCompletedEvent(BaseEvent):
    context: PipelineContext
    job_name: str
    job_type: str
    final_result: Result[Any]
    duration_ms: float


@dataclass(frozen=True)
class DiagnosticEvent(BaseEvent):
    """Fired once per diagnostic a transformation pass reports.

    ``severity`` is ``"info"`` for soft aborts and ``"warning"`` for
    constructs left unconverted.
    """

    context: PipelineContext
    pass_name: str
    message: str
    severity: str
    line: int | None = None
    column: int | None = None


class EventBus:
    """Thread-safe event publication and subscription system.

    Handlers are invoked synchronously, outside the internal lock, with
    the event instance as their only argument.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            self._subscribers[event_type].append(handler)
            self._logger.debug(f"Subscribed handler {handler} to {event_type.__name__}")

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        with self._lock:
            if handler in self._subscribers.get(event_type, []):
                self._subscribers[event_type].remove(handler)
                self._logger.debug(f"Unsubscribed handler {handler} from {event_type.__name__}")

    def clear_subscribers(self, event_type: type[T] | None = None) -> None:
        """Clear subscribers for one event type, or for all types when omitted."""
        with self._lock:
            if event_type:
                self._subscribers[event_type].clear()
            else:
                self._subscribers.clear()

    def get_subscriber_count(self, event_type: type[T]) -> int:
        with self._lock:
            return len(self._subscribers.get(event_type, []))

    def publish(self, event: Any) -> None:
        """Deliver ``event`` to the handlers registered for its concrete type.

        A handler that raises is logged and does not stop delivery to the
        remaining handlers.
        """
        event_type = type(event)
        with self._lock:
            handlers = self._subscribers.get(event_type, []).copy()

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(f"Event handler error for {event_type.__name__}: {e}", exc_info=True)


class EventSubscriber(ABC):
    """Base class for objects that register a fixed set of handlers."""

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self._setup_subscriptions()

    @abstractmethod
    def _setup_subscriptions(self) -> None:
        pass

    @abstractmethod
    def unsubscribe_all(self) -> None:
        pass


class LoggingSubscriber(EventSubscriber):
    """Log pipeline, step and diagnostic events through ``logging``."""

    def __init__(self, event_bus: EventBus):
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        super().__init__(event_bus)

    def _handlers(self) -> list[tuple[type, EventHandler]]:
        return [
            (PipelineStartedEvent, self._on_pipeline_started),
            (PipelineCompletedEvent, self._on_pipeline_completed),
            (StepStartedEvent, self._on_step_started),
            (StepCompletedEvent, self._on_step_completed),
            (DiagnosticEvent, self._on_diagnostic),
        ]

    def _setup_subscriptions(self) -> None:
        for event_type, handler in self._handlers():
            self.event_bus.subscribe(event_type, handler)

    def unsubscribe_all(self) -> None:
        for event_type, handler in self._handlers():
            self.event_bus.unsubscribe(event_type, handler)

    def _on_pipeline_started(self, event: PipelineStartedEvent) -> None:
        self._logger.info(
            f"Pipeline started: {event.context.source_file} -> {event.context.target_file} (run_id: {event.run_id})"
        )

    def _on_pipeline_completed(self, event: PipelineCompletedEvent) -> None:
        status = "FAILED" if event.final_result.is_error() else event.final_result.status.value.upper()
        self._logger.info(f"Pipeline completed in {event.duration_ms:.2f}ms: {status}")

    def _on_step_started(self, event: StepStartedEvent) -> None:
        self._logger.debug(f"Step started: {event.step_name} ({event.step_type})")

    def _on_step_completed(self, event: StepCompletedEvent) -> None:
        status = event.result.status.value.upper()
        self._logger.debug(f"Step completed in {event.duration_ms:.2f}ms: {event.step_name} ({status})")

    def _on_diagnostic(self, event: DiagnosticEvent) -> None:
        # The passes already log at info/warning; this is the per-file trace.
        location = f":{event.line}:{event.column}" if event.line is not None else ""
        self._logger.debug(
            f"{event.context.source_file}{location}: [{event.pass_name}] {event.severity}: {event.message}"
        )
