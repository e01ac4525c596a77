"""Pipeline architecture for functional composition.

``Step`` is an atomic operation, ``Task`` runs steps in sequence, ``Job``
runs tasks and ``Pipeline`` runs jobs. Each level threads the data
produced by the previous unit into the next one and stops at the first
error. Warnings never stop execution: their data flows on and their
messages are accumulated into the final result.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .context import PipelineContext
from .events import (
    EventBus,
    JobCompletedEvent,
    JobStartedEvent,
    PipelineCompletedEvent,
    PipelineStartedEvent,
    StepCompletedEvent,
    StepStartedEvent,
)
from .result import Result

T = TypeVar("T")
R = TypeVar("R")


def _combine(results: list[Result[Any]]) -> Result[Any]:
    """Collapse a run of non-error results into the final data plus all warnings.

    Metadata of every result is merged; later results win on shared keys.
    """
    all_warnings: list[str] = []
    metadata: dict[str, Any] = {}
    for result in results:
        if result.warnings:
            all_warnings.extend(result.warnings)
        if result.metadata:
            metadata.update(result.metadata)

    final_result = results[-1]
    if all_warnings:
        return Result.warning(final_result.data, all_warnings, metadata)
    return Result.success(final_result.data, metadata)


class Step(ABC, Generic[T, R]):
    """Atomic operation with a single responsibility.

    Concrete steps implement ``execute``; callers use ``run``, which
    publishes start/completion events and converts exceptions into an
    error ``Result``.
    """

    def __init__(self, name: str, event_bus: EventBus) -> None:
        self.name = name
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    @abstractmethod
    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        """Transform ``input_data``; implemented by subclasses."""
        pass

    def run(self, context: PipelineContext, input_data: T) -> Result[R]:
        self.event_bus.publish(
            StepStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
            )
        )
        start_time = time.time()

        try:
            self._logger.debug(f"Starting step: {self.name}")
            result = self.execute(context, input_data)
            self._logger.debug(f"Completed step: {self.name} ({result.status.value})")
        except Exception as e:
            self._logger.error(f"Exception in step {self.name}: {e}", exc_info=True)
            result = Result.failure(e, {"step": self.name, "context": context.run_id})

        self.event_bus.publish(
            StepCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                step_name=self.name,
                step_type=self.__class__.__name__,
                result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )
        return result


class Task(Generic[T, R]):
    """Steps executed sequentially, short-circuiting on the first error."""

    def __init__(self, name: str, steps: list[Step], event_bus: EventBus) -> None:
        self.name = name
        self.steps = steps
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def execute(self, context: PipelineContext, input_data: T) -> Result[R]:
        self._logger.debug(f"Starting task: {self.name} with {len(self.steps)} steps")

        current_data: Any = input_data
        step_results: list[Result[Any]] = []

        for i, step in enumerate(self.steps):
            self._logger.debug(f"Executing step {i + 1}/{len(self.steps)}: {step.name}")
            result = step.run(context, current_data)

            if result.is_error():
                self._logger.error(f"Step {step.name} failed, aborting task {self.name}")
                error = result.error or RuntimeError(f"Task {self.name} failed at step {step.name}")
                return Result.failure(
                    error,
                    {
                        "task": self.name,
                        "failed_step": step.name,
                        "step_index": i,
                        "context": context.run_id,
                        "warnings": [w for r in step_results for w in (r.warnings or [])],
                    },
                )

            step_results.append(result)
            if result.data is not None:
                current_data = result.data

        if not step_results:
            return Result.success(current_data)
        return _combine(step_results)

    def add_step(self, step: Step) -> None:
        self.steps.append(step)

    def get_step_count(self) -> int:
        return len(self.steps)


class Job(Generic[T, R]):
    """Tasks executed sequentially with job-level lifecycle events."""

    def __init__(self, name: str, tasks: list[Task], event_bus: EventBus) -> None:
        self.name = name
        self.tasks = tasks
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            JobCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Run all tasks, threading data from one to the next.

        A task returning a new :class:`PipelineContext` replaces the
        context for the remaining tasks instead of becoming their input.
        """
        self.event_bus.publish(
            JobStartedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                job_name=self.name,
                job_type=self.__class__.__name__,
                task_count=len(self.tasks),
            )
        )
        self._logger.debug(f"Starting job: {self.name} with {len(self.tasks)} tasks")
        start_time = time.time()

        current_context = context
        current_input = initial_input
        task_results: list[Result[Any]] = []

        for i, task in enumerate(self.tasks):
            result = task.execute(current_context, current_input)

            if result.is_error():
                self._logger.error(f"Task {task.name} failed, aborting job {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Job {self.name} failed at task {task.name}")
                return Result.failure(
                    error,
                    {**(result.metadata or {}), "job": self.name, "failed_task": task.name, "task_index": i},
                )

            task_results.append(result)
            if isinstance(result.data, PipelineContext):
                current_context = result.data
            elif result.data is not None:
                current_input = result.data

        final = _combine(task_results) if task_results else Result.success(current_input)
        self._publish_completed(context, final, start_time)
        return final

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)

    def get_task_count(self) -> int:
        return len(self.tasks)


class Pipeline(Generic[T, R]):
    """Top-level sequence of jobs for one source file."""

    def __init__(self, name: str, jobs: list[Job], event_bus: EventBus) -> None:
        self.name = name
        self.jobs = jobs
        self.event_bus = event_bus
        self._logger = logging.getLogger(f"{__name__}.{name}")

    def _publish_completed(self, context: PipelineContext, result: Result[Any], start_time: float) -> None:
        self.event_bus.publish(
            PipelineCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                final_result=result,
                duration_ms=(time.time() - start_time) * 1000,
            )
        )

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[R]:
        """Execute all jobs in order.

        Returns:
            The last job's data with the warnings of every job, or the
            first error encountered.
        """
        self.event_bus.publish(PipelineStartedEvent(timestamp=time.time(), run_id=context.run_id, context=context))
        start_time = time.time()
        self._logger.debug(f"Starting pipeline: {self.name} with {len(self.jobs)} jobs")

        current_context = context
        current_input = initial_input
        job_results: list[Result[Any]] = []

        for i, job in enumerate(self.jobs):
            self._logger.debug(f"Executing job {i + 1}/{len(self.jobs)}: {job.name}")
            result = job.execute(current_context, current_input)

            if result.is_error():
                self._logger.error(f"Job {job.name} failed, aborting pipeline {self.name}")
                self._publish_completed(context, result, start_time)
                error = result.error or RuntimeError(f"Pipeline {self.name} failed at job {job.name}")
                return Result.failure(
                    error,
                    {
                        **(result.metadata or {}),
                        "pipeline": self.name,
                        "failed_job": job.name,
                        "job_index": i,
                        "context": context.run_id,
                    },
                )

            job_results.append(result)
            if isinstance(result.data, PipelineContext):
                current_context = result.data
            elif result.data is not None:
                current_input = result.data

        final = _combine(job_results) if job_results else Result.success(current_input)
        self._publish_completed(context, final, start_time)
        return final

    def add_job(self, job: Job) -> None:
        self.jobs.append(job)

    def get_job_count(self) -> int:
        return len(self.jobs)
