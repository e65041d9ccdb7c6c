"""Unit test runner service."""

from __future__ import annotations

import logging
import os
import random
import threading
import time
import traceback
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from simple_unit_tester.assertions import (
    OutcomeUnwind,
    TestContext,
    activate_context,
    flag_scope_failure,
)
from simple_unit_tester.assertions.general_checks import NO_EXCEPTION_TEXT
from simple_unit_tester.configuration import Settings, default_settings
from simple_unit_tester.outcomes import SourceLocation, TestOutcome
from simple_unit_tester.registration import (
    TestClassDescriptor,
    TestDescriptor,
    TestExecution,
    TestRegistry,
    default_registry,
)
from simple_unit_tester.registration.test_descriptors import TestBody
from simple_unit_tester.results_writing import (
    ClassEventArgs,
    CompositeEventListener,
    ConsoleEventListener,
    EventListener,
    ListTestEventArgs,
    RunEventArgs,
    TestEventArgs,
    WorkbookReportWriter,
    XmlReportWriter,
)
from simple_unit_tester.value_rendering import render_type_of

from .run_contracts import ClassResult, RunSummary, TestResult

_LOGGER = logging.getLogger("simple_unit_tester.run_execution")
_LOGGER.addHandler(logging.NullHandler())


class UnitTestRunner:
    """Runs the registered tests and reports every event to one listener.

    Settings are snapshotted when ``run()`` starts, so mutating them while a
    run is in progress has no effect on it.
    """

    def __init__(
        self,
        listener: EventListener | None = None,
        settings: Settings | None = None,
        registry: TestRegistry | None = None,
    ) -> None:
        self._listener = listener if listener is not None else EventListener()
        self._settings_source = settings if settings is not None else default_settings()
        self._settings = self._settings_source.snapshot()
        self._registry = registry if registry is not None else default_registry()
        self._summaries: list[RunSummary] = []

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def summaries(self) -> tuple[RunSummary, ...]:
        return tuple(self._summaries)

    def selected_classes(self) -> tuple[TestClassDescriptor, ...]:
        """Return the registered classes narrowed to the tests matching the filter."""
        selected = []
        for descriptor in self._registry.snapshot():
            tests = tuple(
                test
                for test in descriptor.tests
                if self._settings.is_match_test_name(descriptor.name, test.name)
            )
            if tests:
                selected.append(replace(descriptor, tests=tests))
        return tuple(selected)

    def run(self) -> int:
        """Run every selected test and return the process exit code."""
        self._settings = self._settings_source.snapshot()
        self._summaries = []
        classes = self.selected_classes()

        if self._settings.list_tests:
            for descriptor in classes:
                for test in descriptor.tests:
                    self._notify("on_list_test", ListTestEventArgs(descriptor.name, test.name))
            return 0

        rng = random.Random(self._settings.random_seed or None)
        iteration_count = self._settings.iteration_count
        for iteration in range(1, iteration_count + 1):
            _LOGGER.debug("starting iteration %d of %d", iteration, iteration_count)
            ordered = self._shuffled(classes, rng) if self._settings.shuffle_tests else classes
            self._summaries.append(self._run_iteration(ordered, iteration, iteration_count))
        return self.exit_code()

    def exit_code(self) -> int:
        if self._settings.exit_status is not None:
            return self._settings.exit_status
        return 1 if any(summary.has_failures for summary in self._summaries) else 0

    def _run_iteration(
        self,
        classes: tuple[TestClassDescriptor, ...],
        iteration: int,
        iteration_count: int,
    ) -> RunSummary:
        started_at = datetime.now(UTC)
        start = time.perf_counter()
        run_args = RunEventArgs(
            test_count=sum(len(descriptor.tests) for descriptor in classes),
            class_count=len(classes),
            iteration=iteration,
            iteration_count=iteration_count,
            started_at=started_at,
        )
        self._notify("on_run_start", run_args)
        class_results = tuple(self._run_class(descriptor) for descriptor in classes)
        summary = RunSummary(
            iteration=iteration,
            classes=class_results,
            duration_ms=_elapsed_ms(start),
            started_at=started_at,
        )
        self._notify(
            "on_run_end",
            replace(run_args, tally=summary.tally, duration_ms=summary.duration_ms),
        )
        return summary

    def _run_class(self, descriptor: TestClassDescriptor) -> ClassResult:
        start = time.perf_counter()
        self._notify("on_class_start", ClassEventArgs(descriptor.name, len(descriptor.tests)))

        instance, scope_failure = self._create_instance(descriptor)
        if scope_failure is None and descriptor.class_initialize is not None:
            scope_failure = self._run_hook(
                descriptor.class_initialize, instance, f"{descriptor.name}.class_initialize"
            )
        if scope_failure is not None:
            _LOGGER.debug("class %s not initialized: %s", descriptor.name, scope_failure.kind.value)

        results = tuple(
            self._run_test(descriptor, test, instance, scope_failure) for test in descriptor.tests
        )

        cleanup_outcome = None
        if descriptor.class_cleanup is not None and instance is not None:
            with flag_scope_failure(scope_failure):
                cleanup_outcome = self._run_hook(
                    descriptor.class_cleanup, instance, f"{descriptor.name}.class_cleanup"
                )
        if cleanup_outcome is not None and cleanup_outcome.counts_as_failure:
            _LOGGER.error(
                "class_cleanup of %s failed: expected %s but was %s at %s",
                descriptor.name,
                cleanup_outcome.expected,
                cleanup_outcome.actual,
                cleanup_outcome.location,
            )

        duration_ms = _elapsed_ms(start)
        self._notify(
            "on_class_end",
            ClassEventArgs(
                descriptor.name,
                len(descriptor.tests),
                duration_ms=duration_ms,
                cleanup_outcome=cleanup_outcome,
            ),
        )
        return ClassResult(
            class_name=descriptor.name,
            tests=results,
            duration_ms=duration_ms,
            cleanup_outcome=cleanup_outcome,
        )

    def _run_test(
        self,
        descriptor: TestClassDescriptor,
        test: TestDescriptor,
        instance: Any,
        scope_failure: TestOutcome | None,
    ) -> TestResult:
        execution = TestExecution(test)
        args = TestEventArgs(descriptor.name, test.name, declared_at=test.location)
        self._notify("on_test_start", args)
        execution.start()
        start = time.perf_counter()

        if test.ignored and not self._settings.also_run_ignored_tests:
            outcome = TestOutcome.ignore()
        elif scope_failure is not None:
            outcome = scope_failure
        else:
            outcome = self._execute_test(descriptor, test, instance)

        execution.end(outcome, _elapsed_ms(start))
        _LOGGER.debug("%s ended %s", args.full_name, outcome.kind.value)
        self._notify(
            "on_test_end", replace(args, outcome=outcome, duration_ms=execution.duration_ms)
        )
        return TestResult(
            class_name=descriptor.name,
            test_name=test.name,
            outcome=outcome,
            duration_ms=execution.duration_ms,
        )

    def _execute_test(
        self, descriptor: TestClassDescriptor, test: TestDescriptor, instance: Any
    ) -> TestOutcome:
        context = TestContext(
            full_name=f"{descriptor.name}.{test.name}", timeout_ms=self._settings.timeout_ms
        )
        watchdog = self._start_watchdog(context)
        try:
            with activate_context(context):
                if descriptor.test_initialize is not None:
                    _invoke(descriptor.test_initialize, instance, context)
                initialized = context.outcome.is_succeeded
                if initialized:
                    _invoke(test.body, instance, context)
                    if context.is_cancelled:
                        context.record(context.timeout_outcome(test.location))
                if descriptor.test_cleanup is not None:
                    with flag_scope_failure(None if initialized else context.outcome):
                        _invoke(descriptor.test_cleanup, instance, context)
        finally:
            if watchdog is not None:
                watchdog.cancel()
        return context.outcome

    def _create_instance(self, descriptor: TestClassDescriptor) -> tuple[Any, TestOutcome | None]:
        context = TestContext(full_name=f"{descriptor.name}.<factory>")
        instance = None
        with activate_context(context):
            try:
                instance = descriptor.factory()
            except OutcomeUnwind as exc:
                context.record(exc.outcome)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                context.record(unhandled_exception_outcome(exc))
        if context.outcome.is_succeeded:
            return instance, None
        return None, context.outcome

    @staticmethod
    def _run_hook(hook: TestBody, instance: Any, name: str) -> TestOutcome | None:
        context = TestContext(full_name=name)
        with activate_context(context):
            _invoke(hook, instance, context)
        return None if context.outcome.is_succeeded else context.outcome

    def _start_watchdog(self, context: TestContext) -> threading.Timer | None:
        if self._settings.timeout_ms is None:
            return None
        watchdog = threading.Timer(self._settings.timeout_ms / 1000, context.cancel)
        watchdog.daemon = True
        watchdog.start()
        return watchdog

    @staticmethod
    def _shuffled(
        classes: tuple[TestClassDescriptor, ...], rng: random.Random
    ) -> tuple[TestClassDescriptor, ...]:
        shuffled = []
        for descriptor in classes:
            tests = list(descriptor.tests)
            rng.shuffle(tests)
            shuffled.append(replace(descriptor, tests=tuple(tests)))
        return tuple(shuffled)

    def _notify(self, hook: str, args: object) -> None:
        try:
            getattr(self._listener, hook)(args)
        except Exception:  # pylint: disable=broad-exception-caught
            _LOGGER.exception("listener %s failed in %s", type(self._listener).__name__, hook)


def unhandled_exception_outcome(exc: BaseException) -> TestOutcome:
    """Convert an exception escaping user code into a failed outcome."""
    actual = render_type_of(exc)
    message = str(exc)
    if message:
        actual = f"{actual}: {message}"
    return TestOutcome.fail(NO_EXCEPTION_TEXT, actual, location=_raise_location(exc))


def build_event_listener(settings: Settings) -> EventListener:
    """Return the console listener plus the report writers enabled in ``settings``."""
    console = ConsoleEventListener(
        show_duration=settings.show_duration, output_color=settings.output_color
    )
    listeners: list[EventListener] = [console]
    if settings.output_xml:
        listeners.append(XmlReportWriter(settings.output_xml_path))
    if settings.output_workbook_path:
        listeners.append(WorkbookReportWriter(settings.output_workbook_path))
    if len(listeners) == 1:
        return console
    return CompositeEventListener(listeners)


def _invoke(body: TestBody, instance: Any, context: TestContext) -> None:
    try:
        body(instance)
    except OutcomeUnwind as exc:
        context.record(exc.outcome)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        context.record(unhandled_exception_outcome(exc))


def _raise_location(exc: BaseException) -> SourceLocation | None:
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return None
    innermost = frames[-1]
    if innermost.lineno is None:
        return None
    return SourceLocation(
        file_path=os.path.abspath(innermost.filename), line_number=innermost.lineno
    )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
