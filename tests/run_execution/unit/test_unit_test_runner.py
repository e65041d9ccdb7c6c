"""Unit test runner tests."""

from __future__ import annotations

import logging
import os
import threading
import time

import pytest
from simple_unit_tester.assertions import (
    TestThread,
    assert_,
    assume,
    current_scope_failure,
    valid,
)
from simple_unit_tester.configuration import Settings
from simple_unit_tester.outcomes import OutcomeKind, TestOutcome
from simple_unit_tester.registration import TestRegistry, declarations
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
from simple_unit_tester.run_execution import (
    UnitTestRunner,
    build_event_listener,
    unhandled_exception_outcome,
)


class _EventLog(EventListener):
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def on_run_start(self, args: RunEventArgs) -> None:
        self.events.append(("run_start", args))

    def on_class_start(self, args: ClassEventArgs) -> None:
        self.events.append(("class_start", args))

    def on_test_start(self, args: TestEventArgs) -> None:
        self.events.append(("test_start", args))

    def on_test_end(self, args: TestEventArgs) -> None:
        self.events.append(("test_end", args))

    def on_class_end(self, args: ClassEventArgs) -> None:
        self.events.append(("class_end", args))

    def on_run_end(self, args: RunEventArgs) -> None:
        self.events.append(("run_end", args))

    def on_list_test(self, args: ListTestEventArgs) -> None:
        self.events.append(("list_test", args))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def ended(self) -> dict[str, TestOutcome]:
        outcomes = {}
        for name, args in self.events:
            if name == "test_end":
                assert isinstance(args, TestEventArgs)
                assert args.outcome is not None
                outcomes[args.full_name] = args.outcome
        return outcomes


def _run(registry: TestRegistry, **settings: object) -> tuple[int, _EventLog, UnitTestRunner]:
    log = _EventLog()
    runner = UnitTestRunner(listener=log, settings=Settings(**settings), registry=registry)
    return runner.run(), log, runner


def _register(registry: TestRegistry, class_name: str, **tests: object) -> None:
    declarations.register_test_class(class_name, dict, registry=registry)
    for name, body in tests.items():
        declarations.register_test_method(class_name, name, body, registry=registry)


def test_events_follow_run_class_test_nesting() -> None:
    registry = TestRegistry()
    _register(registry, "math", adds=lambda state: None, subtracts=lambda state: None)

    exit_code, log, _ = _run(registry)

    assert exit_code == 0
    assert log.names() == [
        "run_start",
        "class_start",
        "test_start",
        "test_end",
        "test_start",
        "test_end",
        "class_end",
        "run_end",
    ]
    run_start = log.events[0][1]
    assert isinstance(run_start, RunEventArgs)
    assert (run_start.test_count, run_start.class_count) == (2, 1)


def test_run_end_carries_the_tally_and_failures_set_the_exit_code() -> None:
    registry = TestRegistry()
    _register(
        registry,
        "math",
        adds=lambda state: assert_.are_equal(2, 1 + 1),
        differs=lambda state: assert_.are_not_equal(24, 24),
        later=lambda state: assume.is_true(False),
    )

    exit_code, log, runner = _run(registry)

    run_end = log.events[-1][1]
    assert isinstance(run_end, RunEventArgs)
    assert (run_end.tally.succeeded, run_end.tally.failed, run_end.tally.ignored) == (1, 1, 1)
    assert exit_code == 1
    assert runner.summaries[0].has_failures is True
    assert log.ended()["math.differs"].expected == "not 24"


def test_ignored_outcomes_alone_exit_zero() -> None:
    registry = TestRegistry()
    _register(registry, "io", reads=lambda state: assume.is_true(False))

    exit_code, log, _ = _run(registry)

    assert exit_code == 0
    assert log.ended()["io.reads"].kind == OutcomeKind.IGNORED


def test_exit_status_overrides_the_computed_code() -> None:
    registry = TestRegistry()
    _register(registry, "math", fails=lambda state: assert_.fail())

    exit_code, _, _ = _run(registry, exit_status=0)

    assert exit_code == 0


def test_filter_selects_tests_and_drops_empty_classes() -> None:
    registry = TestRegistry()
    _register(registry, "math", adds=lambda state: None, subtracts=lambda state: None)
    _register(registry, "io", reads=lambda state: None)

    _, log, _ = _run(registry, filter_tests="math.add*")

    assert list(log.ended()) == ["math.adds"]
    assert log.names().count("class_start") == 1


def test_list_tests_emits_names_without_running() -> None:
    registry = TestRegistry()
    ran: list[str] = []
    _register(registry, "math", adds=lambda state: ran.append("adds"))
    _register(registry, "io", reads=lambda state: ran.append("reads"))

    exit_code, log, _ = _run(registry, list_tests=True)

    assert exit_code == 0
    assert ran == []
    assert log.names() == ["list_test", "list_test"]
    assert [args.full_name for _, args in log.events] == ["math.adds", "io.reads"]


def test_repeat_runs_every_iteration_with_its_own_run_events() -> None:
    registry = TestRegistry()
    ran: list[str] = []
    _register(registry, "math", adds=lambda state: ran.append("adds"))

    _, log, runner = _run(registry, repeat_tests=3)

    assert ran == ["adds", "adds", "adds"]
    starts = [args for name, args in log.events if name == "run_start"]
    assert [args.iteration for args in starts] == [1, 2, 3]
    assert all(args.iteration_count == 3 for args in starts)
    assert len(runner.summaries) == 3


def test_repeat_zero_runs_once() -> None:
    registry = TestRegistry()
    _register(registry, "math", adds=lambda state: None)

    _, log, _ = _run(registry, repeat_tests=0)

    assert log.names().count("run_start") == 1


def test_shuffle_with_a_seed_is_reproducible() -> None:
    names = [f"t{index}" for index in range(12)]

    def order(seed: int) -> list[str]:
        registry = TestRegistry()
        _register(registry, "many", **{name: (lambda state: None) for name in names})
        _, log, _ = _run(registry, shuffle_tests=True, random_seed=seed)
        return [key.split(".")[1] for key in log.ended()]

    first = order(7)

    assert first == order(7)
    assert sorted(first) == sorted(names)


def test_one_instance_serves_every_test_of_a_class_execution() -> None:
    registry = TestRegistry()
    instances: list[int] = []

    @declarations.test_class("stateful", registry=registry)
    class _Stateful:
        @declarations.test_method
        def first(self) -> None:
            instances.append(id(self))

        @declarations.test_method
        def second(self) -> None:
            instances.append(id(self))

    _run(registry)

    assert len(instances) == 2
    assert instances[0] == instances[1]


def test_hooks_run_around_each_test() -> None:
    registry = TestRegistry()
    calls: list[str] = []

    @declarations.test_class("lifecycle", registry=registry)
    class _Lifecycle:
        @declarations.class_initialize
        def open_all(self) -> None:
            calls.append("class_initialize")

        @declarations.test_initialize
        def reset(self) -> None:
            calls.append("test_initialize")

        @declarations.test_method
        def works(self) -> None:
            calls.append("works")

        @declarations.test_cleanup
        def tidy(self) -> None:
            calls.append("test_cleanup")

        @declarations.class_cleanup
        def close_all(self) -> None:
            calls.append("class_cleanup")

    _run(registry)

    assert calls == [
        "class_initialize",
        "test_initialize",
        "works",
        "test_cleanup",
        "class_cleanup",
    ]


def test_failed_class_initialize_is_reported_for_every_test() -> None:
    registry = TestRegistry()
    ran: list[str] = []
    seen_scope: list[TestOutcome | None] = []

    @declarations.test_class("broken", registry=registry)
    class _Broken:
        @declarations.class_initialize
        def open_all(self) -> None:
            assert_.are_equal("ready", "down")

        @declarations.test_method
        def first(self) -> None:
            ran.append("first")

        @declarations.test_method
        def second(self) -> None:
            ran.append("second")

        @declarations.class_cleanup
        def close_all(self) -> None:
            seen_scope.append(current_scope_failure())

    exit_code, log, _ = _run(registry)

    outcomes = log.ended()
    assert ran == []
    assert exit_code == 1
    assert outcomes["broken.first"] == outcomes["broken.second"]
    assert outcomes["broken.first"].expected == '"ready"'
    assert seen_scope == [outcomes["broken.first"]]


def test_failed_test_initialize_skips_the_body_but_runs_cleanup() -> None:
    registry = TestRegistry()
    calls: list[str] = []
    seen_scope: list[TestOutcome | None] = []

    @declarations.test_class("partial", registry=registry)
    class _Partial:
        @declarations.test_initialize
        def reset(self) -> None:
            valid.is_true(False)

        @declarations.test_method
        def body(self) -> None:
            calls.append("body")

        @declarations.test_cleanup
        def tidy(self) -> None:
            calls.append("cleanup")
            seen_scope.append(current_scope_failure())

    _, log, _ = _run(registry)

    outcome = log.ended()["partial.body"]
    assert calls == ["cleanup"]
    assert outcome.kind == OutcomeKind.FAILED
    assert seen_scope == [outcome]


def test_failing_factory_fails_every_test_and_skips_cleanup() -> None:
    registry = TestRegistry()
    cleaned: list[str] = []

    def factory() -> object:
        raise ConnectionError("no database")

    declarations.register_test_class("db", factory, registry=registry)
    declarations.register_test_method("db", "queries", lambda state: None, registry=registry)
    declarations.register_class_cleanup(
        "db", lambda state: cleaned.append("cleanup"), registry=registry
    )

    exit_code, log, _ = _run(registry)

    assert exit_code == 1
    assert cleaned == []
    assert log.ended()["db.queries"].actual == "<ConnectionError>: no database"


def test_failed_class_cleanup_is_logged_and_fails_the_run(
    caplog: pytest.LogCaptureFixture,
) -> None:
    registry = TestRegistry()
    _register(registry, "io", reads=lambda state: None)
    declarations.register_class_cleanup(
        "io", lambda state: assert_.abort("disk gone"), registry=registry
    )

    with caplog.at_level(logging.ERROR, logger="simple_unit_tester.run_execution"):
        exit_code, log, _ = _run(registry)

    class_end = [args for name, args in log.events if name == "class_end"][0]
    assert isinstance(class_end, ClassEventArgs)
    assert class_end.cleanup_outcome is not None
    assert class_end.cleanup_outcome.message == "disk gone"
    assert exit_code == 1
    assert "class_cleanup of io failed" in caplog.text


def test_unhandled_exception_fails_with_its_type_and_raise_site() -> None:
    registry = TestRegistry()

    def explode(state: object) -> None:
        raise ValueError("boom")

    _register(registry, "errors", explode=explode)

    _, log, _ = _run(registry)

    outcome = log.ended()["errors.explode"]
    assert outcome.kind == OutcomeKind.FAILED
    assert outcome.expected == "No Exception to be thrown"
    assert outcome.actual == "<ValueError>: boom"
    assert outcome.location is not None
    assert outcome.location.file_path == os.path.abspath(__file__)
    assert outcome.location.line_number == explode.__code__.co_firstlineno + 1


def test_unhandled_exception_without_message() -> None:
    try:
        raise KeyError()
    except KeyError as exc:
        outcome = unhandled_exception_outcome(exc)

    assert outcome.actual == "<KeyError>"
    assert outcome.location is not None


def test_declared_ignored_tests_are_reported_ignored_unless_requested() -> None:
    registry = TestRegistry()
    ran: list[str] = []
    declarations.register_test_class("io", dict, registry=registry)
    declarations.register_test_method(
        "io", "later", lambda state: ran.append("later"), ignore=True, registry=registry
    )

    _, skipped_log, _ = _run(registry)
    _, forced_log, _ = _run(registry, also_run_ignored_tests=True)

    assert skipped_log.ended()["io.later"].kind == OutcomeKind.IGNORED
    assert forced_log.ended()["io.later"].is_succeeded
    assert ran == ["later"]


def test_thread_outliving_its_test_does_not_fail_the_next_one() -> None:
    registry = TestRegistry()
    release = threading.Event()
    workers: list[TestThread] = []

    def late_check() -> None:
        release.wait(5)
        valid.is_true(False, "late")

    def spawns(state: object) -> None:
        worker = TestThread(target=late_check)
        worker.start()
        workers.append(worker)

    def innocent(state: object) -> None:
        release.set()
        workers[0].join(5)

    _register(registry, "threads", a_spawns=spawns, b_innocent=innocent)

    exit_code, log, _ = _run(registry)

    assert exit_code == 0
    assert log.ended()["threads.a_spawns"].is_succeeded
    assert log.ended()["threads.b_innocent"].is_succeeded


def test_slow_test_fails_with_a_timeout() -> None:
    registry = TestRegistry()
    _register(registry, "slow", sleeps=lambda state: time.sleep(0.3))

    exit_code, log, _ = _run(registry, timeout_ms=20)

    outcome = log.ended()["slow.sleeps"]
    assert exit_code == 1
    assert outcome.expected == "completion within 20 ms"
    assert outcome.actual == "<timeout>"


def test_fast_test_is_unaffected_by_the_timeout() -> None:
    registry = TestRegistry()
    _register(registry, "fast", returns=lambda state: None)

    _, log, _ = _run(registry, timeout_ms=5000)

    assert log.ended()["fast.returns"].is_succeeded


def test_settings_changed_during_a_run_do_not_affect_it() -> None:
    registry = TestRegistry()
    settings = Settings()
    ran: list[str] = []

    def narrows(state: object) -> None:
        settings.filter_tests = "nothing.*"
        ran.append("narrows")

    _register(registry, "math", narrows=narrows, follows=lambda state: ran.append("follows"))

    UnitTestRunner(listener=_EventLog(), settings=settings, registry=registry).run()

    assert ran == ["narrows", "follows"]


class _ExplodingListener(EventListener):
    def on_test_start(self, args: TestEventArgs) -> None:
        raise RuntimeError("listener broke")


def test_listener_errors_are_logged_and_the_run_continues(
    caplog: pytest.LogCaptureFixture,
) -> None:
    registry = TestRegistry()
    ran: list[str] = []
    _register(registry, "math", adds=lambda state: ran.append("adds"))

    with caplog.at_level(logging.ERROR):
        exit_code = UnitTestRunner(
            listener=_ExplodingListener(), settings=Settings(), registry=registry
        ).run()

    assert exit_code == 0
    assert ran == ["adds"]
    assert "on_test_start" in caplog.text


def test_build_event_listener_adds_enabled_report_writers() -> None:
    console_only = build_event_listener(Settings())
    combined = build_event_listener(
        Settings(output_xml=True, output_workbook_path="results.xlsx")
    )

    assert isinstance(console_only, ConsoleEventListener)
    assert isinstance(combined, CompositeEventListener)
    assert [type(listener) for listener in combined.listeners] == [
        ConsoleEventListener,
        XmlReportWriter,
        WorkbookReportWriter,
    ]
