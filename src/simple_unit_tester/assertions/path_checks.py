"""Predicates of the file and directory assertion families."""

from __future__ import annotations

import os
from pathlib import Path

from simple_unit_tester.value_rendering import render_value

from .check_outcomes import CheckResult

PathLike = str | os.PathLike[str]


def file_exists(path: PathLike) -> CheckResult:
    return CheckResult.of(Path(path).is_file(), "file exists", _render_path(path))


def file_does_not_exist(path: PathLike) -> CheckResult:
    return CheckResult.of(not Path(path).is_file(), "not file exists", _render_path(path))


def files_are_equal(expected: PathLike, actual: PathLike) -> CheckResult:
    return CheckResult.of(
        _same_contents(Path(expected), Path(actual)),
        _render_path(expected),
        _render_path(actual),
    )


def files_are_not_equal(expected: PathLike, actual: PathLike) -> CheckResult:
    return CheckResult.of(
        not _same_contents(Path(expected), Path(actual)),
        f"not {_render_path(expected)}",
        _render_path(actual),
    )


def directory_exists(path: PathLike) -> CheckResult:
    return CheckResult.of(Path(path).is_dir(), "directory exists", _render_path(path))


def directory_does_not_exist(path: PathLike) -> CheckResult:
    return CheckResult.of(not Path(path).is_dir(), "not directory exists", _render_path(path))


def directories_are_equal(expected: PathLike, actual: PathLike) -> CheckResult:
    return CheckResult.of(
        Path(expected).resolve() == Path(actual).resolve(),
        _render_path(expected),
        _render_path(actual),
    )


def directories_are_not_equal(expected: PathLike, actual: PathLike) -> CheckResult:
    return CheckResult.of(
        Path(expected).resolve() != Path(actual).resolve(),
        f"not {_render_path(expected)}",
        _render_path(actual),
    )


def _same_contents(expected: Path, actual: Path) -> bool:
    if not expected.is_file() or not actual.is_file():
        return False
    return expected.read_bytes() == actual.read_bytes()


def _render_path(path: PathLike) -> str:
    return render_value(os.fspath(path))
