"""Command line interface entry point."""

from __future__ import annotations

import importlib
import logging
import sys
from dataclasses import replace
from typing import Any

import click

from simple_unit_tester.configuration import (
    DEFAULT_SETTINGS_FILENAME,
    DEFAULT_XML_PATH,
    Settings,
    SettingsError,
    default_settings,
    load_settings,
    write_placeholder_settings,
)
from simple_unit_tester.registration import RegistrationError, TestRegistry, default_registry
from simple_unit_tester.run_execution import UnitTestRunner, build_event_listener

_PACKAGE_LOGGER = "simple_unit_tester"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="simple-unit-tester")
def cli() -> None:
    """Declarative unit test runner."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_SETTINGS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML settings file to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML settings file holding every default value."""
    try:
        resolved_output = write_placeholder_settings(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.argument("modules", nargs=-1, type=str)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON settings file; flags override its values",
)
@click.option(
    "--filter",
    "filter_tests",
    required=False,
    help='Glob on "<class>.<test>" selecting the tests to run',
)
@click.option("--list", "list_tests", is_flag=True, default=False, help="List tests, do not run")
@click.option(
    "--also-run-ignored",
    "also_run_ignored_tests",
    is_flag=True,
    default=False,
    help="Run tests declared as ignored",
)
@click.option(
    "--repeat",
    "repeat_tests",
    type=click.IntRange(min=0),
    required=False,
    help="Number of run iterations",
)
@click.option(
    "--shuffle",
    "shuffle_seed",
    type=click.IntRange(min=0),
    is_flag=False,
    flag_value=0,
    default=None,
    help="Shuffle tests within each class; --shuffle=<seed> makes the order repeatable",
)
@click.option("--no-color", "no_color", is_flag=True, default=False, help="Disable colors")
@click.option(
    "--no-duration", "no_duration", is_flag=True, default=False, help="Hide test durations"
)
@click.option(
    "--timeout-ms",
    "timeout_ms",
    type=click.IntRange(min=1),
    required=False,
    help="Fail tests running longer than this many milliseconds",
)
@click.option(
    "--output-xml",
    "output_xml_path",
    is_flag=False,
    flag_value=DEFAULT_XML_PATH,
    default=None,
    type=click.Path(path_type=str),
    help=f"Write a JUnit XML report (default path {DEFAULT_XML_PATH})",
)
@click.option(
    "--output-workbook",
    "output_workbook_path",
    required=False,
    type=click.Path(path_type=str),
    help="Write an .xlsx results workbook",
)
@click.option(
    "--exit-status",
    "exit_status",
    type=int,
    required=False,
    help="Exit with this code regardless of test outcomes",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log runner activity")
@click.pass_context
def run_tests(ctx: click.Context, modules: tuple[str, ...], **options: Any) -> None:
    """Import MODULES to register their tests, then run them."""
    previous_level = _configure_logging(options.pop("verbose"))
    try:
        settings = _resolve_settings(options.pop("config_path"), options)
        registry = _context_registry(ctx)
        _import_test_modules(modules)
        registry.freeze()

        runner = UnitTestRunner(build_event_listener(settings), settings, registry)
        exit_code = runner.run()
    finally:
        logging.getLogger(_PACKAGE_LOGGER).setLevel(previous_level)
    ctx.exit(exit_code)


def main(argv: list[str] | None = None, *, registry: TestRegistry | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False, obj={"registry": registry})
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


def unit_test_main(argv: list[str] | None = None, *, registry: TestRegistry | None = None) -> int:
    """Run the tests a program has already declared, parsing the ``run`` flags from ``argv``."""
    argv = argv if argv is not None else sys.argv[1:]
    return main(["run", *argv], registry=registry)


def _resolve_settings(config_path: str | None, options: dict[str, Any]) -> Settings:
    settings = default_settings().snapshot()
    if config_path:
        try:
            settings = load_settings(config_path, settings)
        except SettingsError as exc:
            raise CliError(str(exc)) from exc

    overrides: dict[str, Any] = {
        key: options[key]
        for key in (
            "filter_tests",
            "repeat_tests",
            "timeout_ms",
            "output_workbook_path",
            "exit_status",
        )
        if options[key] is not None
    }
    if options["list_tests"]:
        overrides["list_tests"] = True
    if options["also_run_ignored_tests"]:
        overrides["also_run_ignored_tests"] = True
    if options["shuffle_seed"] is not None:
        overrides["shuffle_tests"] = True
        overrides["random_seed"] = options["shuffle_seed"]
    if options["output_xml_path"] is not None:
        overrides["output_xml"] = True
        overrides["output_xml_path"] = options["output_xml_path"]
    if options["no_color"]:
        overrides["output_color"] = False
    if options["no_duration"]:
        overrides["show_duration"] = False
    return replace(settings, **overrides)


def _context_registry(ctx: click.Context) -> TestRegistry:
    registry = (ctx.obj or {}).get("registry")
    return registry if registry is not None else default_registry()


def _import_test_modules(modules: tuple[str, ...]) -> None:
    for module_name in modules:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            raise CliError(f"Cannot import test module '{module_name}': {exc}") from exc
        except RegistrationError as exc:
            raise CliError(str(exc)) from exc


class _ClickEchoHandler(logging.Handler):
    """Writes log records to the current standard error through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pylint: disable=broad-exception-caught
            self.handleError(record)


def _configure_logging(verbose: bool) -> int:
    """Route package logs through click for the run and return the level to restore."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    previous_level = logger.level
    if not any(isinstance(handler, _ClickEchoHandler) for handler in logger.handlers):
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return previous_level


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
