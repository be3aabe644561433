"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from asdctl import __version__
from asdctl.core.device_match import describe_model
from asdctl.core.errors import AsdctlError, ReportInitError
from asdctl.core.model import BrightnessToken, OperationMode
from asdctl.core.service import BrightnessService
from asdctl.core.token import parse_token

NOTICE = f"asdctl {__version__} -- Apple Studio Display brightness control"

ABOUT = f"""{NOTICE}

This program is free software; you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation; either version 2 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

CREDITS:
  Based on asdcontrol by Nicholas K. Dionysopoulos and acdcontrol by Pavel Gurevich."""

EPILOG = """Use '--' before a negative brightness, e.g. asdctl /dev/usb/hiddev0 -- -1000.

asdctl --detect /dev/usb/hiddev* finds the HID node of the monitor.

asdctl /dev/usb/hiddev0 20000 sets the brightness to 20000 (400 to 60000 on the Studio Display).

asdctl /dev/usb/hiddev0 +10% raises the brightness by a tenth of the range.
"""

app = typer.Typer(
    help="Apple Studio Display brightness control over USB HID",
    add_completion=False,
)


def _build_service() -> BrightnessService:
    service = BrightnessService()
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _about_callback(value: bool) -> None:
    if value:
        typer.echo(ABOUT)
        raise typer.Exit()


def _list_all_callback(value: bool) -> None:
    if not value:
        return
    try:
        service = _build_service()
    except AsdctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    for model in service.list_models():
        typer.echo(describe_model(service.registry, model))
    raise typer.Exit()


def _echo_driver_version(version: tuple[int, int, int]) -> None:
    major, minor, patch = version
    typer.echo(f"hiddev driver version is {major}.{minor}.{patch}")


def _split_arguments(args: list[str], *, detect: bool) -> tuple[list[str], BrightnessToken | None]:
    paths: list[str] = []
    token: BrightnessToken | None = None
    for arg in args:
        parsed = None if detect else parse_token(arg)
        if parsed is None:
            paths.append(arg)
        else:
            token = parsed
    return paths, token


def _run_detect(service: BrightnessService, paths: list[str], *, silent: bool) -> int:
    exit_code = 0
    version_shown = silent
    for path in paths:
        try:
            report = service.detect(path)
        except AsdctlError as exc:
            typer.echo(f"Error: {exc}", err=True)
            exit_code = max(exit_code, exc.exit_code)
            continue
        if report is None:
            continue
        if not version_shown:
            _echo_driver_version(report.driver_version)
            version_shown = True
        status = "SUPPORTED" if report.model is not None else "UNSUPPORTED"
        typer.echo(f"{path}: USB Monitor - {status}.\t{service.describe(report.probe)}")
    return exit_code


def _run_brightness(
    service: BrightnessService,
    paths: list[str],
    token: BrightnessToken | None,
    *,
    silent: bool,
    brief: bool,
    force: bool,
) -> int:
    exit_code = 0
    version_shown = silent
    for path in paths:
        try:
            report = service.process(path, token, force=force)
        except ReportInitError as exc:
            typer.echo(f"FATAL: {exc}", err=True)
            raise typer.Exit(code=exc.exit_code) from None
        except AsdctlError as exc:
            typer.echo(f"Error: {exc}", err=True)
            exit_code = max(exit_code, exc.exit_code)
            continue

        if not version_shown:
            _echo_driver_version(report.driver_version)
            version_shown = True
        if report.model is None:
            typer.echo(f"Warning: Unsupported device: {service.describe(report.probe)}", err=True)
        if report.mode is OperationMode.SET:
            continue
        typer.echo(str(report.value) if brief else f"{path}: BRIGHTNESS={report.value}")
    return exit_code


@app.command(
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"], "ignore_unknown_options": True},
)
def main(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        metavar="HIDDEV... BRIGHTNESS",
        help="HID device paths and an optional brightness: N, +N, -N, N%, +N% or -N%.",
        show_default=False,
    ),
    silent: bool = typer.Option(False, "--silent", "-s", help="Suppress non-functional program output."),
    brief: bool = typer.Option(False, "--brief", "-b", help="Print only the brightness value."),
    detect: bool = typer.Option(False, "--detect", "-d", help="Report which devices are USB monitors."),
    force: bool = typer.Option(False, "--force", "-f", help="Proceed on monitors of unknown models."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every protocol step."),
    list_all: bool = typer.Option(
        False,
        "--list-all",
        "-l",
        help="List supported devices and quit.",
        callback=_list_all_callback,
        is_eager=True,
    ),
    about: bool = typer.Option(
        False,
        "--about",
        "-a",
        help="Show copyright and license information and quit.",
        callback=_about_callback,
        is_eager=True,
    ),
) -> None:
    """Query or adjust the backlight brightness of USB HID monitors.

    Without a brightness the current value is printed. You need read
    permission on the device to query it and write permission to change it.
    """
    paths, token = _split_arguments(args or [], detect=detect)
    if not paths:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        service = _build_service()
    except AsdctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if not silent:
        typer.echo(NOTICE)

    if detect:
        exit_code = _run_detect(service, paths, silent=silent)
    else:
        exit_code = _run_brightness(service, paths, token, silent=silent, brief=brief, force=force)
    raise typer.Exit(code=exit_code)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
