"""
Pescope CLI -- PE Header Inspector
===================================

Click-based command-line interface for the pescope PE inspector.

Usage::

    # Text report
    pescope /path/to/binary.exe

    # JSON on stdout
    pescope /path/to/binary.exe --json

    # Text report plus a JSON report file
    pescope /path/to/binary.exe --output report.json

    # Debug logging on stderr
    pescope /path/to/binary.exe --verbose

    # Settings from a TOML file
    pescope /path/to/binary.exe --config pescope.toml

Exit status is 0 on success and 1 on any error, including usage errors.
Errors are reported as a single ``Error: ...`` line on stderr.

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shared.config import PescopeConfig
from shared.console import ReportConsole
from shared.logger import PescopeLogger

from pescope import __version__
from pescope.core.engine import InspectEngine
from pescope.core.exceptions import PescopeError
from pescope.output.console import PescopeConsoleOutput
from pescope.output.report import PescopeReportGenerator


# ---------------------------------------------------------------------------
# CLI command
# ---------------------------------------------------------------------------

@click.command("pescope")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the metadata as JSON instead of the text report.",
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a JSON report to this file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load settings from a TOML file.",
)
@click.version_option(version=__version__, prog_name="pescope")
def pescope_cli(
    path: Path,
    json_output: bool,
    output_path: Path | None,
    verbose: bool,
    config_path: Path | None,
) -> None:
    """Pescope -- PE Header Inspector.

    Print the COFF file header, optional header and section table of a
    Windows PE executable (.exe, .dll, .sys).

    PATH is the path to the PE file to inspect.

    Examples:

    \b
        pescope C:/Windows/System32/notepad.exe
        pescope sample.dll --json
    """
    console = ReportConsole()

    try:
        config = PescopeConfig.load(config_path)
    except (OSError, ValueError) as exc:
        console.error(f"Invalid configuration: {exc}")
        sys.exit(1)

    settings = config.global_settings
    logger = PescopeLogger.from_config("cli", settings, verbose=verbose)
    engine = InspectEngine(
        config=config,
        logger=PescopeLogger.from_config("engine", settings, verbose=verbose),
    )
    report_gen = PescopeReportGenerator(indent=config.inspect.json_indent)

    try:
        result = engine.inspect(path)
        if output_path is not None:
            report_path = report_gen.generate_json(result, output_path)
            logger.info("JSON report saved: %s", report_path)
    except KeyboardInterrupt:
        console.error("Inspection interrupted by user.")
        sys.exit(1)
    except PescopeError as exc:
        console.error(str(exc))
        sys.exit(1)
    except OSError as exc:
        console.error(f"Unable to write report: {exc}")
        sys.exit(1)

    if json_output:
        console.json(report_gen.to_json(result), indent=config.inspect.json_indent)
        return

    PescopeConsoleOutput(console=console).display(result.metadata)


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``pescope`` script and ``python -m pescope``.

    Click exits with status 2 on usage errors; this tool reports every
    error with status 1.
    """
    try:
        pescope_cli.main(args=argv, prog_name="pescope", standalone_mode=False)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except click.ClickException as exc:
        exc.show()
        sys.exit(1)


if __name__ == "__main__":
    main()
