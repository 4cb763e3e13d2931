"""
Clawdbot CLI - Main application entry point.

Subcommands are registered onto ``app`` by their own packages; this module
owns the global options and the startup sequence around dispatch.
"""

import logging
import sys
from collections.abc import Sequence

import click
import typer
from pydantic import ValidationError
from rich.console import Console

from clawdbot import __version__
from clawdbot.cli.argv import executable_name
from clawdbot.cli.errors import (
    ExitCode,
    StateMigrationError,
    print_config_error,
    print_migration_error,
)
from clawdbot.cli.startup import Migrator, prepare_invocation, run_startup
from clawdbot.core.config import load_config, load_layered_env

app = typer.Typer(
    name="clawdbot",
    help="Clawdbot command-line interface",
    no_args_is_help=False,
    invoke_without_command=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the CLI process.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"clawdbot version {__version__}")
        raise typer.Exit(0)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show detailed output and debug logging",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Clawdbot - command-line interface.

    Run a subcommand, or pass --help to see what is available.
    """
    ctx.obj = {"verbose": verbose, "debug": debug}

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def version() -> None:
    """Show clawdbot version and exit."""
    console.print(f"clawdbot version {__version__}")
    raise typer.Exit(0)


def dispatch_app(args: list[str], prog_name: str) -> int | None:
    """
    Run the Typer app on the user arguments without letting Click exit.

    Returns:
        The command's exit code; usage errors and aborts are reported here
        and mapped to USER_ERROR and SIGINT.
    """
    try:
        result = app(args=args, prog_name=prog_name, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return ExitCode.SIGINT
    return result if isinstance(result, int) else None


def cli_main(
    argv: Sequence[str] | None = None,
    *,
    migrate: Migrator | None = None,
) -> None:
    """
    Main CLI entry point.

    Args:
        argv: User arguments for programmatic invocation. When omitted the
            real process arguments are used.
        migrate: Legacy state migration to run before commands that need it
    """
    load_layered_env()

    try:
        config = load_config()
    except ValidationError as e:
        print_config_error(str(e))
        sys.exit(ExitCode.USER_ERROR)

    if argv is None:
        invocation = prepare_invocation(
            sys.argv,
            entry_name=executable_name(sys.argv[0]) if sys.argv else None,
            config=config,
        )
    else:
        invocation = prepare_invocation(fallback_argv=argv, config=config)

    setup_logging(debug=invocation.verbose)

    try:
        exit_code = run_startup(
            invocation,
            dispatch=lambda args: dispatch_app(args, config.program_name),
            migrate=migrate,
        )
    except StateMigrationError as e:
        print_migration_error(e)
        exit_code = ExitCode.GENERAL_ERROR
    except KeyboardInterrupt:
        exit_code = ExitCode.SIGINT

    sys.exit(exit_code)


__all__ = ["app", "cli_main", "dispatch_app", "setup_logging"]
