"""
Startup sequencing for the clawdbot CLI.

Turns a raw invocation into a canonical argv, runs the legacy state
migration when the requested command needs it, then hands the user
arguments to the command dispatcher.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from clawdbot.cli.argv import (
    HEADER_LENGTH,
    build_parse_argv,
    get_command_path,
    get_verbose_flag,
    has_help_or_version,
    should_migrate_state,
)
from clawdbot.cli.errors import ExitCode, StateMigrationError
from clawdbot.core.config import CliConfig, load_config

logger = logging.getLogger(__name__)

Dispatcher = Callable[[list[str]], int | None]
Migrator = Callable[[], None]


@dataclass(frozen=True)
class Invocation:
    """Everything startup needs to know about one CLI invocation."""

    argv: list[str]
    command_path: list[str]
    verbose: bool
    needs_migration: bool

    @property
    def user_args(self) -> list[str]:
        return self.argv[HEADER_LENGTH:]

    @property
    def primary_command(self) -> str | None:
        return self.command_path[0] if self.command_path else None


def prepare_invocation(
    raw_args: Sequence[str] | None = None,
    *,
    fallback_argv: Sequence[str] | None = None,
    entry_name: str | None = None,
    config: CliConfig | None = None,
) -> Invocation:
    """
    Normalize the raw arguments and classify the invocation.

    Help and version requests never migrate, and neither does anything when
    migration is disabled in config.

    Args:
        raw_args: Arguments as the process received them
        fallback_argv: User arguments, for programmatic callers
        entry_name: Name of the running binary. Only used to recognize a
            direct run; the program slot always comes from config.
        config: Loaded configuration (load_config() when omitted)
    """
    if config is None:
        config = load_config()

    argv = build_parse_argv(
        program_name=config.program_name,
        raw_args=raw_args,
        fallback_argv=fallback_argv,
        entry_name=entry_name,
    )
    command_path = get_command_path(argv, HEADER_LENGTH)
    needs_migration = (
        config.migration.enabled
        and not has_help_or_version(argv)
        and should_migrate_state(argv)
    )
    return Invocation(
        argv=argv,
        command_path=command_path,
        verbose=get_verbose_flag(argv, include_debug=config.verbose_includes_debug),
        needs_migration=needs_migration,
    )


def run_startup(
    invocation: Invocation,
    *,
    dispatch: Dispatcher,
    migrate: Migrator | None = None,
) -> int:
    """
    Run the migration step if required, then dispatch.

    Args:
        invocation: Result of prepare_invocation()
        dispatch: Receives the user arguments (argv without header slots)
        migrate: Legacy state migration; called at most once

    Returns:
        Exit code from the dispatcher (SUCCESS when it returns None)

    Raises:
        StateMigrationError: If the migration raised; dispatch does not run
    """
    logger.debug("Parse argv: %s", invocation.argv)

    if invocation.needs_migration:
        if migrate is None:
            logger.debug(
                "Command '%s' needs state migration but no migrator is configured",
                invocation.primary_command,
            )
        else:
            logger.debug("Migrating state before '%s'", invocation.primary_command)
            try:
                migrate()
            except Exception as e:
                raise StateMigrationError(invocation.primary_command, e) from e

    result = dispatch(invocation.user_args)
    return ExitCode.SUCCESS if result is None else int(result)
