"""
Error reporting and exit codes for the clawdbot CLI.

The argv helpers never raise; everything here is for the startup layer
around them.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for clawdbot CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, including a failed state migration."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


class StateMigrationError(Exception):
    """The state migration required by a command did not complete."""

    def __init__(self, command: str | None, cause: BaseException) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"State migration failed before '{command}': {cause}")


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_migration_error(error: StateMigrationError) -> None:
    print_error(
        error.args[0],
        reason="Stored state is in an older format and could not be upgraded",
        solution="Re-run with --verbose for details, or set CLAWDBOT_SKIP_MIGRATION=1",
    )


def print_config_error(detail: str) -> None:
    """Print error when the merged configuration fails validation."""
    print_error(
        "Invalid configuration",
        reason=detail,
        solution="Check .clawdbot.json and ~/.config/clawdbot/config.json",
    )


__all__ = [
    "ExitCode",
    "StateMigrationError",
    "print_config_error",
    "print_error",
    "print_migration_error",
]
