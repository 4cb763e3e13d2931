"""
Argv normalization and inspection for the clawdbot CLI.

The process can be started in several ways, and each leaves a differently
shaped argument vector behind:
- ``node dist/entry.js status`` / ``node-22.2.0 ...`` / ``bun src/entry.ts ...``
- ``clawdbot status`` (linked or compiled binary, no runtime header)
- programmatic callers passing only the user arguments

``build_parse_argv`` reshapes all of them into the canonical
``[runtime, program, *user_args]`` form the command parser expects. The
remaining helpers are pure queries over a canonical vector.
"""

import re
from collections.abc import Sequence
from enum import Enum

HEADER_LENGTH = 2
"""Leading slots (runtime + program name) that never hold user arguments."""

TERMINATOR = "--"

_SYNTHETIC_RUNTIME = "node"

_HELP_VERSION_FLAGS = ("--help", "-h", "--version", "-V")

_VERSIONED_NODE = re.compile(r"node-[0-9]+(?:\.[0-9]+){0,2}")

_DIGITS = re.compile(r"[0-9]+")

# Primary command -> whether legacy state must be migrated before it runs.
# Anything not listed does not migrate.
MIGRATION_COMMANDS: dict[str, bool] = {
    "agents": True,
    "message": True,
    "agent": False,
    "health": False,
    "memory": False,
    "sessions": False,
    "status": False,
}


class _Missing(Enum):
    MISSING = "MISSING"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING
"""Returned by flag lookups when the flag is absent (distinct from ``None``)."""


class InvocationKind(Enum):
    """How the raw process arguments were produced."""

    RECOGNIZED = "recognized"
    """Started through a known JS runtime; already canonical."""

    DIRECT = "direct"
    """Started as the program binary itself, with no runtime slot."""

    UNRECOGNIZED = "unrecognized"
    """Anything else; the whole vector is user data."""


def executable_name(path: str) -> str:
    """Reduce an executable path to a comparable name.

    Drops directory components (POSIX or Windows separators), lower-cases,
    and strips a trailing ``.exe``.
    """
    name = re.split(r"[/\\]", path)[-1].lower()
    if name.endswith(".exe"):
        name = name[: -len(".exe")]
    return name


def is_node_executable(name: str) -> bool:
    return name in ("node", "nodejs") or _VERSIONED_NODE.fullmatch(name) is not None


def is_bun_executable(name: str) -> bool:
    return name == "bun"


def classify_invocation(raw_args: Sequence[str], entry_name: str) -> InvocationKind:
    """
    Classify a raw process argument vector.

    Args:
        raw_args: Arguments exactly as the process received them
        entry_name: Name the CLI binary is installed under (e.g. ``clawdbot``)

    Returns:
        DIRECT if ``raw_args[0]`` is the program itself, RECOGNIZED if it is
        a node/bun runtime followed by at least a script slot, otherwise
        UNRECOGNIZED.
    """
    if not raw_args:
        return InvocationKind.UNRECOGNIZED

    executable = executable_name(raw_args[0])
    if entry_name and executable == entry_name.lower():
        return InvocationKind.DIRECT

    if len(raw_args) >= HEADER_LENGTH and (
        is_node_executable(executable) or is_bun_executable(executable)
    ):
        return InvocationKind.RECOGNIZED

    return InvocationKind.UNRECOGNIZED


def build_parse_argv(
    *,
    program_name: str,
    raw_args: Sequence[str] | None = None,
    fallback_argv: Sequence[str] | None = None,
    entry_name: str | None = None,
) -> list[str]:
    """
    Build the canonical argument vector handed to the command parser.

    Args:
        program_name: Name used for the synthetic program slot
        raw_args: Arguments as received by the process, if any
        fallback_argv: User arguments only, used when ``raw_args`` is empty
        entry_name: Name of the installed binary, used to recognize a direct
            run. Defaults to ``program_name``.

    Returns:
        A new list shaped ``[runtime, program, *user_args]``.

    Example:
        >>> build_parse_argv(program_name="clawdbot", raw_args=["clawdbot", "status"])
        ['node', 'clawdbot', 'status']
        >>> build_parse_argv(program_name="clawdbot", raw_args=["node-dev", "x"])
        ['node', 'clawdbot', 'node-dev', 'x']
    """
    header = [_SYNTHETIC_RUNTIME, program_name]

    if not raw_args:
        return [*header, *(fallback_argv or ())]

    kind = classify_invocation(raw_args, entry_name or program_name)
    if kind is InvocationKind.RECOGNIZED:
        return list(raw_args)
    if kind is InvocationKind.DIRECT:
        return [*header, *raw_args[1:]]
    return [*header, *raw_args]


def _visible_args(argv: Sequence[str]) -> Sequence[str]:
    """Arguments before the terminator; everything after it is inert."""
    for index, token in enumerate(argv):
        if token == TERMINATOR:
            return argv[:index]
    return argv


def get_command_path(argv: Sequence[str], header_length: int = HEADER_LENGTH) -> list[str]:
    """Collect the leading run of non-flag tokens after the header slots."""
    path: list[str] = []
    for token in argv[header_length:]:
        if token == TERMINATOR or token.startswith("-"):
            break
        path.append(token)
    return path


def get_primary_command(argv: Sequence[str]) -> str | None:
    """Return the first command segment, or None when no subcommand was given."""
    path = get_command_path(argv, HEADER_LENGTH)
    return path[0] if path else None


def has_flag(argv: Sequence[str], name: str) -> bool:
    return name in _visible_args(argv)


def get_flag_value(argv: Sequence[str], name: str) -> str | None | _Missing:
    """
    Look up the value of a ``--name value`` or ``--name=value`` flag.

    Returns:
        The value string; None if the flag is present but has no usable
        value (nothing follows, or the next token looks like a flag);
        MISSING if the flag does not appear before the terminator.
    """
    args = _visible_args(argv)
    inline_prefix = f"{name}="
    for index, token in enumerate(args):
        if token == name:
            following = args[index + 1] if index + 1 < len(args) else None
            if following is None or following.startswith("-"):
                return None
            return following
        if token.startswith(inline_prefix):
            return token[len(inline_prefix) :]
    return MISSING


def get_verbose_flag(argv: Sequence[str], *, include_debug: bool = False) -> bool:
    if has_flag(argv, "--verbose"):
        return True
    return include_debug and has_flag(argv, "--debug")


def get_positive_int_flag_value(argv: Sequence[str], name: str) -> int | None | _Missing:
    """
    Parse a flag value as a positive integer.

    Returns:
        The integer; None if the flag has no value; MISSING if the flag is
        absent or its value is not a positive base-10 integer.
    """
    value = get_flag_value(argv, name)
    if value is None or value is MISSING:
        return value
    if not _DIGITS.fullmatch(value):
        return MISSING
    parsed = int(value)
    return parsed if parsed > 0 else MISSING


def has_help_or_version(argv: Sequence[str]) -> bool:
    return any(has_flag(argv, flag) for flag in _HELP_VERSION_FLAGS)


def should_migrate_state_from_path(command_path: Sequence[str]) -> bool:
    """Decide from a command path whether legacy state must be migrated first."""
    if not command_path:
        return False
    return MIGRATION_COMMANDS.get(command_path[0], False)


def should_migrate_state(argv: Sequence[str]) -> bool:
    return should_migrate_state_from_path(get_command_path(argv, HEADER_LENGTH))
