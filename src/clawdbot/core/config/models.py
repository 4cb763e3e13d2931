"""
Configuration data models for clawdbot.

These models define the structure of .clawdbot.json and
~/.config/clawdbot/config.json files, validated with Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field


class MigrationConfig(BaseModel):
    """
    Legacy state migration run before commands that need it.

    Which commands need it is fixed in ``clawdbot.cli.argv``; this only
    switches the step on or off.
    """
    enabled: bool = Field(
        default=True,
        description="Run the state migration before commands that require it"
    )


class CliConfig(BaseModel):
    """
    Top-level CLI configuration.

    Example:
        >>> config = CliConfig()
        >>> config.program_name
        'clawdbot'
    """
    model_config = ConfigDict(extra="ignore")

    program_name: str = Field(
        default="clawdbot",
        min_length=1,
        pattern=r"^\S+$",
        description="Name used for the program slot of the parse argv"
    )
    verbose_includes_debug: bool = Field(
        default=False,
        description="Treat --debug as a request for verbose output"
    )
    migration: MigrationConfig = Field(default_factory=MigrationConfig)
