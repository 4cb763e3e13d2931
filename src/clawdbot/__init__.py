"""
Clawdbot - command-line front end.

Normalizes how the CLI was invoked and decides whether stored state must
be migrated before a command runs.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
