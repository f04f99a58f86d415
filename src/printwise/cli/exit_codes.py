"""Exit codes for agent-friendly error handling.

These codes let scripts and agents tell failure categories apart
without parsing error messages.
"""

from __future__ import annotations

# Success
SUCCESS = 0

# Bad command input (e.g. empty project description)
INVALID_INPUT = 2

# Config file could not be written or read
CONFIG_ERROR = 3

# Anything else
OTHER_ERROR = 4


ERROR_CODE_MAP: dict[str, int] = {
    "INVALID_INPUT": INVALID_INPUT,
    "CONFIG_EXISTS": CONFIG_ERROR,
    "CONFIG_ERROR": CONFIG_ERROR,
    "INTERNAL_ERROR": OTHER_ERROR,
}


def exit_code_for(error_code: str) -> int:
    """Map an error code string to a CLI exit code."""
    return ERROR_CODE_MAP.get(error_code, OTHER_ERROR)
