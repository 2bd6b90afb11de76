"""Safe error message formatting utilities.

Ensures exceptions always have useful display messages, even when
their str() representation is empty (e.g., KeyboardInterrupt, CancelledError).
"""

from __future__ import annotations

import asyncio

from pydantic import ValidationError
from rich.markup import escape as _escape_markup

# Friendly messages for exception types known to have empty str()
FRIENDLY_MESSAGES: dict[type, str] = {
    asyncio.CancelledError: "Operation was cancelled.",
    KeyboardInterrupt: "Operation interrupted by user.",
    PermissionError: "Permission denied while reading the dependency tree.",
    RecursionError: "Directory structure is nested too deeply (symlink loop?).",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty, user-friendly error message

    Examples:
        >>> format_error_message(KeyboardInterrupt())
        'KeyboardInterrupt: Operation interrupted by user.'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    if isinstance(e, ValidationError):
        return format_validation_error(e)

    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}"

    return f"{error_type}: (no additional details)"


def format_validation_error(e: ValidationError) -> str:
    """Format option validation errors as one line per invalid field.

    Example:
        Invalid options:
          - target: Field required
    """
    lines = ["Invalid options:"]
    for error in e.errors():
        location = ".".join(str(part) for part in error["loc"]) or "(root)"
        lines.append(f"  - {location}: {error['msg']}")
    return "\n".join(lines)


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings."""
    return _escape_markup(str(value))
