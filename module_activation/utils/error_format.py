"""Message helpers for showing activation failures in the terminal."""

from __future__ import annotations

from rich.markup import escape as _escape_markup


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Turn an exception into a message that is never empty.

    Args:
        e: The exception to describe
        include_type: Prefix the exception class name when the message
            does not already mention it

    Returns:
        Display message

    Examples:
        >>> format_error_message(ValueError("bad module id"))
        'ValueError: bad module id'

        >>> format_error_message(KeyError())
        'KeyError: (no additional details)'
    """
    message = str(e)
    type_name = type(e).__name__

    if not message:
        return f"{type_name}: (no additional details)"
    if include_type and type_name not in message:
        return f"{type_name}: {message}"
    return message


def escape_markup(value: object) -> str:
    """Escape module ids and messages before embedding them in Rich markup.

    Ids such as ``[/acme.web]`` would otherwise be parsed as closing tags.
    """
    return _escape_markup(str(value))
