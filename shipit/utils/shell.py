"""
Shell argument quoting for command strings run through /bin/sh.
"""

import re

# Characters that keep a special meaning inside double quotes
_DOUBLE_QUOTE_SPECIALS = ("\\", '"', "$", "`")


def quote_arg(value: str) -> str:
    """
    Wrap value in double quotes so the shell reads it as one argument.

    Backslash, double quote, dollar and backtick are escaped, so a value can
    never terminate the quoting or trigger expansion.

    >>> quote_arg('a "b".txt')
    '"a \\\\"b\\\\".txt"'
    """
    escaped = value
    for ch in _DOUBLE_QUOTE_SPECIALS:
        escaped = escaped.replace(ch, "\\" + ch)
    return f'"{escaped}"'


def quote_args(values: list[str]) -> str:
    """Quote each value and join them with single spaces."""
    return " ".join(quote_arg(v) for v in values)


_PLAIN_ARG = re.compile(r"[\w./@+:-]+")


def quote_arg_if_needed(value: str) -> str:
    """Leave plain words (branch names, remotes) bare; quote anything else."""
    if _PLAIN_ARG.fullmatch(value):
        return value
    return quote_arg(value)
