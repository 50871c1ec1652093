"""
Secret redaction for anything that reaches logs or observers.

Command strings carry the deploy token as an argument, so they are passed
through this filter before being logged.
"""

import re

REDACTED = "[REDACTED]"

# (id, pattern, replacement)
BUILTIN_PATTERNS: list[tuple[str, re.Pattern, str]] = [
    (
        "token_flag",
        re.compile(r"(--token[=\s]+)(\"(?:[^\"\\]|\\.)*\"|'[^']*'|\S+)"),
        rf"\1{REDACTED}",
    ),
    (
        "vercel_env",
        re.compile(r"(VERCEL_TOKEN=)(\S+)"),
        rf"\1{REDACTED}",
    ),
    (
        "url_credentials",
        re.compile(r"(https?://)([^:/@\s]+):([^@\s]+)@"),
        rf"\1\2:{REDACTED}@",
    ),
]


def redact(text: str) -> str:
    """
    Replace secret-looking patterns in text.

    Args:
        text: Text to filter

    Returns:
        Filtered text
    """
    result = text
    for _pattern_id, pattern, replacement in BUILTIN_PATTERNS:
        result = pattern.sub(replacement, result)

    return result
