"""
Output filters.
"""

from .redact import REDACTED, redact

__all__ = ["REDACTED", "redact"]
