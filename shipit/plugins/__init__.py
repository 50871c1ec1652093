"""
shipit plugin architecture.

This package contains provider implementations for external tools:
- vcs: Version control providers (Git)
- deploy: Hosting deploy providers (Vercel)

New providers can be added without modifying existing code by
registering them with the service container.
"""

from . import deploy, vcs

__all__ = ["deploy", "vcs"]
