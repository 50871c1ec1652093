"""
Deploy panel message protocol and session.
"""

from .messages import parse_message
from .session import DeployPanel, json_lines_writer, serve_json_lines

__all__ = ["DeployPanel", "json_lines_writer", "parse_message", "serve_json_lines"]
