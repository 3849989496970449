"""CLI helpers for CASK.

URL sanitization for safe display, OSC-8 terminal hyperlinks, the
``-L NAME=LEVEL`` parser, and message emitters that write to stderr.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = ["error", "hyperlink", "sanitize_url", "success", "warn"]
