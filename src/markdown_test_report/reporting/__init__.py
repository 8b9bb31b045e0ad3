"""
Reporting modules for markdown-test-report.
"""

from .formatting import make_anchor, readable_duration
from .markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer", "make_anchor", "readable_duration"]
