"""
Convert JSON test events into a Markdown test report.
"""

from .events import decode_event, read_events
from .processor import ReportProcessor

__version__ = "0.1.0"

__all__ = ["ReportProcessor", "decode_event", "read_events", "__version__"]
