"""
Metadata addons rendered below the report summary.
"""

from .base import Addon
from .git import GitInfo

__all__ = ["Addon", "GitInfo"]
