"""
Base class for report addons.
"""

from abc import ABC, abstractmethod
from typing import TextIO


class Addon(ABC):
    """A metadata fragment rendered once per report, below the summary table.

    An addon whose ``required`` flag is False may fail without aborting the
    report; its fragment is then left out entirely.
    """

    name: str = "addon"
    required: bool = False

    @abstractmethod
    def render(self, write: TextIO) -> None:
        """
        Render a self-contained Markdown fragment.

        Args:
            write: Text stream receiving the fragment

        Raises:
            AddonError: If the fragment cannot be produced
        """
        pass
