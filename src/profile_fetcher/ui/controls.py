"""
UI Controls Module

Terminal stand-ins for the page elements the handlers drive: a trigger
control that can be disabled and an output region holding rendered lines.
"""

import logging
from dataclasses import dataclass, field
from typing import List


logger = logging.getLogger(__name__)


@dataclass
class TriggerControl:
    """A clickable control, disabled while its action runs."""
    name: str = "fetch"
    disabled: bool = False

    def disable(self) -> None:
        self.disabled = True
        logger.debug(f"Control '{self.name}' disabled")

    def enable(self) -> None:
        self.disabled = False
        logger.debug(f"Control '{self.name}' enabled")


@dataclass
class OutputRegion:
    """A region whose content is replaced or appended to."""
    lines: List[str] = field(default_factory=list)

    def replace(self, text: str) -> None:
        """Replace the whole content."""
        self.lines = text.splitlines()

    def append(self, text: str) -> None:
        self.lines.extend(text.splitlines())

    def clear(self) -> None:
        self.lines = []

    @property
    def content(self) -> str:
        return "\n".join(self.lines)
