"""Output modes shared by substitution and asset injection."""

from enum import Enum


class OutputMode(str, Enum):
    """Which document a pass produces."""
    PREVIEW = "preview"
    CARRIER = "carrier"
