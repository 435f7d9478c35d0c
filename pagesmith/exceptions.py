"""pagesmith exceptions and diagnostic records."""

from typing import List
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


@dataclass
class Diagnostic:
    """Non-fatal defect found while expanding a template.

    Diagnostics never abort a build. They are logged where they occur and
    collected so callers (and tests) can inspect what went wrong.
    """
    kind: str
    message: str
    subject: str = ""


class ConfigValidationError(Exception):
    """Raised when the project config or content dataset is invalid.

    The loader accumulates every problem it finds before raising, so the
    CLI can report all of them at once and map to exit code 2.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
