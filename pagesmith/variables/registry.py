"""
Variable registry.
Tracks the type and HTML allowance of every placeholder name seen in a pass.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from ..exceptions import Diagnostic


logger = logging.getLogger(__name__)


class VariableType(str, Enum):
    """Declared type of a template variable."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    COLOR = "color"
    IMAGE = "image"


# modifier -> (type, allow_html)
MODIFIERS: Dict[str, Tuple[VariableType, bool]] = {
    "": (VariableType.STRING, False),
    "html": (VariableType.STRING, True),
    "attr": (VariableType.STRING, False),
    "number": (VariableType.NUMBER, False),
    "boolean": (VariableType.BOOLEAN, False),
    "color": (VariableType.COLOR, False),
    "image": (VariableType.IMAGE, False),
}


@dataclass
class VariableDescriptor:
    """Merged type/flag record for one variable name."""
    name: str
    type: VariableType = VariableType.STRING
    allow_html: bool = False


class VariableRegistry:
    """
    Accumulates descriptors in first-registration order.

    Merge rules:
    - a typed occurrence upgrades a descriptor that is still plain string
    - a different non-string type on a typed descriptor is rejected with a
      type_conflict diagnostic; the first non-string type is kept
    - allow_html is sticky once any occurrence requests it
    """

    def __init__(self):
        self._descriptors: Dict[str, VariableDescriptor] = {}
        self.diagnostics: List[Diagnostic] = []

    def register(self, name: str, modifier: Optional[str] = None) -> str:
        """
        Register one occurrence of a variable.

        Args:
            name: Variable name
            modifier: Raw modifier text (without the leading '|'), if any

        Returns:
            Normalized modifier; unknown modifiers normalize to ''
        """
        modifier = (modifier or "").lstrip("|").lower()

        if modifier not in MODIFIERS:
            logger.warning(
                f"Unknown modifier \"{modifier}\" for variable \"{name}\", treating as string"
            )
            self.diagnostics.append(Diagnostic(
                kind="unknown_modifier",
                message=f"Unknown modifier '{modifier}' for variable '{name}'",
                subject=name,
            ))
            modifier = ""

        var_type, allow_html = MODIFIERS[modifier]

        existing = self._descriptors.get(name)
        if existing is None:
            self._descriptors[name] = VariableDescriptor(name, var_type, allow_html)
            return modifier

        if var_type != VariableType.STRING and existing.type != var_type:
            if existing.type == VariableType.STRING:
                existing.type = var_type
            else:
                logger.warning(
                    f"Conflicting types for variable \"{name}\" "
                    f"({existing.type.value} vs {var_type.value}), keeping \"{existing.type.value}\""
                )
                self.diagnostics.append(Diagnostic(
                    kind="type_conflict",
                    message=(
                        f"Variable '{name}' declared as {var_type.value}, "
                        f"already {existing.type.value}"
                    ),
                    subject=name,
                ))

        if allow_html:
            existing.allow_html = True

        return modifier

    def get(self, name: str) -> Optional[VariableDescriptor]:
        return self._descriptors.get(name)

    @property
    def descriptors(self) -> List[VariableDescriptor]:
        """Descriptors in first-registration order."""
        return list(self._descriptors.values())

    def names(self) -> List[str]:
        return list(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[VariableDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
