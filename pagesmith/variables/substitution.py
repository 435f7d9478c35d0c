"""
Variable substitution implementation.
Replaces ${name} / ${name|modifier} placeholders in preview or carrier mode.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping

from ..exceptions import Diagnostic
from ..modes import OutputMode
from ..template.nodes import TextRun
from ..template.placeholders import scan_placeholders
from .registry import VariableDescriptor, VariableRegistry


def escape_attribute(value: str) -> str:
    """Escape text for a double-quoted HTML attribute (& " < >)."""
    if not value:
        return ""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def stringify(value: Any) -> str:
    """Render a content value as preview text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def resolve_boolean(config: Mapping[str, Any]) -> str:
    """
    Resolve a boolean config mapping to its effective preview string.

    headerCtaClass:
      default: false
      false_value: "arrow"
      true_value: "box"
    """
    if config.get('default'):
        value = config.get('true_value')
        return stringify(value) if value is not None else "true"
    value = config.get('false_value')
    return stringify(value) if value is not None else "false"


@dataclass
class SubstitutionResult:
    """Rewritten text plus the registry accumulated during the pass."""
    text: str
    registry: VariableRegistry

    @property
    def descriptors(self) -> List[VariableDescriptor]:
        return self.registry.descriptors

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.registry.diagnostics


class VariableSubstitutor:
    """
    Handles variable substitution in expanded documents.

    Modes:
    - preview: ${name} becomes the content value, escaped per modifier;
      names missing from the content render as [name]
    - carrier: every placeholder becomes ${name}; modifiers only inform
      the registry (and so the metadata tags)

    Each call threads a fresh VariableRegistry through the pass and returns
    it, so repeated calls never share state.
    """

    def substitute(
        self,
        text: str,
        content: Mapping[str, Any],
        mode: OutputMode = OutputMode.PREVIEW
    ) -> SubstitutionResult:
        """
        Substitute every placeholder in text.

        Args:
            text: Fully expanded document
            content: Content dataset (name -> scalar or config mapping)
            mode: Preview or carrier output

        Returns:
            SubstitutionResult with rewritten text and descriptor registry
        """
        mode = OutputMode(mode)
        registry = VariableRegistry()
        parts: List[str] = []

        for segment in scan_placeholders(text):
            if isinstance(segment, TextRun):
                parts.append(segment.text)
                continue

            modifier = registry.register(segment.name, segment.modifier)

            if mode == OutputMode.CARRIER:
                parts.append("${" + segment.name + "}")
            else:
                parts.append(self._preview_value(segment.name, modifier, content))

        return SubstitutionResult(text="".join(parts), registry=registry)

    def _preview_value(self, name: str, modifier: str, content: Mapping[str, Any]) -> str:
        if name not in content:
            return f"[{name}]"

        value = content[name]

        if isinstance(value, dict):
            if modifier == "boolean":
                raw = resolve_boolean(value)
            elif 'default' in value:
                raw = stringify(value['default'])
            elif 'value' in value:
                raw = stringify(value['value'])
            else:
                raw = ""
        else:
            raw = stringify(value)

        if modifier == "attr":
            return escape_attribute(raw)

        return raw
