"""Metadata tags describing carrier-document variables."""

import re
from typing import Any, Iterable, Mapping, Optional

from ..variables.registry import VariableDescriptor, VariableType
from ..variables.substitution import escape_attribute, stringify


TYPE_CLASSES = {
    VariableType.STRING: "mktoString",
    VariableType.NUMBER: "mktoNumber",
    VariableType.BOOLEAN: "mktoBoolean",
    VariableType.COLOR: "mktoColor",
    VariableType.IMAGE: "mktoImg",
}

BOOLEAN_ATTRIBUTES = ['false_value', 'true_value', 'false_value_name', 'true_value_name']

HEAD_PATTERN = re.compile(r'<head(?:\s[^>]*)?>', re.IGNORECASE)
DOCTYPE_PATTERN = re.compile(r'<!doctype html[^>]*>', re.IGNORECASE)


def label_from_identifier(identifier: str) -> str:
    """
    Derive a human-readable label from a variable identifier.

    hero_heading -> Hero Heading, heroHeading -> Hero Heading
    """
    spaced = re.sub(r'[-_]+', ' ', identifier)
    spaced = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', spaced)
    spaced = re.sub(r'\s+', ' ', spaced).strip()
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), spaced)


def normalize_default(raw: str) -> str:
    """Escape for attribute context and collapse whitespace."""
    value = escape_attribute(raw)
    value = re.sub(r'\r\n|\r|\n', ' ', value)
    value = re.sub(r'\s\s+', ' ', value)
    return value.strip()


class MetadataEmitter:
    """Turns variable descriptors into a block of self-describing meta tags."""

    def emit(self, descriptors: Iterable[VariableDescriptor], content: Mapping[str, Any]) -> str:
        """
        Build the metadata block.

        Args:
            descriptors: Descriptors in first-registration order
            content: Content dataset supplying defaults and boolean labels

        Returns:
            One <meta /> tag per line, or '' if there are no descriptors
        """
        return "\n".join(self.tag(d, content.get(d.name)) for d in descriptors)

    def tag(self, descriptor: VariableDescriptor, config: Any) -> str:
        """Build the meta tag for one descriptor."""
        css_class = TYPE_CLASSES.get(descriptor.type, "mktoString")

        attrs = [
            f'class="{css_class}"',
            f'id="{descriptor.name}"',
            f'mktoName="{escape_attribute(label_from_identifier(descriptor.name))}"',
        ]

        if descriptor.allow_html and css_class == "mktoString":
            attrs.append('allowHTML="true"')

        cfg: Optional[Mapping[str, Any]] = config if isinstance(config, dict) else None

        if css_class == "mktoBoolean" and cfg:
            for key in BOOLEAN_ATTRIBUTES:
                if cfg.get(key) is not None:
                    attrs.append(f'{key}="{escape_attribute(stringify(cfg[key]))}"')

        default = normalize_default(self._raw_default(config))
        if default:
            attrs.append(f'default="{default}"')

        return f"<meta {' '.join(attrs)} />"

    @staticmethod
    def _raw_default(config: Any) -> str:
        if isinstance(config, dict):
            if 'default' in config:
                return stringify(config['default'])
            if 'value' in config:
                return stringify(config['value'])
            return ""
        return stringify(config)


def insert_metadata(html: str, block: str) -> str:
    """
    Insert the metadata block into a document.

    Placement, first match wins: right after the opening <head> tag, then
    right after a <!doctype html> declaration, else at the very top.
    """
    if not block:
        return html

    for pattern in (HEAD_PATTERN, DOCTYPE_PATTERN):
        match = pattern.search(html)
        if match:
            idx = match.end()
            return html[:idx] + "\n" + block + "\n" + html[idx:]

    return block + "\n" + html
