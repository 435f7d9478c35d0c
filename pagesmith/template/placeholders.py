"""Scanner for `${name}` / `${name|modifier}` placeholders."""

import re
from typing import List, Union

from .nodes import TextRun, VariableRef


PLACEHOLDER_PATTERN = re.compile(r'\$\{([A-Za-z0-9_-]+)(?:\|([A-Za-z0-9_-]+))?\}')


def scan_placeholders(text: str) -> List[Union[TextRun, VariableRef]]:
    """
    Split text into literal runs and variable references.

    Args:
        text: Text possibly containing ${name} / ${name|modifier}

    Returns:
        Segments in document order
    """
    segments: List[Union[TextRun, VariableRef]] = []
    pos = 0
    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.start() > pos:
            segments.append(TextRun(text[pos:match.start()]))
        segments.append(VariableRef(
            name=match.group(1),
            modifier=match.group(2) or "",
        ))
        pos = match.end()

    if pos < len(text):
        segments.append(TextRun(text[pos:]))

    return segments
