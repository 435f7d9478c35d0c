"""
Line lexer for template documents.

Templates are line oriented: a directive always occupies a whole line.
The lexer classifies each line; it never looks across line boundaries.
Placeholders (`${name|modifier}`) are scanned by the placeholders module
since they may appear anywhere inside a line.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class LineKind(str, Enum):
    """Kind of a template line."""
    TEXT = "text"
    INCLUDE = "include"
    FOR = "for"
    ENDFOR = "endfor"


@dataclass(frozen=True)
class LineToken:
    """
    One classified template line.

    Attributes:
        kind: Line classification
        text: Raw line without its trailing newline
        indent: Leading whitespace of the line
        argument: Include path, or loop bound text
        name: Loop variable (FOR lines only)
    """
    kind: LineKind
    text: str
    indent: str = ""
    argument: str = ""
    name: str = ""


INCLUDE_PATTERN = re.compile(r'^([ \t]*)include\s+(.+?)\s*$')
FOR_PATTERN = re.compile(r'^([ \t]*)for\s+([A-Za-z_]\w*)\s*<\s*(.*?)\s*$')
ENDFOR_PATTERN = re.compile(r'^([ \t]*)endfor\s*$')


def classify(line: str) -> LineToken:
    """Classify a single line (without newline)."""
    match = FOR_PATTERN.match(line)
    if match:
        return LineToken(
            kind=LineKind.FOR,
            text=line,
            indent=match.group(1),
            argument=match.group(3),
            name=match.group(2),
        )

    match = ENDFOR_PATTERN.match(line)
    if match:
        return LineToken(kind=LineKind.ENDFOR, text=line, indent=match.group(1))

    match = INCLUDE_PATTERN.match(line)
    if match:
        return LineToken(
            kind=LineKind.INCLUDE,
            text=line,
            indent=match.group(1),
            argument=match.group(2),
        )

    return LineToken(kind=LineKind.TEXT, text=line)


def tokenize_lines(lines: Iterable[str]) -> List[LineToken]:
    """Classify already-split lines."""
    return [classify(line) for line in lines]


def tokenize(text: str) -> List[LineToken]:
    """
    Split text on newlines and classify every line.

    Joining the token texts with "\\n" reproduces the input exactly.
    """
    return tokenize_lines(text.split("\n"))
