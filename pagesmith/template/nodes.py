"""Directive tree nodes for template documents.

A document is parsed into a flat list of nodes: plain text lines, include
directives and loop blocks. Loop blocks keep their body as raw line tokens;
the loop variable is substituted textually before the body is parsed
again.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from .lexer import LineToken


@dataclass(frozen=True)
class TemplateNode(ABC):
    """Base class for directive tree nodes."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Original text of the node."""


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Literal line emitted as-is."""
    text: str

    @property
    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class IncludeNode(TemplateNode):
    """`include <path>` line."""
    token: LineToken

    @property
    def indent(self) -> str:
        return self.token.indent

    @property
    def path(self) -> str:
        return self.token.argument

    @property
    def source(self) -> str:
        return self.token.text


@dataclass(frozen=True)
class LoopNode(TemplateNode):
    """`for <var> < <bound>` ... `endfor` block."""
    header: LineToken
    body: List[LineToken] = field(default_factory=list)
    footer: Optional[LineToken] = None

    @property
    def indent(self) -> str:
        return self.header.indent

    @property
    def variable(self) -> str:
        return self.header.name

    @property
    def bound_text(self) -> str:
        return self.header.argument

    @property
    def source(self) -> str:
        lines = [self.header.text] + [t.text for t in self.body]
        if self.footer is not None:
            lines.append(self.footer.text)
        return "\n".join(lines)


@dataclass(frozen=True)
class TextRun:
    """Literal span between placeholders."""
    text: str


@dataclass(frozen=True)
class VariableRef:
    """`${name}` or `${name|modifier}` placeholder."""
    name: str
    modifier: str = ""
