"""Builds the directive tree from line tokens."""

from typing import List, Optional

from .lexer import LineKind, LineToken, tokenize, tokenize_lines
from .nodes import IncludeNode, LoopNode, TemplateNode, TextNode


def parse_tokens(tokens: List[LineToken]) -> List[TemplateNode]:
    """
    Parse line tokens into text, include and loop nodes.

    A `for` line is paired with the next `endfor` at the same indentation,
    skipping over nested `for`/`endfor` pairs at that indentation. A `for`
    without a partner, and a stray `endfor`, stay literal text.
    """
    nodes: List[TemplateNode] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]

        if token.kind == LineKind.FOR:
            end = _find_endfor(tokens, i)
            if end is None:
                nodes.append(TextNode(token.text))
                i += 1
                continue
            nodes.append(LoopNode(header=token, body=tokens[i + 1:end], footer=tokens[end]))
            i = end + 1
        elif token.kind == LineKind.INCLUDE:
            nodes.append(IncludeNode(token))
            i += 1
        else:
            nodes.append(TextNode(token.text))
            i += 1

    return nodes


def _find_endfor(tokens: List[LineToken], start: int) -> Optional[int]:
    indent = tokens[start].indent
    depth = 0
    for j in range(start + 1, len(tokens)):
        token = tokens[j]
        if token.indent != indent:
            continue
        if token.kind == LineKind.FOR:
            depth += 1
        elif token.kind == LineKind.ENDFOR:
            if depth == 0:
                return j
            depth -= 1
    return None


def parse(text: str) -> List[TemplateNode]:
    """Tokenize and parse a document."""
    return parse_tokens(tokenize(text))


def parse_lines(lines: List[str]) -> List[TemplateNode]:
    """Tokenize and parse already-split lines."""
    return parse_tokens(tokenize_lines(lines))
