"""Bounded loop expansion (`for i < N` ... `endfor`)."""

import logging
from typing import List

from .nodes import LoopNode, TemplateNode
from .parser import parse, parse_lines


logger = logging.getLogger(__name__)


class LoopExpander:
    """
    Unrolls loop blocks.

    Each repetition replaces `${<var>}` in the body with the 0-based index,
    then parses the substituted body again so nested loops (which may use
    the outer index) are expanded too. Include lines are left untouched.
    """

    def expand(self, text: str) -> str:
        """Expand every loop block in text."""
        return "\n".join(self._render(parse(text)))

    def _render(self, nodes: List[TemplateNode]) -> List[str]:
        lines: List[str] = []
        for node in nodes:
            if isinstance(node, LoopNode):
                lines.extend(self._unroll(node))
            else:
                lines.append(node.source)
        return lines

    def _unroll(self, node: LoopNode) -> List[str]:
        bound = self.parse_bound(node.bound_text, node.variable)
        placeholder = "${" + node.variable + "}"

        lines: List[str] = []
        for index in range(bound):
            body = [token.text.replace(placeholder, str(index)) for token in node.body]
            lines.extend(self._render(parse_lines(body)))
        return lines

    @staticmethod
    def parse_bound(bound_text: str, variable: str = "") -> int:
        """Parse a loop bound; malformed or negative bounds count as zero."""
        try:
            bound = int(bound_text)
        except ValueError:
            logger.warning(
                f"Malformed loop bound '{bound_text}' for loop variable '{variable}', treating as 0"
            )
            return 0
        return max(bound, 0)
