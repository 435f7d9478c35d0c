"""Recursive include resolution with cycle and missing-file guards."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Set, Union

from ..exceptions import Diagnostic
from .lexer import LineKind, tokenize
from .loops import LoopExpander


logger = logging.getLogger(__name__)

STUB_TEMPLATE = '<div style="border:1px red dotted">INCLUDE ERROR: {path} {reason}</div>'


class IncludePolicy(str, Enum):
    """How spliced content is placed at an include line."""
    RAW = "raw"
    REINDENT = "reindent"


class IncludeResolver:
    """
    Splices `include <path>` lines with the referenced documents.

    Include paths are always resolved against the project root, never
    against the including file. Every document has its loops expanded
    before its own include lines are resolved, so a loop index may select
    the included file.

    Non-fatal outcomes:
    - missing file: an inline error stub is emitted in place of the content
    - unreadable file: an inline error stub, as for a missing file
    - cycle: the repeated reference expands to empty text

    Bytes that are not valid UTF-8 are decoded with replacement characters.
    """

    def __init__(
        self,
        root: Path,
        policy: IncludePolicy = IncludePolicy.RAW,
        loop_expander: Optional[LoopExpander] = None,
    ):
        """
        Initialize resolver.

        Args:
            root: Project root that include paths are relative to
            policy: Placement policy for spliced content
            loop_expander: Expander applied to each document before splicing
        """
        self.root = Path(root).resolve()
        self.policy = IncludePolicy(policy)
        self.loop_expander = loop_expander or LoopExpander()
        self.diagnostics: List[Diagnostic] = []

    def resolve(self, path: Union[str, Path], visited: Optional[Set[Path]] = None) -> str:
        """
        Resolve a document and everything it includes.

        Args:
            path: Document path, absolute or relative to the root
            visited: Paths on the current include chain (fresh set if None)

        Returns:
            Fully spliced document text
        """
        if visited is None:
            visited = set()

        abs_path = self._absolute(path)

        if not abs_path.is_file():
            return "\n" + self._missing(abs_path) + "\n"

        if abs_path in visited:
            rel = self._relative(abs_path)
            logger.debug(f"Include cycle at {rel}, expanding to empty text")
            self.diagnostics.append(Diagnostic(
                kind="include_cycle",
                message=f"Include cycle detected at {rel}",
                subject=rel,
            ))
            return ""

        try:
            text = abs_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            return self._unreadable(abs_path, e)

        visited.add(abs_path)
        try:
            text = self.loop_expander.expand(text)
            return self._splice(text, visited)
        finally:
            visited.discard(abs_path)

    def _splice(self, text: str, visited: Set[Path]) -> str:
        lines: List[str] = []
        for token in tokenize(text):
            if token.kind != LineKind.INCLUDE:
                lines.append(token.text)
                continue

            target = self._absolute(token.argument)
            if not target.is_file():
                lines.append(token.indent + self._missing(target))
                continue

            included = self.resolve(target, visited)
            lines.append(self._place(included, token.indent))

        return "\n".join(lines)

    def _place(self, included: str, indent: str) -> str:
        # The directive line is replaced by exactly the included lines
        if included.endswith("\n"):
            included = included[:-1]
            if included.endswith("\r"):
                included = included[:-1]

        if self.policy == IncludePolicy.REINDENT and indent:
            return "\n".join(
                indent + line if line.strip() else line
                for line in included.split("\n")
            )
        return included

    def _missing(self, abs_path: Path) -> str:
        rel = self._relative(abs_path)
        logger.error(f"INCLUDE ERROR: {rel} not found")
        self.diagnostics.append(Diagnostic(
            kind="missing_include",
            message=f"{rel} not found",
            subject=rel,
        ))
        return STUB_TEMPLATE.format(path=rel, reason="not found")

    def _unreadable(self, abs_path: Path, error: OSError) -> str:
        rel = self._relative(abs_path)
        logger.error(f"INCLUDE ERROR: {rel} could not be read: {error}")
        self.diagnostics.append(Diagnostic(
            kind="unreadable_include",
            message=f"{rel} could not be read: {error}",
            subject=rel,
        ))
        return STUB_TEMPLATE.format(path=rel, reason="could not be read")

    def _absolute(self, path: Union[str, Path]) -> Path:
        return (self.root / path).resolve()

    def _relative(self, abs_path: Path) -> str:
        return Path(os.path.relpath(abs_path, self.root)).as_posix()
