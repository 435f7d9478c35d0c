"""
Stylesheet compilation through an external compiler executable.

The compiler is a black box: entry file in, CSS text on stdout. A missing
executable or a failing entry is logged and skipped so the rest of the
build still runs.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ["sass", "--no-source-map", "--style={style}", "{entry}"]


class StylesheetCompiler:
    """Compiles the main stylesheet and every template-level index.scss."""

    def __init__(
        self,
        root: Path,
        src_dir: Path,
        templates_dir: Path,
        command: Optional[List[str]] = None,
        timeout_sec: int = 60
    ):
        """
        Initialize compiler.

        Args:
            root: Project root (working directory for the compiler)
            src_dir: Source directory holding scss/index.scss
            templates_dir: Template tree searched for index.scss entries
            command: Command template with {entry} and {style} placeholders
            timeout_sec: Per-entry compile timeout
        """
        self.root = Path(root)
        self.src_dir = Path(src_dir)
        self.templates_dir = Path(templates_dir)
        self.command = list(command or DEFAULT_COMMAND)
        self.timeout_sec = timeout_sec

    def find_entries(self) -> List[Path]:
        """Main entry first, then template entries in sorted order."""
        entries = []

        main_entry = self.src_dir / "scss" / "index.scss"
        if main_entry.is_file():
            entries.append(main_entry)

        if self.templates_dir.is_dir():
            entries.extend(sorted(p for p in self.templates_dir.rglob("index.scss") if p.is_file()))

        return entries

    def compile(self, style: str = "expanded") -> str:
        """
        Compile every entry and join the results.

        Args:
            style: Output style passed to the compiler (expanded|compressed)

        Returns:
            CSS chunks joined by a blank line
        """
        chunks = []
        for entry in self.find_entries():
            css = self.compile_entry(entry, style)
            if css is not None:
                chunks.append(css)
        return "\n\n".join(chunks)

    def compile_entry(self, entry: Path, style: str) -> Optional[str]:
        """Compile one entry; None if the compiler failed."""
        command = [token.format(entry=str(entry), style=style) for token in self.command]
        logger.debug(f"Executing command: {command}")

        try:
            result = subprocess.run(
                command,
                cwd=str(self.root),
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
            )
        except FileNotFoundError:
            logger.error(f"Stylesheet compiler not found: {command[0]}")
            return None
        except subprocess.TimeoutExpired:
            logger.error(f"Stylesheet compile timed out after {self.timeout_sec} seconds: {entry}")
            return None

        if result.returncode != 0:
            logger.error(f"Stylesheet compile failed for {entry}: {result.stderr.strip()}")
            return None

        return result.stdout.rstrip("\n")
