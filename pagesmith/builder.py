"""Build pipeline: templates + content -> preview, carrier and stylesheet outputs.

Every build recomputes its output from scratch with a fresh include visit
set and a fresh variable registry; nothing survives between builds.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pagesmith.assets import AssetBundle, StylesheetCompiler, concat_bundle, inject_assets
from pagesmith.exceptions import Diagnostic
from pagesmith.loader import BuildConfig, ContentLoader
from pagesmith.metadata import MetadataEmitter, insert_metadata
from pagesmith.modes import OutputMode
from pagesmith.template import IncludeResolver, LoopExpander
from pagesmith.variables import VariableSubstitutor
from pagesmith.watch import ChangeEvent


logger = logging.getLogger(__name__)

STYLESHEET_NAME = "styles.css"
PREVIEW_NAME = "index.html"
CARRIER_NAME = "index.marketo.html"


@dataclass
class BuildReport:
    """Files written and non-fatal diagnostics collected by a build."""
    written: List[Path] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def merge(self, other: "BuildReport") -> "BuildReport":
        self.written.extend(other.written)
        self.diagnostics.extend(other.diagnostics)
        return self


def write_output(path: Path, text: str) -> None:
    """Overwrite a file as a whole (temp file + replace)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_file = path.with_suffix(path.suffix + '.tmp')
    temp_file.write_text(text, encoding='utf-8')
    temp_file.replace(path)


class Builder:
    """Runs the build pipeline for one project."""

    def __init__(
        self,
        config: BuildConfig,
        compiler: Optional[StylesheetCompiler] = None,
        content_loader: Optional[ContentLoader] = None
    ):
        """
        Initialize builder.

        Args:
            config: Project layout and build options
            compiler: Stylesheet compiler (built from config if None)
            content_loader: Content dataset loader
        """
        self.config = config
        self.compiler = compiler or StylesheetCompiler(
            root=config.root,
            src_dir=config.src_path,
            templates_dir=config.templates_path,
            command=config.stylesheet_command,
        )
        self.content_loader = content_loader or ContentLoader()
        self.substitutor = VariableSubstitutor()
        self.emitter = MetadataEmitter()

    def expand_entry(self) -> Tuple[str, List[Diagnostic]]:
        """Resolve includes and loops of the entry template."""
        resolver = IncludeResolver(
            root=self.config.root,
            policy=self.config.include_policy,
            loop_expander=LoopExpander(),
        )
        text = resolver.resolve(self.config.entry_path)
        return text, resolver.diagnostics

    def load_content(self) -> Dict[str, Any]:
        return self.content_loader.load(self.config.content_path)

    def render_preview(self) -> Tuple[str, List[Diagnostic]]:
        """Render the preview document without writing it."""
        base, diagnostics = self.expand_entry()
        content = self.load_content()

        result = self.substitutor.substitute(base, content, OutputMode.PREVIEW)

        html = inject_assets(result.text, AssetBundle(
            mode=OutputMode.PREVIEW,
            js_header=concat_bundle(self.config.src_path, "header"),
            js_footer=concat_bundle(self.config.src_path, "footer"),
        ))
        return html, diagnostics + result.diagnostics

    def render_carrier(self) -> Tuple[str, List[Diagnostic]]:
        """Render the carrier document without writing it."""
        base, diagnostics = self.expand_entry()
        content = self.load_content()

        result = self.substitutor.substitute(base, content, OutputMode.CARRIER)

        block = self.emitter.emit(result.descriptors, content)
        html = insert_metadata(result.text, block)

        html = inject_assets(html, AssetBundle(
            mode=OutputMode.CARRIER,
            css=self.compiler.compile("compressed"),
            js_header=concat_bundle(self.config.src_path, "header"),
            js_footer=concat_bundle(self.config.src_path, "footer"),
        ))
        return html, diagnostics + result.diagnostics

    def build_stylesheet(self) -> BuildReport:
        """Compile and write dist/styles.css."""
        css_path = self.config.dist_path / STYLESHEET_NAME
        write_output(css_path, self.compiler.compile("compressed"))
        logger.info(f"css   -> {self._relative(css_path)}")
        return BuildReport(written=[css_path])

    def build_preview(self) -> BuildReport:
        """Render and write dist/index.html."""
        html, diagnostics = self.render_preview()
        preview_path = self.config.dist_path / PREVIEW_NAME
        write_output(preview_path, html)
        logger.info(f"dev   -> {self._relative(preview_path)}")
        return BuildReport(written=[preview_path], diagnostics=diagnostics)

    def build_carrier(self) -> BuildReport:
        """Render and write final/index.marketo.html."""
        html, diagnostics = self.render_carrier()
        carrier_path = self.config.final_path / CARRIER_NAME
        write_output(carrier_path, html)
        logger.info(f"mkto  -> {self._relative(carrier_path)}")
        return BuildReport(written=[carrier_path], diagnostics=diagnostics)

    def build_all(self) -> BuildReport:
        """Full build: stylesheet, preview and carrier."""
        report = self.build_stylesheet()
        report.merge(self.build_preview())
        report.merge(self.build_carrier())
        return report

    def handle_changes(self, events: List[ChangeEvent]) -> BuildReport:
        """
        Rebuild in response to a batch of file changes.

        Stylesheet changes rebuild the stylesheet and the carrier (which
        inlines the CSS); any other change rebuilds preview and carrier.
        The carrier is rebuilt at most once per batch.
        """
        for event in events:
            logger.info(f"change detected: {event.kind} {self._relative(event.path)}")

        style_changed = any(e.path.suffix.lower() == ".scss" for e in events)
        other_changed = any(e.path.suffix.lower() != ".scss" for e in events)

        report = BuildReport()
        if style_changed:
            report.merge(self.build_stylesheet())
        if other_changed:
            report.merge(self.build_preview())
        if events:
            report.merge(self.build_carrier())
        return report

    def _relative(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.config.root)).as_posix()
