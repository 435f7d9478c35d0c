"""Tests for stylesheet compilation, script bundles and asset injection."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

from pagesmith.assets.injector import AssetBundle, inject_assets
from pagesmith.assets.scripts import concat_bundle
from pagesmith.assets.stylesheet import StylesheetCompiler
from pagesmith.modes import OutputMode


TEMPLATE = (
    '<head>\n<style data-build="css-index"></style>\n'
    '<script type="text/javascript" data-build="js-header"></script>\n</head>\n'
    '<body>\n<script data-build="js-footer"></script>\n</body>'
)


class TestInjectAssets:
    """Test marker replacement."""

    def test_preview_links_external_stylesheet(self):
        html = inject_assets(TEMPLATE, AssetBundle(mode=OutputMode.PREVIEW, css="ignored{}"))

        assert '<link rel="stylesheet" href="styles.css">' in html
        assert "ignored" not in html

    def test_carrier_inlines_css(self):
        html = inject_assets(TEMPLATE, AssetBundle(mode=OutputMode.CARRIER, css="a{color:red}"))

        assert "<style>\na{color:red}\n</style>" in html
        assert "data-build" not in html

    def test_carrier_without_css_removes_marker(self):
        html = inject_assets(TEMPLATE, AssetBundle(mode=OutputMode.CARRIER))

        assert "<style" not in html
        assert "<link" not in html

    def test_scripts_inlined_or_removed(self):
        html = inject_assets(TEMPLATE, AssetBundle(mode=OutputMode.PREVIEW, js_header="init();"))

        assert "<script>\ninit();\n</script>" in html
        assert "js-footer" not in html
        assert html.count("<script") == 1

    def test_backslashes_are_kept_literal(self):
        css = "a:before{content:'\\2014'}"

        html = inject_assets(TEMPLATE, AssetBundle(mode=OutputMode.CARRIER, css=css))

        assert css in html

    def test_document_without_markers_is_unchanged(self):
        html = "<p>nothing to do</p>"

        assert inject_assets(html, AssetBundle(mode="carrier", css="x", js_header="y")) == html


class TestConcatBundle:
    """Test script bundle concatenation."""

    def test_classes_sorted_then_index(self, tmp_path):
        classes = tmp_path / "js" / "header" / "classes"
        classes.mkdir(parents=True)
        (classes / "b.js").write_text("B")
        (classes / "a.js").write_text("A")
        (classes / "notes.txt").write_text("skip")
        (tmp_path / "js" / "header" / "index.js").write_text("INDEX")

        assert concat_bundle(tmp_path, "header") == "A\n\nB\n\nINDEX"

    def test_missing_area_is_empty(self, tmp_path):
        assert concat_bundle(tmp_path, "footer") == ""


class TestStylesheetCompiler:
    """Test the external compiler adapter."""

    def make_project(self, root: Path) -> StylesheetCompiler:
        (root / "src" / "scss").mkdir(parents=True)
        (root / "src" / "scss" / "index.scss").write_text("body{}")
        for module in ["zeta", "alpha"]:
            module_dir = root / "templates" / "modules" / module
            module_dir.mkdir(parents=True)
            (module_dir / "index.scss").write_text(".m{}")
            (module_dir / "_partial.scss").write_text("")
        return StylesheetCompiler(root, root / "src", root / "templates")

    def test_find_entries_order(self, tmp_path):
        compiler = self.make_project(tmp_path)

        entries = [p.relative_to(tmp_path).as_posix() for p in compiler.find_entries()]

        assert entries == [
            "src/scss/index.scss",
            "templates/modules/alpha/index.scss",
            "templates/modules/zeta/index.scss",
        ]

    def test_compile_joins_chunks(self, tmp_path):
        compiler = self.make_project(tmp_path)
        outputs = iter(["main{}\n", "alpha{}\n", "zeta{}\n"])

        def fake_run(command, **kwargs):
            return Mock(returncode=0, stdout=next(outputs), stderr="")

        with patch("pagesmith.assets.stylesheet.subprocess.run", side_effect=fake_run) as run:
            css = compiler.compile("compressed")

        assert css == "main{}\n\nalpha{}\n\nzeta{}"
        first_command = run.call_args_list[0][0][0]
        assert first_command[:3] == ["sass", "--no-source-map", "--style=compressed"]
        assert first_command[3].endswith("index.scss")

    def test_failed_entry_is_skipped(self, tmp_path):
        compiler = self.make_project(tmp_path)
        results = iter([
            Mock(returncode=0, stdout="main{}", stderr=""),
            Mock(returncode=65, stdout="", stderr="Error: expected '}'"),
            Mock(returncode=0, stdout="zeta{}", stderr=""),
        ])

        with patch("pagesmith.assets.stylesheet.subprocess.run", side_effect=lambda *a, **k: next(results)):
            assert compiler.compile() == "main{}\n\nzeta{}"

    def test_missing_executable_yields_empty_css(self, tmp_path):
        compiler = self.make_project(tmp_path)

        with patch("pagesmith.assets.stylesheet.subprocess.run", side_effect=FileNotFoundError("sass")):
            assert compiler.compile() == ""

    def test_timeout_is_skipped(self, tmp_path):
        compiler = self.make_project(tmp_path)
        timeout = subprocess.TimeoutExpired(cmd="sass", timeout=60)

        with patch("pagesmith.assets.stylesheet.subprocess.run", side_effect=timeout):
            assert compiler.compile() == ""

    def test_custom_command(self, tmp_path):
        compiler = self.make_project(tmp_path)
        compiler.command = ["npx", "sass", "{entry}"]

        with patch("pagesmith.assets.stylesheet.subprocess.run",
                   return_value=Mock(returncode=0, stdout="x", stderr="")) as run:
            compiler.compile_entry(tmp_path / "a.scss", "expanded")

        assert run.call_args[0][0] == ["npx", "sass", str(tmp_path / "a.scss")]
        assert run.call_args[1]["cwd"] == str(tmp_path)
