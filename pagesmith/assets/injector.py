"""Asset injection at placement markers."""

import re
from dataclasses import dataclass

from ..modes import OutputMode


CSS_MARKER = re.compile(r'<style[^>]*data-build="css-index"[^>]*></style>')
JS_HEADER_MARKER = re.compile(r'<script[^>]*data-build="js-header"[^>]*></script>')
JS_FOOTER_MARKER = re.compile(r'<script[^>]*data-build="js-footer"[^>]*></script>')

STYLESHEET_LINK = '<link rel="stylesheet" href="styles.css">'


@dataclass
class AssetBundle:
    """Assets to splice into a document."""
    mode: OutputMode
    css: str = ""
    js_header: str = ""
    js_footer: str = ""


def _replace(pattern: re.Pattern, html: str, replacement: str) -> str:
    # Callable replacement keeps backslashes in CSS/JS literal
    return pattern.sub(lambda _: replacement, html, count=1)


def inject_assets(html: str, assets: AssetBundle) -> str:
    """
    Replace the style and script markers.

    Preview documents link the external stylesheet; carrier documents get
    the CSS inlined. Markers with no content to place are removed.
    """
    out = html

    if OutputMode(assets.mode) == OutputMode.PREVIEW:
        out = _replace(CSS_MARKER, out, STYLESHEET_LINK)
    elif assets.css:
        out = _replace(CSS_MARKER, out, "<style>\n" + assets.css + "\n</style>")
    else:
        out = _replace(CSS_MARKER, out, "")

    if assets.js_header:
        out = _replace(JS_HEADER_MARKER, out, "<script>\n" + assets.js_header + "\n</script>")
    else:
        out = _replace(JS_HEADER_MARKER, out, "")

    if assets.js_footer:
        out = _replace(JS_FOOTER_MARKER, out, "<script>\n" + assets.js_footer + "\n</script>")
    else:
        out = _replace(JS_FOOTER_MARKER, out, "")

    return out
