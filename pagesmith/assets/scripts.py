"""JavaScript bundle concatenation."""

from pathlib import Path


def concat_bundle(src_dir: Path, area: str) -> str:
    """
    Concatenate the script bundle for an area (header or footer).

    Files in js/<area>/classes/*.js come first in sorted order, followed by
    js/<area>/index.js. Parts are joined by a blank line.
    """
    base_dir = Path(src_dir) / "js" / area
    classes_dir = base_dir / "classes"

    parts = []

    if classes_dir.is_dir():
        for path in sorted(classes_dir.glob("*.js")):
            parts.append(path.read_text(encoding='utf-8'))

    index_path = base_dir / "index.js"
    if index_path.is_file():
        parts.append(index_path.read_text(encoding='utf-8'))

    return "\n\n".join(parts)
