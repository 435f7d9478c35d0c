"""Stylesheet, script bundle and asset injection module."""

from .injector import AssetBundle, inject_assets
from .scripts import concat_bundle
from .stylesheet import StylesheetCompiler

__all__ = [
    'AssetBundle',
    'inject_assets',
    'concat_bundle',
    'StylesheetCompiler',
]
