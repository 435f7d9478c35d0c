"""
Template expansion module.
Line lexer, directive tree, loop expansion and include resolution.
"""

from .includes import IncludePolicy, IncludeResolver
from .loops import LoopExpander
from .parser import parse
from .placeholders import scan_placeholders

__all__ = [
    'IncludePolicy',
    'IncludeResolver',
    'LoopExpander',
    'parse',
    'scan_placeholders',
]
