"""
inlinemod Syntax Transformers
=============================

Lark parse tree to syntax tree conversion.
"""

from .base import SyntaxTransformer, ItemStructureError
from .literals import LiteralParser, LiteralError

__all__ = [
    'SyntaxTransformer',
    'ItemStructureError',
    'LiteralParser',
    'LiteralError',
]
