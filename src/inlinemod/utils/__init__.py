"""
inlinemod utilities package
"""

from .io_utils import read_source_file, path_key

__all__ = ["read_source_file", "path_key"]
