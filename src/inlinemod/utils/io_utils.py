"""
Centralized file I/O utilities.

- Single place for encoding and path normalisation
- Use Path.read_text() consistently (no raw open/read)
"""

import os
from pathlib import Path
from typing import Union

from .config import DEFAULT_FILE_ENCODING


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def path_key(path: Union[Path, str]) -> str:
    """
    Lexically canonical form of a path, used to compare file locations.

    Does not touch the file system, so it works for in-memory resolvers too.
    """
    return os.path.normpath(os.path.abspath(os.fspath(path)))
