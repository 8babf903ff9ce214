"""
Configuration constants to replace magic values throughout inlinemod
"""

import os
import tempfile

# Module layout constants (Rust conventions)
MODULE_FILE_EXTENSION = ".rs"
MOD_FILE_NAME = "mod" + MODULE_FILE_EXTENSION  # 2015-style directory module file
RAW_IDENT_PREFIX = "r#"

# Attribute names with meaning to the inliner
PATH_ATTRIBUTE = "path"
DOC_ATTRIBUTE = "doc"
# Reserved marker injected on inlined modules when path annotation is enabled
PROVENANCE_ATTRIBUTE = "inlinemod_source"

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "inlinemod_parser.cache")

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Printer constants
INDENT = "    "

# Diagnostic codes (borrowed from rustc where one exists)
ERROR_CODE_FILE_NOT_FOUND = "E0583"
ERROR_CODE_MALFORMED = "E0001"
ERROR_CODE_CYCLIC = "E0002"

# Environment variable controlling colored diagnostics
COLOR_ENV_VAR = "INLINEMOD_COLOR"
