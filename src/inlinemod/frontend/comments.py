"""
Nested Block Comments

Rust Pattern: rustc_lexer::block_comment

Rust block comments nest, which a regular expression cannot count. Before
lexing, the delimiters of every nested comment are blanked out so the
grammar's non-nesting comment terminals span the whole outer comment.
The result has the same length and line structure as the input, so token
positions still index the original text.
"""

import re
from typing import List, Tuple

RE_WORD = re.compile(r"\w+")
RE_RAW_STRING_OPEN = re.compile(r'[bc]?r(?P<hashes>#*)"')
RE_STRING = re.compile(r'"(?:[^"\\]|\\[\s\S])*"')
RE_CHAR = re.compile(r"""b?'(?:[^'\\\n\r\t]|\\(?:[nrt\\0'"]|x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]{1,8}\}))'""")


def _block_comment_end(source: str, start: int) -> Tuple[int, List[int]]:
    """End offset of the comment opened at `start`, plus its nested delimiters"""
    depth = 0
    nested: List[int] = []
    i = start
    while i < len(source):
        if source.startswith("/*", i):
            if depth > 0:
                nested.append(i)
            depth += 1
            i += 2
        elif source.startswith("*/", i):
            depth -= 1
            if depth == 0:
                return i + 2, nested
            nested.append(i)
            i += 2
        else:
            i += 1
    # Unterminated; the lexer reports it
    return len(source), nested


def mask_nested_comments(source: str) -> str:
    """
    Blank the `/*` and `*/` of comments nested inside other block comments.

    String, char and raw string literals are skipped, so delimiters inside
    them are left alone.
    """
    if "/*" not in source:
        return source

    masked = None
    i = 0
    n = len(source)
    while i < n:
        if source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end < 0 else end
        elif source.startswith("/*", i):
            end, nested = _block_comment_end(source, i)
            if nested:
                if masked is None:
                    masked = list(source)
                for pos in nested:
                    masked[pos] = masked[pos + 1] = " "
            i = end
        elif source[i] == '"':
            match = RE_STRING.match(source, i)
            i = match.end() if match else n
        elif source[i] == "'":
            match = RE_CHAR.match(source, i)
            # Otherwise a lifetime or label
            i = match.end() if match else i + 1
        else:
            word = RE_WORD.match(source, i)
            if word is None:
                i += 1
                continue
            raw = RE_RAW_STRING_OPEN.match(source, i)
            if raw is not None:
                closing = '"' + raw.group("hashes")
                end = source.find(closing, raw.end())
                i = n if end < 0 else end + len(closing)
            else:
                i = word.end()

    return source if masked is None else "".join(masked)
