"""
Literal Parser
Decodes Rust string and byte-string literals, and encodes byte strings.
"""

import re
from typing import Optional

_RAW_LITERAL = re.compile(r'^(?P<prefix>[bc]?)r(?P<hashes>#*)"(?P<body>[\s\S]*)"(?P=hashes)$')
_LITERAL = re.compile(r'^(?P<prefix>[bc]?)"(?P<body>(?:[^"\\]|\\[\s\S])*)"$')
_ESCAPE = re.compile(r'\\(?:u\{(?P<unicode>[0-9a-fA-F_]{1,8})\}|x(?P<hex>[0-9a-fA-F]{2})|\r?\n[ \t\r\n]*|(?P<simple>[\s\S]))')

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "0": "\0",
    "'": "'",
    '"': '"',
}


class LiteralError(ValueError):
    """Raised for a literal that cannot be decoded (bad escape, non-ASCII byte string)"""


class LiteralParser:
    """Dedicated parser for Rust string-like literal tokens"""

    @staticmethod
    def parse_str(token: str) -> Optional[str]:
        """
        Decode a `"..."` or `r#"..."#` literal. Returns None for anything that
        is not a plain string literal (byte strings, C strings, numbers, ...).
        """
        raw = _RAW_LITERAL.match(token)
        if raw:
            return raw.group("body") if not raw.group("prefix") else None
        cooked = _LITERAL.match(token)
        if cooked is None or cooked.group("prefix"):
            return None
        return _ESCAPE.sub(_unescape_char, cooked.group("body"))

    @staticmethod
    def parse_bytes(token: str) -> Optional[bytes]:
        """Decode a `b"..."` or `br"..."` literal, None for any other token"""
        raw = _RAW_LITERAL.match(token)
        if raw:
            if raw.group("prefix") != "b":
                return None
            if not raw.group("body").isascii():
                raise LiteralError("non-ASCII character in byte string")
            return raw.group("body").encode("ascii")
        cooked = _LITERAL.match(token)
        if cooked is None or cooked.group("prefix") != "b":
            return None
        body = cooked.group("body")
        if not body.isascii():
            raise LiteralError("non-ASCII character in byte string")
        return _ESCAPE.sub(_unescape_byte, body).encode("latin-1")

    @staticmethod
    def quote_bytes(data: bytes) -> str:
        """Encode bytes as a `b"..."` literal; every non-printable byte is `\\xNN`"""
        parts = []
        for byte in data:
            if byte in (0x22, 0x5C):  # '"' and '\\'
                parts.append("\\" + chr(byte))
            elif 0x20 <= byte < 0x7F:
                parts.append(chr(byte))
            else:
                parts.append(f"\\x{byte:02x}")
        return 'b"' + "".join(parts) + '"'


def _unescape_char(match: "re.Match") -> str:
    if match.group("unicode") is not None:
        digits = match.group("unicode").replace("_", "")
        codepoint = int(digits, 16) if digits else -1
        if not (0 <= codepoint <= 0x10FFFF) or 0xD800 <= codepoint <= 0xDFFF:
            raise LiteralError(f"invalid unicode escape: \\u{{{match.group('unicode')}}}")
        return chr(codepoint)
    if match.group("hex") is not None:
        value = int(match.group("hex"), 16)
        if value > 0x7F:
            raise LiteralError(f"out of range hex escape: \\x{match.group('hex')}")
        return chr(value)
    simple = match.group("simple")
    if simple is None:
        # Line continuation: backslash-newline swallows leading whitespace
        return ""
    if simple not in _SIMPLE_ESCAPES:
        raise LiteralError(f"unknown character escape: \\{simple}")
    return _SIMPLE_ESCAPES[simple]


def _unescape_byte(match: "re.Match") -> str:
    # Characters stand for bytes (latin-1), so \xFF maps to byte 0xFF
    if match.group("unicode") is not None:
        raise LiteralError("unicode escape in byte string")
    if match.group("hex") is not None:
        return chr(int(match.group("hex"), 16))
    return _unescape_char(match)
