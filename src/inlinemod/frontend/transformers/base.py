"""
Syntax Transformer
Converts the Lark parse tree into inlinemod syntax tree nodes.

Only module items and attributes get structure; any other item is sliced out
of the source text verbatim so formatting and comments inside it survive.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from lark import Transformer, v_args
from lark.lexer import Token

from ...shared.nodes import Attribute, AttrStyle, Item, ItemMod, SourceFile, AnyItem
from ...shared.source_location import SourceLocation
from ...utils.config import DOC_ATTRIBUTE, RAW_IDENT_PREFIX
from .literals import LiteralError, LiteralParser

logger: logging.Logger = logging.getLogger(__name__)

RE_MOD_HEAD = re.compile(
    r"^(?P<vis>pub(?:\s*\([^()]*\))?)?\s*(?P<unsafe>unsafe\s+)?mod\s+(?P<ident>(?:r#)?[^\W\d]\w*)$"
)
RE_ATTR_META = re.compile(
    r"^\s*(?P<name>(?:::\s*)?(?:r#)?[^\W\d]\w*(?:\s*::\s*(?:r#)?[^\W\d]\w*)*)\s*(?P<rest>[\s\S]*?)\s*$"
)
RE_NAME_VALUE = re.compile(r"^=\s*(?P<literal>[\s\S]+)$")
_STRING_TOKENS = frozenset({"STRING", "RAW_STRING"})


class FragmentKind(Enum):
    """How a token tree ends an opaque item"""
    TOKEN = "token"
    SEMI = "semi"
    BRACE = "brace"


@dataclass(frozen=True)
class Fragment:
    """One token tree of an opaque item, by source position"""
    kind: FragmentKind
    start: int
    end: int
    line: int
    column: int
    end_line: int
    end_column: int
    multiline_literal: bool = False


def _token_fragment(token: Token, kind: FragmentKind = FragmentKind.TOKEN, multiline: bool = False) -> Fragment:
    return Fragment(
        kind=kind,
        start=token.start_pos,
        end=token.end_pos,
        line=token.line,
        column=token.column,
        end_line=token.end_line,
        end_column=token.end_column,
        multiline_literal=multiline,
    )


def _span_fragment(first: Token, last: Token, kind: FragmentKind, children: Tuple[Fragment, ...]) -> Fragment:
    return Fragment(
        kind=kind,
        start=first.start_pos,
        end=last.end_pos,
        line=first.line,
        column=first.column,
        end_line=last.end_line,
        end_column=last.end_column,
        multiline_literal=any(child.multiline_literal for child in children),
    )


class ItemStructureError(Exception):
    """Structural error found while building nodes (wrapped into ParseError by the parser)"""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


@v_args(inline=True)
class SyntaxTransformer(Transformer):
    """
    Lark tree -> SourceFile.

    The parser must set `source` and `current_file` before each transform.
    """

    def __init__(self) -> None:
        super().__init__()
        self.source: str = ""
        self.current_file: str = ""

    # =========================================================================
    # Locations and text
    # =========================================================================

    def _location(self, first: Union[Token, Fragment], last: Union[Token, Fragment]) -> SourceLocation:
        start = first.start_pos if isinstance(first, Token) else first.start
        end = last.end_pos if isinstance(last, Token) else last.end
        return SourceLocation(
            file=self.current_file,
            line=first.line,
            column=first.column,
            start=start,
            end=end,
            end_line=last.end_line,
            end_column=last.end_column,
        )

    def _text(self, start: int, end: int, column: int, dedent: bool) -> str:
        """Source slice; continuation lines lose the indentation of the first line"""
        text = self.source[start:end]
        if not dedent or "\n" not in text:
            return text
        lines = text.split("\n")
        width = column - 1
        out = [lines[0]]
        for line in lines[1:]:
            stripped = line.lstrip(" \t")
            removed = len(line) - len(stripped)
            out.append(line[min(removed, width):])
        return "\n".join(out)

    # =========================================================================
    # Token trees
    # =========================================================================

    def atom(self, token: Token) -> Fragment:
        if token.type == "SEMI":
            return _token_fragment(token, FragmentKind.SEMI)
        multiline = token.type in _STRING_TOKENS and "\n" in token
        return _token_fragment(token, multiline=multiline)

    def nested_token(self, token: Token) -> Fragment:
        return _token_fragment(token)

    def group(self, open_token: Token, *rest) -> Fragment:
        *children, close_token = rest
        kind = FragmentKind.BRACE if open_token.type == "LBRACE" else FragmentKind.TOKEN
        return _span_fragment(open_token, close_token, kind, tuple(children))

    def nested_attr(self, open_token: Token, *rest) -> Fragment:
        *children, close_token = rest
        return _span_fragment(open_token, close_token, FragmentKind.TOKEN, tuple(children))

    # =========================================================================
    # Attributes
    # =========================================================================

    def _attribute(self, style: AttrStyle, open_token: Token, close_token: Token) -> Attribute:
        location = self._location(open_token, close_token)
        text = self.source[open_token.start_pos:close_token.end_pos]
        meta = self.source[open_token.end_pos:close_token.start_pos]
        name, value = self._parse_meta(meta, location)
        return Attribute(style=style, text=text, name=name, value=value, location=location)

    def _parse_meta(self, meta: str, location: SourceLocation) -> Tuple[str, Optional[str]]:
        match = RE_ATTR_META.match(meta)
        if match is None:
            raise ItemStructureError("expected attribute path", location.line, location.column)
        name = re.sub(r"\s+", "", match.group("name"))
        rest = match.group("rest")
        name_value = RE_NAME_VALUE.match(rest) if rest else None
        if name_value is None:
            return name, None
        try:
            return name, LiteralParser.parse_str(name_value.group("literal"))
        except LiteralError as e:
            raise ItemStructureError(f"invalid literal in attribute: {e}", location.line, location.column) from e

    def _doc_comment(self, style: AttrStyle, token: Token) -> Attribute:
        # The lexed token may have nested comment delimiters blanked out
        text = self.source[token.start_pos:token.end_pos]
        if text.startswith("/*"):
            value = text[3:-2]
        else:
            value = text[3:]
        location = self._location(token, token)
        return Attribute(
            style=style,
            text=self._text(token.start_pos, token.end_pos, token.column, dedent=True),
            name=DOC_ATTRIBUTE,
            value=value,
            location=location,
            is_sugared_doc=True,
        )

    def outer_attr(self, open_token: Token, *rest) -> Attribute:
        return self._attribute(AttrStyle.OUTER, open_token, rest[-1])

    def inner_attr(self, open_token: Token, *rest) -> Attribute:
        return self._attribute(AttrStyle.INNER, open_token, rest[-1])

    def outer_doc(self, token: Token) -> Attribute:
        return self._doc_comment(AttrStyle.OUTER, token)

    def inner_doc(self, token: Token) -> Attribute:
        return self._doc_comment(AttrStyle.INNER, token)

    # =========================================================================
    # Module items
    # =========================================================================

    def _mod_head(self, head: Token) -> dict:
        match = RE_MOD_HEAD.match(str(head))
        if match is None:
            raise ItemStructureError(f"malformed module item: {head}", head.line, head.column)
        ident = match.group("ident")
        name = ident[len(RAW_IDENT_PREFIX):] if ident.startswith(RAW_IDENT_PREFIX) else ident
        vis = " ".join(match.group("vis").split()) if match.group("vis") else ""
        return dict(name=name, ident=ident, vis=vis, is_unsafe=bool(match.group("unsafe")))

    def mod_decl(self, head: Token, semi: Token) -> ItemMod:
        return ItemMod(content=None, location=self._location(head, semi), **self._mod_head(head))

    def mod_inline(self, head: Token, lbrace: Token, *rest) -> ItemMod:
        *elements, rbrace = rest
        inner_attrs, items = self._split_body(elements)
        return ItemMod(
            content=items,
            inner_attrs=inner_attrs,
            location=self._location(head, rbrace),
            **self._mod_head(head),
        )

    # =========================================================================
    # Files and item grouping
    # =========================================================================

    def start(self, *elements) -> SourceFile:
        attrs, items = self._split_body(list(elements))
        return SourceFile(attrs=attrs, items=items, path=self.current_file)

    def _split_body(self, elements: list) -> Tuple[List[Attribute], List[AnyItem]]:
        index = 0
        while (
            index < len(elements)
            and isinstance(elements[index], Attribute)
            and elements[index].is_inner
        ):
            index += 1
        return list(elements[:index]), self._collect_items(elements[index:])

    def _collect_items(self, elements: list) -> List[AnyItem]:
        """
        Group attributes, module items and token trees into items.

        An opaque item ends at a top-level `;` or brace group. A `;` right
        after a brace-terminated item (`const X: S = S { .. };`) belongs to it.
        """
        items: List[AnyItem] = []
        attrs: List[Attribute] = []
        fragments: List[Fragment] = []
        item_attrs: List[Attribute] = []
        last_opaque: Optional[Tuple[List[Attribute], List[Fragment]]] = None

        def flush() -> None:
            nonlocal fragments, item_attrs, last_opaque
            if fragments:
                items.append(self._make_item(fragments, item_attrs))
                last_opaque = (item_attrs, fragments)
                fragments, item_attrs = [], []

        for element in elements:
            if isinstance(element, Attribute):
                if element.is_inner:
                    raise ItemStructureError(
                        "inner attribute is not permitted in this context",
                        element.location.line,
                        element.location.column,
                    )
                if fragments:
                    # Attribute tokens in the middle of an item stay part of its text
                    fragments.append(self._attribute_fragment(element))
                else:
                    attrs.append(element)
                last_opaque = None
            elif isinstance(element, ItemMod):
                flush()
                element.attrs = attrs
                attrs = []
                items.append(element)
                last_opaque = None
            else:
                if (
                    element.kind is FragmentKind.SEMI
                    and not fragments
                    and not attrs
                    and last_opaque is not None
                    and last_opaque[1][-1].kind is FragmentKind.BRACE
                ):
                    prev_attrs, prev_fragments = last_opaque
                    items[-1] = self._make_item(prev_fragments + [element], prev_attrs)
                    last_opaque = None
                    continue
                if not fragments:
                    item_attrs, attrs = attrs, []
                fragments.append(element)
                if element.kind is not FragmentKind.TOKEN:
                    flush()

        flush()
        if attrs:
            dangling = attrs[-1].location
            raise ItemStructureError("expected item after attributes", dangling.line, dangling.column)
        return items

    def _attribute_fragment(self, attr: Attribute) -> Fragment:
        loc = attr.location
        return Fragment(
            kind=FragmentKind.TOKEN,
            start=loc.start,
            end=loc.end,
            line=loc.line,
            column=loc.column,
            end_line=loc.end_line,
            end_column=loc.end_column,
        )

    def _make_item(self, fragments: List[Fragment], attrs: List[Attribute]) -> Item:
        first, last = fragments[0], fragments[-1]
        multiline = any(fragment.multiline_literal for fragment in fragments)
        return Item(
            text=self._text(first.start, last.end, first.column, dedent=not multiline),
            attrs=list(attrs),
            location=self._location(first, last),
            has_multiline_literal=multiline,
        )
