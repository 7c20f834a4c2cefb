"""Tree-sitter based parser gateway producing ESTree-flavoured SyntaxNode trees."""

import logging
import os
import re
from typing import Optional, Sequence

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from tsguard.domain.protocols import ParserGatewayProtocol
from tsguard.domain.syntax import (
    EXPORT_ALL_DECLARATION,
    EXPORT_DEFAULT_DECLARATION,
    EXPORT_NAMED_DECLARATION,
    STRING_LITERAL,
    SyntaxNode,
)

logger = logging.getLogger(__name__)

# tree-sitter node type -> ESTree-style kind. Everything else is PascalCased.
KIND_OVERRIDES: dict[str, str] = {
    "program": "Program",
    "import_statement": "ImportDeclaration",
    "lexical_declaration": "VariableDeclaration",
    "variable_declaration": "VariableDeclaration",
    "string": STRING_LITERAL,
    "function": "FunctionExpression",
    "function_expression": "FunctionExpression",
    "arrow_function": "ArrowFunction",
    "statement_block": "BlockStatement",
}

# ESTree field name -> tree-sitter field name.
FIELD_ALIASES: dict[str, str] = {
    "callee": "function",
    "arguments": "arguments",
    "init": "value",
    "id": "name",
    "source": "source",
    "declaration": "declaration",
    "body": "body",
}

SKIPPED_TYPES: frozenset[str] = frozenset({"comment", "html_comment"})

_ESCAPE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-3][0-7]{0,2}|[4-7][0-7]?|\r\n|[\s\S])"
)
_SINGLE_ESCAPES: dict[str, str] = {
    "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v",
    # line continuations
    "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


def decode_string_literal(raw: str) -> str:
    """Cooked value of the text between a JS string literal's quotes."""

    def substitute(match: "re.Match[str]") -> str:
        escape = match.group(1)
        if escape in _SINGLE_ESCAPES:
            return _SINGLE_ESCAPES[escape]
        if escape[0] in "ux" and len(escape) > 1:
            try:
                return chr(int(escape.strip("ux{}"), 16))
            except (ValueError, OverflowError):
                return match.group(0)
        if escape[0] in "01234567":
            return chr(int(escape, 8))
        return escape

    if "\\" not in raw:
        return raw
    decoded = _ESCAPE.sub(substitute, raw)
    # \uD83D\uDE00 style surrogate pairs become one code point
    return decoded.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


class TreeSitterNode:
    """Read-only SyntaxNode over a tree-sitter node, with character offsets."""

    __slots__ = ("_kind", "_start", "_end", "_parent", "_children", "_ts", "_value")

    def __init__(
        self,
        kind: str,
        start: int,
        end: int,
        parent: Optional["TreeSitterNode"],
        ts_node: Node,
        value: Optional[str] = None,
    ) -> None:
        self._kind = kind
        self._start = start
        self._end = end
        self._parent = parent
        self._children: list[TreeSitterNode] = []
        self._ts = ts_node
        self._value = value

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def parent(self) -> Optional["TreeSitterNode"]:
        return self._parent

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def children(self) -> Sequence["TreeSitterNode"]:
        return tuple(self._children)

    @property
    def value(self) -> Optional[str]:
        return self._value

    def field(self, name: str) -> Optional["TreeSitterNode"]:
        ts_field = FIELD_ALIASES.get(name, name)
        target = self._ts.child_by_field_name(ts_field)
        if target is None:
            return None
        for child in self._children:
            ts_child = child._ts
            if (
                ts_child.start_byte == target.start_byte
                and ts_child.end_byte == target.end_byte
                and ts_child.type == target.type
            ):
                return child
        return None

    def __repr__(self) -> str:
        return f"<{self._kind} [{self._start}:{self._end}]>"


class TreeSitterGateway(ParserGatewayProtocol):
    """Parses JS/TS sources with tree-sitter-typescript.

    ``.ts``-family files use the TypeScript grammar; JSX and plain JavaScript
    use the TSX grammar, which accepts both.
    """

    TYPESCRIPT_EXTENSIONS: tuple[str, ...] = (".ts", ".mts", ".cts")
    TSX_EXTENSIONS: tuple[str, ...] = (".tsx", ".js", ".jsx", ".mjs", ".cjs")

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    @property
    def extensions(self) -> tuple[str, ...]:
        return self.TYPESCRIPT_EXTENSIONS + self.TSX_EXTENSIONS

    def supports(self, file_path: str) -> bool:
        return os.path.splitext(file_path)[1].lower() in self.extensions

    def get_parser(self, file_path: str) -> Parser:
        """Get or create the tree-sitter parser for a file's grammar."""
        grammar = "typescript" if file_path.lower().endswith(self.TYPESCRIPT_EXTENSIONS) else "tsx"
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser()
            if grammar == "typescript":
                parser.language = Language(tree_sitter_typescript.language_typescript())
            else:
                parser.language = Language(tree_sitter_typescript.language_tsx())
            self._parsers[grammar] = parser
        return parser

    def parse(self, file_path: str, source: str) -> SyntaxNode:
        data = source.encode("utf-8")
        tree = self.get_parser(file_path).parse(data)
        if tree.root_node.has_error:
            # tree-sitter recovers; rules still see every node it could build
            logger.debug("Syntax errors in %s; linting the recovered tree", file_path)
        to_char = self._offset_mapper(source, data)
        return self._convert(tree.root_node, source, to_char)

    @staticmethod
    def _offset_mapper(source: str, data: bytes) -> Optional[list[int]]:
        """Byte offset -> character offset table, or None when the text is pure ASCII."""
        if len(data) == len(source):
            return None
        table = [0] * (len(data) + 1)
        byte_pos = 0
        for index, char in enumerate(source):
            width = len(char.encode("utf-8"))
            for k in range(width):
                table[byte_pos + k] = index
            byte_pos += width
        table[byte_pos] = len(source)
        return table

    def _convert(self, root: Node, source: str, to_char: Optional[list[int]]) -> TreeSitterNode:
        def offset(byte_offset: int) -> int:
            return byte_offset if to_char is None else to_char[byte_offset]

        result: Optional[TreeSitterNode] = None
        stack: list[tuple[Node, Optional[TreeSitterNode]]] = [(root, None)]
        # Iterative pre-order build; deep expression chains would overflow recursion.
        while stack:
            ts_node, parent = stack.pop()
            start, end = offset(ts_node.start_byte), offset(ts_node.end_byte)
            value = self._string_value(ts_node, source, start, end)
            node = TreeSitterNode(self.kind_of(ts_node), start, end, parent, ts_node, value)
            if parent is None:
                result = node
            else:
                parent._children.append(node)
            for child in reversed(ts_node.named_children):
                if child.type not in SKIPPED_TYPES:
                    stack.append((child, node))
        assert result is not None
        return result

    @staticmethod
    def kind_of(ts_node: Node) -> str:
        node_type = ts_node.type
        if node_type == "export_statement":
            child_types = {child.type for child in ts_node.children}
            if ts_node.child_by_field_name("source") is not None and (
                "*" in child_types or "namespace_export" in child_types
            ):
                return EXPORT_ALL_DECLARATION
            if "default" in child_types:
                return EXPORT_DEFAULT_DECLARATION
            return EXPORT_NAMED_DECLARATION
        override = KIND_OVERRIDES.get(node_type)
        if override is not None:
            return override
        return "".join(part.capitalize() for part in node_type.split("_"))

    @staticmethod
    def _string_value(ts_node: Node, source: str, start: int, end: int) -> Optional[str]:
        """Decoded value of a string literal; None for any other node."""
        if ts_node.type != "string" or end - start < 2:
            return None
        return decode_string_literal(source[start + 1: end - 1])
