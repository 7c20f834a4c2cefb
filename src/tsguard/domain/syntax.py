"""Read-only syntax node protocol and parent-chain helpers."""

from typing import Callable, Optional, Protocol, Sequence

PROGRAM = "Program"
CALL_EXPRESSION = "CallExpression"
EXPRESSION_STATEMENT = "ExpressionStatement"
IMPORT_DECLARATION = "ImportDeclaration"
EXPORT_ALL_DECLARATION = "ExportAllDeclaration"
EXPORT_NAMED_DECLARATION = "ExportNamedDeclaration"
EXPORT_DEFAULT_DECLARATION = "ExportDefaultDeclaration"
VARIABLE_DECLARATION = "VariableDeclaration"
VARIABLE_DECLARATOR = "VariableDeclarator"
STRING_LITERAL = "Literal"


class SyntaxNode(Protocol):
    """
    A node of a parsed tree as the host engine exposes it.

    ``start``/``end`` are character offsets into the source text (end exclusive).
    ``parent`` is a back-reference used only for upward walks.
    """

    @property
    def kind(self) -> str: ...

    @property
    def parent(self) -> Optional["SyntaxNode"]: ...

    @property
    def start(self) -> int: ...

    @property
    def end(self) -> int: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def value(self) -> Optional[str]:
        """Cooked value of a string literal, None for anything else."""
        ...

    def field(self, name: str) -> Optional["SyntaxNode"]:
        """Return the child stored under an ESTree-style field name (callee, source, init)."""
        ...


def nearest_enclosing(
    node: SyntaxNode, stop: Callable[[SyntaxNode], bool]
) -> Optional[SyntaxNode]:
    """Return the closest proper ancestor of ``node`` satisfying ``stop``, or None at the root."""
    current = node.parent
    seen = 0
    # Parent chains are acyclic; the guard only bounds a malformed tree.
    while current is not None and seen < 10_000:
        if stop(current):
            return current
        current = current.parent
        seen += 1
    return None


def is_statement_boundary(node: SyntaxNode) -> bool:
    """True for statements, declarations and the program root."""
    kind = node.kind
    return kind.endswith("Statement") or kind.endswith("Declaration") or kind == PROGRAM


def is_kind(kind: str) -> Callable[[SyntaxNode], bool]:
    """Build a stop predicate matching a single node kind."""
    return lambda node: node.kind == kind
