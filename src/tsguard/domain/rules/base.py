"""Rule definition types shared by every rule module."""

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Protocol

from tsguard.domain.protocols import RuleContextProtocol
from tsguard.domain.syntax import SyntaxNode

Visitors = dict[str, Callable[[SyntaxNode], None]]
"""Node kind -> callback invoked once per matching node during the traversal."""


@dataclass(frozen=True)
class RuleMeta:
    """Static rule metadata: message catalog, fixability and documentation strings."""

    type: str
    description: str
    messages: Mapping[str, str]
    category: str = "Best Practices"
    recommended: bool = False
    fixable: Optional[str] = None
    """'code' when the rule proposes fixes, None otherwise."""
    schema: tuple[object, ...] = field(default_factory=tuple)


class RuleModule(Protocol):
    """A rule: metadata plus a per-file factory of visitor callbacks."""

    rule_id: str
    meta: RuleMeta

    def create(self, context: RuleContextProtocol) -> Visitors:
        """Activate for one file. Returning an empty mapping disables the rule for it."""
        ...
