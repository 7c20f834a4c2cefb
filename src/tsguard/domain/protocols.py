from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from tsguard.domain.entities import TextEdit
    from tsguard.domain.syntax import SyntaxNode

FixFunction = Callable[["RuleFixerProtocol"], Optional["TextEdit"]]


class FileSystemProtocol(Protocol):
    """Protocol for the filesystem primitives the engine and rules rely on."""

    def exists(self, path: str) -> bool:
        """Return True if a file exists at path. May raise OSError."""
        ...

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, content: str) -> None: ...

    def iter_source_files(
        self, paths: Iterable[str], extensions: Iterable[str], ignores: Iterable[str]
    ) -> list[str]:
        """Expand files and directories into a sorted list of lintable source files."""
        ...


class ParserGatewayProtocol(Protocol):
    """Protocol for turning source text into a SyntaxNode tree."""

    def parse(self, file_path: str, source: str) -> "SyntaxNode": ...

    def supports(self, file_path: str) -> bool: ...


class SourceCodeProtocol(Protocol):
    def get_text(self, node: Optional["SyntaxNode"] = None) -> str: ...


class RuleFixerProtocol(Protocol):
    """Capability handed to fix callables. Describes edits without touching the source."""

    def remove(self, node: "SyntaxNode") -> "TextEdit": ...

    def replace_text(self, node: "SyntaxNode", text: str) -> "TextEdit": ...


class RuleContextProtocol(Protocol):
    """What a rule sees while it is activated for one file."""

    @property
    def filename(self) -> str: ...

    @property
    def settings(self) -> Mapping[str, object]: ...

    @property
    def source_code(self) -> SourceCodeProtocol: ...

    def report(
        self,
        *,
        node: "SyntaxNode",
        message_id: str,
        data: Optional[Mapping[str, str]] = None,
        fix: Optional[FixFunction] = None,
    ) -> None: ...
