from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Severity(Enum):
    """Severity a rule is run at. OFF rules are never activated."""
    OFF = "off"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: object) -> "Severity":
        """Accept 'off'/'warn'/'error' (any case) or ESLint-style 0/1/2."""
        numeric = {0: cls.OFF, 1: cls.WARN, 2: cls.ERROR}
        if isinstance(value, int) and not isinstance(value, bool) and value in numeric:
            return numeric[value]
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "warning":
                return cls.WARN
            for member in cls:
                if member.value == lowered:
                    return member
        raise ValueError(f"Invalid severity: {value!r}")


@dataclass(frozen=True)
class TextEdit:
    """
    A single proposed text-range edit.

    Offsets are character offsets into the decoded source text; ``end`` is
    exclusive. A removal is an edit whose replacement text is empty.
    """
    start: int
    end: int
    text: str = ""

    def overlaps(self, other: "TextEdit") -> bool:
        """True if the two ranges share any character (or both insert at one point)."""
        if self.start == self.end == other.start == other.end:
            return True
        return self.start < other.end and other.start < self.end

    def apply(self, source: str) -> str:
        return source[: self.start] + self.text + source[self.end:]


@dataclass(frozen=True)
class Diagnostic:
    """A reported violation anchored to a source location (1-based lines, 1-based columns)."""
    rule_id: str
    message_id: str
    message: str
    severity: Severity
    line: int
    column: int
    end_line: int
    end_column: int
    fix: Optional[TextEdit] = None
    fatal: bool = False

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for the JSON reporter."""
        result: dict[str, Any] = {
            "ruleId": self.rule_id,
            "messageId": self.message_id,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
        }
        if self.fix is not None:
            result["fix"] = {"range": [self.fix.start, self.fix.end], "text": self.fix.text}
        if self.fatal:
            result["fatal"] = True
        return result


@dataclass(frozen=True)
class LintResult:
    """Result of linting (and optionally fixing) a single file."""
    file_path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    output: Optional[str] = None
    """Fixed source text, set only when fixes changed the file."""

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARN)

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fixable)

    @property
    def fixed(self) -> bool:
        return self.output is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "messages": [d.to_dict() for d in self.diagnostics],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "fixableCount": self.fixable_count,
            "fixed": self.fixed,
        }
