"""Pattern vocabularies and pure classifiers for test doubles, imports and file names."""

import posixpath
import re
from enum import Enum
from typing import Optional


class DoubleFamily(Enum):
    """Families of test doubles recognised in callee text."""
    MOCK = "mock"
    SPY = "spy"
    STUB = "stub"
    FAKE = "fake"


_QUALIFIERS: tuple[str, ...] = ("", "jest.", "vi.", "sinon.")

# Order matters: the first keyword found in the callee text decides the family.
CALLEE_PATTERNS: tuple[tuple[str, DoubleFamily], ...] = tuple(
    (f"{qualifier}{family.value}", family)
    for family in (DoubleFamily.MOCK, DoubleFamily.SPY, DoubleFamily.STUB, DoubleFamily.FAKE)
    for qualifier in _QUALIFIERS
)

# Declarator inits also match factories such as jest.fn(); stub and fake are not listed.
DECLARATOR_INIT_KEYWORDS: tuple[str, ...] = ("fn", "mock", "spy")

MOCK_LIBRARIES: frozenset[str] = frozenset({
    "sinon",
    "@sinon/fake-timers",
    "jest-mock",
    "vitest/spy",
})

TEST_FILE_PATTERN = re.compile(r"\.(test|spec)\.(js|ts|jsx|tsx)$")


class PatternMatcher:
    """
    Stateless classifiers over callee text and import specifiers.

    Every method is total: any string input yields a classification,
    and absence of a match is the default.
    """

    @staticmethod
    def classify_callee(text: str) -> Optional[DoubleFamily]:
        """Return the family of the first pattern contained in ``text``, if any."""
        for keyword, family in CALLEE_PATTERNS:
            if keyword in text:
                return family
        return None

    @staticmethod
    def classify_declarator_init(callee_text: str) -> bool:
        return any(keyword in callee_text for keyword in DECLARATOR_INIT_KEYWORDS)

    @staticmethod
    def classify_import_source(module_specifier: str) -> bool:
        return module_specifier in MOCK_LIBRARIES

    @staticmethod
    def has_recognized_extension(path: str) -> bool:
        """True if the last path segment carries any extension (``./x.js``, ``./data.json``)."""
        return posixpath.splitext(path)[1] != ""

    @staticmethod
    def is_test_file(path: str) -> bool:
        return TEST_FILE_PATTERN.search(path) is not None
