"""
PPQ Assistant Language Registry
Static table mapping markdown fence tags to the interpreter that runs them.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from errors import UnsupportedLanguage


@dataclass(frozen=True)
class LanguageDescriptor:
    """How to invoke one interpreter; code is always the last argument"""
    name: str
    tags: FrozenSet[str]
    interpreter: str
    flags: Tuple[str, ...]

    def command(self, code: str) -> List[str]:
        return [self.interpreter, *self.flags, code]


# Tag sets must stay disjoint so lookups are deterministic
SUPPORTED_LANGUAGES: Tuple[LanguageDescriptor, ...] = (
    LanguageDescriptor("Bash", frozenset({"bash", "sh"}), "bash", ("-c",)),
    LanguageDescriptor("Python", frozenset({"python", "python3"}), "python3", ("-c",)),
    LanguageDescriptor("JavaScript", frozenset({"js", "javascript", "node"}), "node", ("-e",)),
    LanguageDescriptor("Ruby", frozenset({"ruby"}), "ruby", ("-e",)),
    LanguageDescriptor("Perl", frozenset({"perl"}), "perl", ("-e",)),
    LanguageDescriptor("PHP", frozenset({"php"}), "php", ("-r",)),
)


def find_language(tag: str) -> LanguageDescriptor:
    """
    Resolve a fence tag to its language descriptor.

    Args:
        tag: Fence tag exactly as written after the opening backticks (case-sensitive)

    Returns:
        The first descriptor whose tag set contains the tag

    Raises:
        UnsupportedLanguage: If no descriptor accepts the tag
    """
    for language in SUPPORTED_LANGUAGES:
        if tag in language.tags:
            return language
    raise UnsupportedLanguage(tag)


def is_executable(tag: str) -> bool:
    try:
        find_language(tag)
    except UnsupportedLanguage:
        return False
    return True
