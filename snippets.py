"""
PPQ Assistant Snippet Extraction
Finds fenced code blocks in a model response and keeps the executable ones.
"""

import re
from dataclasses import dataclass
from typing import List

from languages import is_executable

MAX_DISPLAYED = 10

# ```tag\n body \n``` ; the lazy body stops at the first closing fence
_FENCE_RE = re.compile(r"```(\w+)?[ \t\r\f\v]*\n([\s\S]*?)\n```")
_DEFAULT_TAG = "text"


@dataclass(frozen=True)
class CodeSnippet:
    """One fenced block: the raw fence tag and the body between the fences"""
    language: str
    code: str

    @property
    def line_count(self) -> int:
        return len(self.code.splitlines())


def extract_code_snippets(text: str) -> List[CodeSnippet]:
    """
    Extract executable code snippets from markdown text.

    Blocks are matched left to right without overlap. A block without a tag
    is treated as "text" and an opening fence with no closing fence matches
    nothing. Blocks whose tag is not in the language registry are dropped.

    Args:
        text: Raw response text

    Returns:
        Snippets in order of appearance
    """
    snippets = []
    for match in _FENCE_RE.finditer(text):
        language = match.group(1) or _DEFAULT_TAG
        code = match.group(2)
        if is_executable(language):
            snippets.append(CodeSnippet(language=language, code=code))
    return snippets


def recent_snippets(snippets: List[CodeSnippet], limit: int = MAX_DISPLAYED) -> List[CodeSnippet]:
    """Last `limit` snippets, keeping their relative order"""
    if len(snippets) > limit:
        return list(snippets[-limit:])
    return list(snippets)
