"""Co-author trailer patterns.

A PatternSet is an ordered, read-only collection of case-insensitive
regexes. Each one recognizes a `Co-authored-by:` trailer left behind by an
AI coding assistant or an automated tool.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

# Email domains owned by AI vendors
AI_VENDOR_DOMAINS = (
    "openai", "anthropic", "microsoft", "google",
    "alibabacloud", "amazon", "facebook", "meta",
)

DEFAULT_PATTERN_SOURCES = (
    r"Co-authored-by:\s*qwen[-\s]*coder\s*<[^>]*@alibabacloud\.com>",
    r"Co-authored-by:\s*qwen[-\s]*coder",
    r"Co-authored-by:\s*ai\s*assistant",
    r"Co-authored-by:\s*chatgpt",
    r"Co-authored-by:\s*github[-\s]*copilot",
    r"Co-authored-by:\s*codellama",
    r"Co-authored-by:\s*claude",
    r"Co-authored-by:\s*llama",
    r"Co-authored-by:\s*mistral",
    r"Co-authored-by:\s*amazon[-\s]*q",
    r"Co-authored-by:\s*gemini",
    r"Co-authored-by:\s*aider",
    r"Co-authored-by:\s*[^<]*<[^>]*@(?:" + "|".join(AI_VENDOR_DOMAINS) + r")\.",
)


@dataclass(frozen=True)
class PatternMatch:
    """One pattern that matched a line, and the text it matched."""

    pattern: re.Pattern
    text: str


@dataclass(frozen=True)
class PatternSet:
    """Immutable ordered set of suspicious co-author patterns."""

    patterns: tuple[re.Pattern, ...]

    @classmethod
    def from_strings(cls, sources: Iterable[str]) -> PatternSet:
        return cls(tuple(re.compile(s, re.IGNORECASE) for s in sources))

    def match(self, line: str) -> list[PatternMatch]:
        """Return every pattern matching anywhere in `line`, in set order."""
        matches = []
        for pattern in self.patterns:
            m = pattern.search(line)
            if m:
                matches.append(PatternMatch(pattern=pattern, text=m.group(0)))
        return matches

    def __iter__(self) -> Iterator[re.Pattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


DEFAULT_PATTERNS = PatternSet.from_strings(DEFAULT_PATTERN_SOURCES)
