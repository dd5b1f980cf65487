"""Signal extraction for tier routing.

Turns a free-text task description and an agent label into a structured,
explainable feature set. Matching is lexical only:

- Keyword categories (risk, hard override, simplicity, domain, urgency) are
  matched case-insensitively on word boundaries. Multi-word terms match across
  spaces or hyphens, and common inflections (-s, -es, -d, -ed, -ing) of a term
  count as the term itself. Each distinct term counts once.
- Word count maps to a length bucket (short / medium / long).
- A documentation-only flag marks requests whose leading ask is to write or
  update documentation.
- Enumerated or bulleted lines count as steps.

Extraction never raises. Empty input produces zeroed signals marked as
trivial input.

Usage:
    extractor = SignalExtractor(config.keywords, config.length)
    signals = extractor.extract("Find all .ts files in src/", "explore")
    signals.simplicity_terms  # ("find",)
"""

from dataclasses import dataclass
from enum import Enum
import re
from typing import Any

from tierroute.config.models import KeywordTables, LengthConfig
from tierroute.routing.policy import normalize_agent

_INFLECTIONS = r"(?:s|es|d|ed|ing)?"

_DOC_NOUN = (
    r"(?:documentation|docs|readme|docstrings?|changelog|comments|jsdoc|guides?|tutorials?)"
)

# Leading ask is to produce or revise documentation, e.g. "Write docs for ...",
# "Update the README", "Add docstrings to utils.py", "Document the API".
_DOC_REQUEST_PATTERN = re.compile(
    r"^\s*(?:please\s+)?"
    r"(?:"
    r"(?:write|update|add|create|improve|expand|draft|revise|fix|generate|polish)\s+"
    r"(?:(?:the|a|an|some|more|missing|new|better|our|its|their)\s+)*"
    r"(?:[\w./-]+\s+){0,2}?"
    rf"{_DOC_NOUN}\b"
    r"|document\s+\w"
    r")",
    re.IGNORECASE,
)

# Clause breaks: sentence ends, semicolons, commas and "and"/"then"/"also"/"plus"
_CLAUSE_SPLIT = re.compile(
    r"[;.!?](?:\s+|$)|\s*,\s*|\s+(?:and|then|also|plus)\s+",
    re.IGNORECASE,
)
_CONNECTIVES = re.compile(
    r"^(?:(?:and|then|also|plus|afterwards|next|finally)\s+)+",
    re.IGNORECASE,
)

# A follow-on clause opening with one of these verbs asks for more work
_WORK_VERB = re.compile(
    r"^(?:please\s+)?(?:refactor|rewrite|redesign|implement|fix|change|add|update|remove|"
    r"delete|migrate|build|create|replace|move|rename|optimi[sz]e|deploy|patch|modify|"
    r"convert|upgrade|introduce|split|merge|port|extract|integrate|wire|make|write)\b",
    re.IGNORECASE,
)
_DOC_MENTION = re.compile(rf"\b(?:{_DOC_NOUN}|examples?|usage|diagrams?)\b", re.IGNORECASE)


def _is_documentation_only(text: str) -> bool:
    """True when the leading ask is documentation and no later clause asks for other work."""
    if not _DOC_REQUEST_PATTERN.match(text):
        return False
    clauses = [_CONNECTIVES.sub("", part.strip()) for part in _CLAUSE_SPLIT.split(text)]
    for clause in clauses[1:]:
        if _WORK_VERB.match(clause) and not _DOC_MENTION.search(clause):
            return False
    return True


_STEP_PATTERN = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s+\S", re.MULTILINE)


class LengthBucket(str, Enum):
    """Coarse prompt length derived from word count."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def weight_value(self) -> int:
        """Numeric value used by the complexity score (0, 1 or 2)."""
        return {LengthBucket.SHORT: 0, LengthBucket.MEDIUM: 1, LengthBucket.LONG: 2}[self]


@dataclass(frozen=True, slots=True)
class Signals:
    """Features extracted from one prompt and agent label.

    Attributes:
        agent: Normalized agent label.
        word_count: Whitespace-separated word count.
        length_bucket: Bucket derived from word_count.
        risk_terms: Matched risk terms, including hard-override terms.
        hard_override_terms: Matched hard-override terms.
        simplicity_terms: Matched lookup/search terms.
        domain_terms: Matched implementation/domain terms.
        urgency_terms: Matched urgency terms.
        step_count: Enumerated or bulleted lines.
        documentation_only: The request is to write or update documentation.
        trivial_input: The prompt was empty or whitespace only.
    """

    agent: str
    word_count: int
    length_bucket: LengthBucket
    risk_terms: tuple[str, ...] = ()
    hard_override_terms: tuple[str, ...] = ()
    simplicity_terms: tuple[str, ...] = ()
    domain_terms: tuple[str, ...] = ()
    urgency_terms: tuple[str, ...] = ()
    step_count: int = 0
    documentation_only: bool = False
    trivial_input: bool = False

    @property
    def risk_count(self) -> int:
        return len(self.risk_terms)

    @property
    def hard_override_count(self) -> int:
        return len(self.hard_override_terms)

    @property
    def simplicity_count(self) -> int:
        return len(self.simplicity_terms)

    @property
    def domain_count(self) -> int:
        return len(self.domain_terms)

    @property
    def urgency_count(self) -> int:
        return len(self.urgency_terms)

    def category_counts(self) -> dict[str, tuple[int, tuple[str, ...]]]:
        """Return ``category -> (count, matched terms)`` in display order."""
        return {
            "risk": (self.risk_count, self.risk_terms),
            "hard_override": (self.hard_override_count, self.hard_override_terms),
            "simplicity": (self.simplicity_count, self.simplicity_terms),
            "domain": (self.domain_count, self.domain_terms),
            "urgency": (self.urgency_count, self.urgency_terms),
        }

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "agent": self.agent,
            "word_count": self.word_count,
            "length_bucket": self.length_bucket.value,
            "risk_terms": list(self.risk_terms),
            "hard_override_terms": list(self.hard_override_terms),
            "simplicity_terms": list(self.simplicity_terms),
            "domain_terms": list(self.domain_terms),
            "urgency_terms": list(self.urgency_terms),
            "step_count": self.step_count,
            "documentation_only": self.documentation_only,
            "trivial_input": self.trivial_input,
        }


def _compile_term(term: str) -> re.Pattern[str]:
    """Compile a keyword into a word-boundary pattern tolerant of inflections."""
    parts = [re.escape(part) for part in re.split(r"[\s-]+", term) if part]
    body = r"[\s-]+".join(parts)
    return re.compile(rf"(?<!\w){body}{_INFLECTIONS}(?!\w)", re.IGNORECASE)


class _CategoryMatcher:
    """Precompiled patterns for one keyword category."""

    __slots__ = ("_patterns",)

    def __init__(self, terms: tuple[str, ...]) -> None:
        seen: dict[str, re.Pattern[str]] = {}
        for term in terms:
            if term not in seen:
                seen[term] = _compile_term(term)
        self._patterns = tuple(seen.items())

    def match(self, text: str) -> tuple[str, ...]:
        return tuple(term for term, pattern in self._patterns if pattern.search(text))


class SignalExtractor:
    """Extracts Signals using fixed keyword tables and length thresholds.

    Patterns are compiled once; the extractor holds no per-call state and can
    be shared across threads.
    """

    __slots__ = ("_length", "_risk", "_hard_override", "_simplicity", "_domain", "_urgency")

    def __init__(self, keywords: KeywordTables, length: LengthConfig) -> None:
        self._length = length
        self._risk = _CategoryMatcher(keywords.risk)
        self._hard_override = _CategoryMatcher(keywords.hard_override)
        self._simplicity = _CategoryMatcher(keywords.simplicity)
        self._domain = _CategoryMatcher(keywords.domain)
        self._urgency = _CategoryMatcher(keywords.urgency)

    def length_bucket(self, word_count: int) -> LengthBucket:
        """Map a word count onto a LengthBucket."""
        if word_count <= self._length.short_max_words:
            return LengthBucket.SHORT
        if word_count >= self._length.long_min_words:
            return LengthBucket.LONG
        return LengthBucket.MEDIUM

    def extract(self, prompt: str | None, agent: str | None) -> Signals:
        """Extract signals from a prompt and agent label.

        Args:
            prompt: Free-text task description. None is treated as empty.
            agent: Declared agent/role label.

        Returns:
            Signals for the input. Never raises.
        """
        text = prompt or ""
        label = normalize_agent(agent)

        if not text.strip():
            return Signals(
                agent=label,
                word_count=0,
                length_bucket=LengthBucket.SHORT,
                trivial_input=True,
            )

        word_count = len(text.split())
        hard_override_terms = self._hard_override.match(text)
        risk_terms = self._risk.match(text)
        risk_terms = risk_terms + tuple(t for t in hard_override_terms if t not in risk_terms)

        return Signals(
            agent=label,
            word_count=word_count,
            length_bucket=self.length_bucket(word_count),
            risk_terms=risk_terms,
            hard_override_terms=hard_override_terms,
            simplicity_terms=self._simplicity.match(text),
            domain_terms=self._domain.match(text),
            urgency_terms=self._urgency.match(text),
            step_count=len(_STEP_PATTERN.findall(text)),
            documentation_only=_is_documentation_only(text),
        )
