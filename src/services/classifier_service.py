"""Task classifier: energy, priority and duration from a task title.

Classification is a keyword heuristic over the lower-cased title:
- Energy: count substring hits against the high/medium/low keyword sets and
  resolve them with a fixed decision order (see ``TaskClassifier._decide_energy``).
  Titles with no usable hits fall back to a word-count estimate.
- Priority: first matching rule in (urgent, important), else normal.
- Duration: fixed per energy, with longer blocks for high-energy meetings/sessions.

Matching is substring containment, not word matching: "plan" hits "planning"
and "file" hits "profile".
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from src.core.config import constants
from src.domain.classification import AnalyzedTask, ClassificationResult
from src.domain.task import EnergyLevel, Priority


logger = logging.getLogger(__name__)


HIGH_ENERGY_KEYWORDS: tuple[str, ...] = (
    "present",
    "presentation",
    "negotiate",
    "conflict",
    "resolve",
    "strategy",
    "plan",
    "design",
    "architect",
    "lead",
    "facilitate",
    "interview",
    "hire",
    "fire",
    "difficult",
    "1:1",
    "one-on-one",
    "feedback",
    "performance",
    "escalat",
    "crisis",
    "urgent",
    "critical",
    "deadline",
    "decision",
    "stakeholder",
    "executive",
    "budget",
    "forecast",
    "proposal",
    "pitch",
)

MEDIUM_ENERGY_KEYWORDS: tuple[str, ...] = (
    "review",
    "write",
    "draft",
    "prepare",
    "update",
    "create",
    "analyze",
    "report",
    "document",
    "meeting",
    "agenda",
    "plan",
    "schedule",
    "coordinate",
    "follow up",
    "check",
    "assess",
    "evaluate",
    "summarize",
    "compile",
)

LOW_ENERGY_KEYWORDS: tuple[str, ...] = (
    "email",
    "inbox",
    "respond",
    "reply",
    "slack",
    "messages",
    "organize",
    "file",
    "archive",
    "approve",
    "timesheet",
    "expense",
    "book",
    "calendar",
    "remind",
    "notify",
    "send",
    "forward",
    "copy",
    "move",
    "delete",
    "clean",
)

URGENT_KEYWORDS: tuple[str, ...] = (
    "asap",
    "urgent",
    "today",
    "now",
    "immediately",
    "critical",
    "deadline",
    "eod",
    "eob",
)
IMPORTANT_KEYWORDS: tuple[str, ...] = ("important", "key", "major", "significant", "priority", "essential", "must")

LONG_SESSION_MARKERS: tuple[str, ...] = ("meeting", "session")

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class KeywordRule:
    """Keyword set and the category it votes for."""

    category: EnergyLevel | Priority
    keywords: tuple[str, ...]

    def hits(self, text: str) -> int:
        return count_keyword_hits(text, self.keywords)

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


def count_keyword_hits(text: str, keywords: Iterable[str]) -> int:
    """Number of keywords contained in text (each keyword counts once)."""
    return sum(1 for keyword in keywords if keyword in text)


def count_words(text: str) -> int:
    """Whitespace-separated word count; leading/trailing whitespace count as empty words."""
    return len(_WHITESPACE_RE.split(text))


class TaskClassifier:
    """Keyword-rule classifier for task titles.

    Keyword sets can be overridden per instance; the defaults reproduce the
    module-level constants. Instances hold no mutable state, so one instance can
    be shared freely.
    """

    def __init__(
        self,
        *,
        energy_keywords: Mapping[EnergyLevel, Sequence[str]] | None = None,
        urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
        important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
    ) -> None:
        energy_keywords = energy_keywords or {}
        self.energy_rules: tuple[KeywordRule, ...] = (
            KeywordRule(EnergyLevel.HIGH, tuple(energy_keywords.get(EnergyLevel.HIGH, HIGH_ENERGY_KEYWORDS))),
            KeywordRule(EnergyLevel.MEDIUM, tuple(energy_keywords.get(EnergyLevel.MEDIUM, MEDIUM_ENERGY_KEYWORDS))),
            KeywordRule(EnergyLevel.LOW, tuple(energy_keywords.get(EnergyLevel.LOW, LOW_ENERGY_KEYWORDS))),
        )
        # Evaluated in order; first match wins.
        self.priority_rules: tuple[KeywordRule, ...] = (
            KeywordRule(Priority.URGENT, tuple(urgent_keywords)),
            KeywordRule(Priority.IMPORTANT, tuple(important_keywords)),
        )

    def classify(self, title: str) -> ClassificationResult:
        """Classify a task title.

        Args:
            title: Free-text task title

        Returns:
            ClassificationResult with energy, priority, estimated duration and reasoning
        """
        text = title.lower()
        scores = {rule.category: rule.hits(text) for rule in self.energy_rules}
        energy, reasoning = self._decide_energy(scores, text)
        priority = self._decide_priority(text)

        result = ClassificationResult(
            energy=energy,
            priority=priority,
            estimated_duration_minutes=self._estimate_duration(energy, text),
            reasoning=reasoning,
        )
        logger.debug(
            "Task classified",
            extra={"title": title, "scores": {k.value: v for k, v in scores.items()}, "energy": energy.value},
        )
        return result

    def analyze_bulk_tasks(self, titles: Iterable[str]) -> list[AnalyzedTask]:
        """Classify each title independently, preserving order and duplicates."""
        return [AnalyzedTask(title=title, **self.classify(title).model_dump()) for title in titles]

    @staticmethod
    def _decide_energy(scores: Mapping[EnergyLevel, int], text: str) -> tuple[EnergyLevel, str]:
        # High must beat both outright; low wins ties with high.
        high = scores[EnergyLevel.HIGH]
        medium = scores[EnergyLevel.MEDIUM]
        low = scores[EnergyLevel.LOW]

        if high > medium and high > low:
            return EnergyLevel.HIGH, "Requires deep focus and strategic thinking"
        if low > medium and low >= high:
            return EnergyLevel.LOW, "Routine task, minimal cognitive load"
        if medium > 0:
            return EnergyLevel.MEDIUM, "Moderate focus needed"

        word_count = count_words(text)
        if word_count > constants.COMPLEX_TITLE_WORDS:
            return EnergyLevel.HIGH, "Complex task description suggests higher effort"
        if word_count > constants.STANDARD_TITLE_WORDS:
            return EnergyLevel.MEDIUM, "Standard task complexity"
        return EnergyLevel.LOW, "Simple, straightforward task"

    def _decide_priority(self, text: str) -> Priority:
        for rule in self.priority_rules:
            if rule.matches(text):
                return rule.category
        return Priority.NORMAL

    @staticmethod
    def _estimate_duration(energy: EnergyLevel, text: str) -> int:
        if energy is EnergyLevel.HIGH:
            if any(marker in text for marker in LONG_SESSION_MARKERS):
                return constants.HIGH_ENERGY_SESSION_DURATION
            return constants.HIGH_ENERGY_DURATION
        if energy is EnergyLevel.MEDIUM:
            return constants.MEDIUM_ENERGY_DURATION
        return constants.LOW_ENERGY_DURATION


default_classifier = TaskClassifier()


def classify(title: str) -> ClassificationResult:
    """Classify a task title with the default keyword sets."""
    return default_classifier.classify(title)


def analyze_bulk_tasks(titles: Iterable[str]) -> list[AnalyzedTask]:
    """Classify many titles with the default keyword sets."""
    return default_classifier.analyze_bulk_tasks(titles)
