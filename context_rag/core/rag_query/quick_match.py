"""
Pattern shortcuts for common factual queries.

An ordered list of rules, each pairing a query trigger with a content
extractor and an answer template. The first rule whose trigger fires and
whose extractor finds a value in any chunk answers the query directly,
skipping ranking and generation.

Dependencies: re
System role: Low-latency answers for known query shapes
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from context_rag.models.chunk import DocumentChunk

logger = logging.getLogger(__name__)

Extractor = Callable[[str], str | None]


@dataclass(frozen=True)
class QuickMatchRule:
    """Trigger, extractor and answer template for one query shape.

    The template receives the extracted value as ``{value}``.
    """

    name: str
    trigger: re.Pattern
    extractor: Extractor
    template: str

    def applies_to(self, query: str) -> bool:
        return self.trigger.search(query) is not None


@dataclass(frozen=True)
class QuickMatch:
    """Answer produced by a quick-match rule."""

    rule: str
    answer: str
    chunk: DocumentChunk


def regex_extractor(pattern: str) -> Extractor:
    """Build an extractor returning the first capture group of pattern, stripped."""
    compiled = re.compile(pattern, re.IGNORECASE)

    def extract(content: str) -> str | None:
        match = compiled.search(content)
        if match is None:
            return None
        value = match.group(1).strip()
        return value or None

    return extract


# Labelled values run to the end of the sentence or line
_LABEL_VALUE = r"\s*[-:]?\s*(.+?)(?:\.(?:\s|$)|[\r\n]|$)"

DEFAULT_RULES: tuple[QuickMatchRule, ...] = (
    QuickMatchRule(
        name="manufacturer",
        trigger=re.compile(r"manufacturer|made by", re.IGNORECASE),
        extractor=regex_extractor(r"\bManufacturer\b" + _LABEL_VALUE),
        template="The manufacturer is {value}.",
    ),
    QuickMatchRule(
        name="horsepower",
        trigger=re.compile(r"horsepower|\bhp\b", re.IGNORECASE),
        extractor=regex_extractor(r"(\d+(?:\.\d+)?)\s*hp\b"),
        template="The horsepower is {value} hp.",
    ),
    QuickMatchRule(
        name="model",
        trigger=re.compile(r"\bmodel\b|\btype\b", re.IGNORECASE),
        extractor=regex_extractor(r"\bModel\b" + _LABEL_VALUE),
        template="The model is {value}.",
    ),
)


class QuickMatcher:
    """Apply quick-match rules in order."""

    def __init__(self, rules: tuple[QuickMatchRule, ...] | list[QuickMatchRule] = DEFAULT_RULES) -> None:
        """
        Initialize matcher.

        Args:
            rules: Rules tried in order; the first hit wins
        """
        self.rules = tuple(rules)

    def match(self, query: str, chunks: list[DocumentChunk]) -> QuickMatch | None:
        """
        Answer query from chunk content if a rule applies.

        Args:
            query: User query
            chunks: Chunks of the context in index order

        Returns:
            QuickMatch | None: Templated answer and the chunk it came from
        """
        for rule in self.rules:
            if not rule.applies_to(query):
                continue
            for chunk in chunks:
                value = rule.extractor(chunk.content)
                if value:
                    logger.info(
                        f"{__name__}:match - Rule '{rule.name}' answered from {chunk.id}"
                    )
                    return QuickMatch(
                        rule=rule.name,
                        answer=rule.template.format(value=value),
                        chunk=chunk,
                    )
        return None
