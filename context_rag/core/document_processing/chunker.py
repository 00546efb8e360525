"""
Sentence and paragraph chunker.

Splits extracted document text into bounded-size units for embedding.
Paragraph breaks (blank lines) and terminal punctuation delimit units;
units are packed greedily into chunks no larger than the target size.

Dependencies: math, re
System role: First stage of document ingestion
"""

import math
import re

MIN_CHUNK_CHARS = 10
DEFAULT_CHUNK_SIZE = 1000

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")


class SentenceChunker:
    """Greedy sentence packer with a hard size limit and a minimum-length floor."""

    def __init__(self, target_size: int = DEFAULT_CHUNK_SIZE, min_chars: int = MIN_CHUNK_CHARS) -> None:
        """
        Initialize chunker.

        Args:
            target_size: Maximum chunk size in characters
            min_chars: Chunks shorter than this (after stripping) are dropped

        Raises:
            ValueError: When target_size is not positive
        """
        if target_size <= 0:
            raise ValueError("target_size must be positive")
        self.target_size = target_size
        self.min_chars = min_chars

    def split(self, text: str, target_size: int | None = None) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Document text
            target_size: Override for the configured target size

        Returns:
            list[str]: Chunks in document order; empty if nothing reaches the floor
        """
        size = target_size or self.target_size
        if not text or not text.strip():
            return []

        chunks: list[str] = []
        buffer = ""

        for separator, unit in self._units(text, size):
            if not buffer:
                buffer = unit
                continue
            if len(buffer) + len(separator) + len(unit) > size:
                chunks.append(buffer)
                buffer = unit
            else:
                buffer += separator + unit

        if buffer:
            chunks.append(buffer)

        return [chunk for chunk in chunks if len(chunk.strip()) >= self.min_chars]

    def chunk_document(self, text: str) -> list[tuple[int, str]]:
        """
        Chunk a document and number the chunks.

        Args:
            text: Document text

        Returns:
            list[tuple[int, str]]: (chunk_index, content) pairs, indices contiguous from 0
        """
        return list(enumerate(self.split(text)))

    def _units(self, text: str, size: int) -> list[tuple[str, str]]:
        """Break text into (separator, unit) pairs; units never exceed size."""
        units: list[tuple[str, str]] = []
        for paragraph in _PARAGRAPH_BREAK.split(text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue
            separator = "\n\n"
            for sentence in _SENTENCE_BREAK.split(paragraph):
                if not sentence:
                    continue
                # Oversize sentences become near-equal pieces, each longer than size / 2
                pieces = math.ceil(len(sentence) / size)
                width = math.ceil(len(sentence) / pieces)
                for start in range(0, len(sentence), width):
                    units.append((separator, sentence[start:start + width]))
                    separator = " "
        return units
