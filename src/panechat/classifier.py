"""Classification engine — runs an adapter's rules over every buffer line.

Pipeline: insert_markers() on the whole buffer, split into lines, strip
escapes per line (markers survive), then classify the trimmed line with
the raw line carried alongside for verbatim capture.
"""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.base import Classification, ToolAdapter
from .ansi import strip_ansi


@dataclass(frozen=True)
class ClassifiedLine:
    """One buffer line with its classification."""

    classification: Classification
    line: str      # Escapes stripped, untrimmed, markers kept
    raw_line: str  # Marked raw line, escapes intact


def classify_buffer(raw: str, adapter: ToolAdapter) -> list[ClassifiedLine]:
    """Classify every line of a raw pane buffer, in order."""
    marked = adapter.insert_markers(raw)
    result: list[ClassifiedLine] = []
    for raw_line in marked.split("\n"):
        line = strip_ansi(raw_line)
        result.append(
            ClassifiedLine(
                classification=adapter.classify_line(line.strip(), raw_line),
                line=line,
                raw_line=raw_line,
            )
        )
    return result
