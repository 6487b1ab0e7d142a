"""Abstract base class for tool adapters.

A ToolAdapter encapsulates every textual convention of one CLI tool running
in a pane: how to recognize it, which colour escapes identify the user and
agent prompt glyphs, how to classify a line, where the progress indicator
lives and what the idle prompt looks like. Shared logic (classification
engine, message assembler) never branches on the tool name; new tools are
added as new ToolAdapter subclasses.

Key classes: ToolAdapter (ABC), Classification, StatusSnapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

# Classification kinds (closed set).
SKIP = "skip"
THINKING = "thinking"
COMPACT_START = "compact_start"
COMPACT_END = "compact_end"
MODEL_HEADER = "model_header"
MODEL_CONFIRMED = "model_confirmed"
MODEL_SELECTED = "model_selected"
MODEL_ITEM = "model_item"
TURN_END = "turn_end"
USER = "user"
AGENT = "agent"
EMPTY = "empty"
TOOL = "tool"
TOOL_RESULT = "tool_result"
CONTINUATION = "continuation"


@dataclass(frozen=True)
class Classification:
    """Tagged result of classifying one pane line."""

    kind: str
    text: str | None = None      # Cleaned, human-readable payload
    raw_text: str | None = None  # Payload with escapes intact (markers removed)


@dataclass(frozen=True)
class StatusSnapshot:
    """Progress indicator read from the pane."""

    percentage: int | None
    tool: str


class ToolAdapter(ABC):
    """Abstract base for per-tool pane interpretation."""

    name: str = ""

    @abstractmethod
    def detect(self, raw: str, command: str = "") -> bool:
        """Return True if this adapter handles the pane.

        Args:
            raw: Full pane buffer, escapes included.
            command: Optional launch-command hint (e.g. pane_current_command).
        """

    @abstractmethod
    def insert_markers(self, raw: str) -> str:
        """Rewrite role-identifying colour escapes into sentinel markers.

        Must run before strip_ansi(), which destroys the colours. No other
        byte of the buffer may change.
        """

    @abstractmethod
    def classify_line(self, trimmed: str, raw_line: str) -> Classification:
        """Classify one line.

        Args:
            trimmed: The line with escapes stripped and whitespace trimmed
                     (markers kept).
            raw_line: The marked raw line, escapes intact.
        """

    @abstractmethod
    def extract_status(self, raw: str) -> StatusSnapshot:
        """Read the latest progress percentage from the buffer."""

    @abstractmethod
    def is_waiting_for_input(self, raw: str) -> bool:
        """Return True if the tool is idle at its input prompt."""
