"""Abstract base class for pane snapshot sources.

Defines the PaneSource ABC and PaneInfo dataclass that all sources (tmux,
snapshot files) implement. A source delivers the raw buffer of a pane
(escapes included) and a launch-command hint used for adapter detection.

Key class: PaneSource (ABC), PaneInfo (dataclass).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class PaneInfo:
    """Information about one pane."""

    target: str           # Source-specific address (tmux: "session:1.0")
    current_command: str  # Foreground command, used as detection hint
    width: int = 0
    height: int = 0


class PaneSource(ABC):
    """Abstract base for pane snapshot sources."""

    @abstractmethod
    async def capture(self, target: str) -> str | None:
        """Capture the full buffer of a pane, escapes included.

        Returns:
            The captured text, or None on failure.
        """

    @abstractmethod
    async def command_hint(self, target: str) -> str:
        """Return the pane's current command, or "" if unknown."""

    @abstractmethod
    async def list_panes(self, session: str) -> list[PaneInfo]:
        """List the panes of a session (empty list on failure)."""
