"""Tool adapter package — per-tool pane interpretation and detection.

Re-exports the core types and provides the adapter registry:
  - ToolAdapter: ABC for all adapters.
  - KiroCliAdapter: the kiro-cli agent variant.
  - default_adapters(): the registered adapters, in detection order.
  - detect_adapter(): first adapter whose detect() matches, or None.

The registry is an ordered tuple passed around by value; there is no
process-wide adapter state, and the engine never reads configuration.
Outer layers (watcher, CLI) pass configured values into default_adapters().
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .base import Classification, StatusSnapshot, ToolAdapter
from .kiro import DEFAULT_IDLE_TAIL_CHARS, KiroCliAdapter

__all__ = [
    "Classification",
    "KiroCliAdapter",
    "StatusSnapshot",
    "ToolAdapter",
    "default_adapters",
    "detect_adapter",
]

logger = logging.getLogger(__name__)


def default_adapters(
    idle_tail_chars: int = DEFAULT_IDLE_TAIL_CHARS,
) -> tuple[ToolAdapter, ...]:
    """Build the registered adapters, in detection order."""
    return (KiroCliAdapter(idle_tail_chars=idle_tail_chars),)


def detect_adapter(
    raw: str,
    command: str = "",
    adapters: Sequence[ToolAdapter] | None = None,
) -> ToolAdapter | None:
    """Return the first adapter whose detect() matches the pane.

    No match is a normal outcome (plain shell, unknown tool).
    """
    candidates = default_adapters() if adapters is None else adapters
    for adapter in candidates:
        if adapter.detect(raw, command):
            logger.debug("Detected adapter %s (command=%r)", adapter.name, command)
            return adapter
    return None
