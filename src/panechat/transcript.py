"""Pane transcript — everything the rendering layer needs for one snapshot.

Combines adapter detection, message assembly, status extraction and the
idle check into a single PaneTranscript value. Like parse_messages(), this
is a pure function of its inputs.

Key function: build_transcript(). Key class: PaneTranscript.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

from .adapters import StatusSnapshot, ToolAdapter, detect_adapter
from .assembler import Message, parse_messages


@dataclass(frozen=True)
class PaneTranscript:
    """Structured view of one pane snapshot."""

    tool: str = ""  # Adapter name, "" when no adapter matched
    messages: list[Message] = field(default_factory=list)
    is_thinking: bool = False
    status: StatusSnapshot | None = None
    waiting_for_input: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool": self.tool,
            "messages": [asdict(m) for m in self.messages],
            "is_thinking": self.is_thinking,
            "status": asdict(self.status) if self.status else None,
            "waiting_for_input": self.waiting_for_input,
        }


def build_transcript(
    raw: str,
    command: str = "",
    adapter: ToolAdapter | None = None,
    adapters: Sequence[ToolAdapter] | None = None,
) -> PaneTranscript:
    """Interpret a raw pane buffer.

    Args:
        raw: Full pane content, escapes included.
        command: Optional launch-command hint used for detection.
        adapter: Adapter to use; skips detection when given.
        adapters: Candidate adapters for detection (default registry otherwise).
    """
    if adapter is None:
        adapter = detect_adapter(raw, command, adapters)
    if adapter is None:
        return PaneTranscript()

    parsed = parse_messages(raw, adapter)
    return PaneTranscript(
        tool=adapter.name,
        messages=parsed.messages,
        is_thinking=parsed.is_thinking,
        status=adapter.extract_status(raw),
        waiting_for_input=adapter.is_waiting_for_input(raw),
    )


def format_transcript(transcript: PaneTranscript) -> str:
    """Render a transcript as plain text for terminal output."""
    if not transcript.tool:
        return "(no supported tool detected)"

    parts = []
    for msg in transcript.messages:
        parts.append(f"[{msg.role}]\n{msg.text}")

    state = "thinking" if transcript.is_thinking else (
        "waiting for input" if transcript.waiting_for_input else "working"
    )
    pct = transcript.status.percentage if transcript.status else None
    footer = f"-- {transcript.tool}: {state}"
    if pct is not None:
        footer += f", {pct}%"
    parts.append(footer)
    return "\n\n".join(parts)
