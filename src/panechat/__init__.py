"""panechat — chat transcripts from AI agent terminal panes.

Public API:
  - build_transcript(): detect the tool and interpret a raw pane buffer.
  - parse_messages(): assemble messages with a given adapter.
  - detect_adapter(): pick the adapter for a pane.
"""

from .adapters import StatusSnapshot, ToolAdapter, detect_adapter
from .assembler import Message, ParseResult, parse_messages
from .transcript import PaneTranscript, build_transcript

__all__ = [
    "Message",
    "PaneTranscript",
    "ParseResult",
    "StatusSnapshot",
    "ToolAdapter",
    "build_transcript",
    "detect_adapter",
    "parse_messages",
]
