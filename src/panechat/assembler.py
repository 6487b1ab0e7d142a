"""Message assembler — folds classified lines into chat messages.

Single-pass state machine over ClassifiedLine values:
  1. A user/agent/model/compact line flushes the open draft and starts a new one.
  2. In-kind lines (continuations, blanks, tool activity) extend the draft.
  3. ``turn_end`` / ``compact_end`` flush without starting a new draft.
  4. End of input flushes once more.

Flushing joins and trims the draft's lines; an all-blank draft is dropped,
so no emitted message has empty text. ``started`` stays False until the
first real turn, which keeps pre-turn terminal chrome out of the output.

The assembler holds state for one pass only. A pane snapshot is a full
screen, not an incremental log, so the whole buffer is re-parsed on every
update and parse_messages() is a pure function of (buffer, adapter).

Key function: parse_messages(). Key classes: MessageAssembler, Message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .adapters import base as kinds
from .adapters.base import ToolAdapter
from .ansi import strip_markers
from .classifier import ClassifiedLine, classify_buffer

# Message roles
ROLE_USER = "user"
ROLE_AGENT = "agent"
ROLE_SYSTEM = "system"
ROLE_MODEL = "model"
ROLE_MODEL_DONE = "model_done"
ROLE_COMPACT = "compact"


@dataclass(frozen=True)
class Message:
    """A finished chat message."""

    role: str
    text: str
    raw_text: str  # Escapes kept for styled rendering


@dataclass(frozen=True)
class ParseResult:
    """Output of one assembly pass."""

    messages: list[Message] = field(default_factory=list)
    is_thinking: bool = False


@dataclass
class _Draft:
    role: str
    lines: list[str] = field(default_factory=list)
    raw_lines: list[str] = field(default_factory=list)

    def append(self, line: str, raw_line: str) -> None:
        self.lines.append(line)
        self.raw_lines.append(strip_markers(raw_line))


class MessageAssembler:
    """Turns a classified line stream into messages plus a thinking flag."""

    def __init__(self) -> None:
        self.messages: list[Message] = []
        self.is_thinking = False
        self.started = False
        self._current: _Draft | None = None

    def _flush(self) -> None:
        draft = self._current
        self._current = None
        if draft is None or not any(line.strip() for line in draft.lines):
            return
        self.messages.append(
            Message(
                role=draft.role,
                text="\n".join(draft.lines).strip(),
                raw_text="\n".join(draft.raw_lines).strip(),
            )
        )

    def _begin(self, role: str) -> _Draft:
        self.is_thinking = False
        self.started = True
        self._flush()
        self._current = _Draft(role)
        return self._current

    def feed(self, item: ClassifiedLine) -> None:
        cls = item.classification
        kind = cls.kind
        current = self._current

        if kind == kinds.SKIP:
            return
        if kind == kinds.THINKING:
            self.is_thinking = True
        elif kind == kinds.TURN_END:
            self.is_thinking = False
            self._flush()
        elif kind == kinds.COMPACT_START:
            self._begin(ROLE_COMPACT)
        elif kind == kinds.COMPACT_END:
            self._flush()
        elif kind == kinds.MODEL_HEADER:
            self._begin(ROLE_MODEL)
        elif kind == kinds.MODEL_CONFIRMED:
            draft = self._begin(ROLE_MODEL_DONE)
            # A confirmed choice makes the selector card moot
            while self.messages and self.messages[-1].role == ROLE_MODEL:
                self.messages.pop()
            draft.append(cls.text or "", item.raw_line)
            self._flush()
        elif kind in (kinds.MODEL_SELECTED, kinds.MODEL_ITEM):
            if current is not None and current.role == ROLE_MODEL:
                current.append(cls.text or "", item.raw_line)
        elif kind == kinds.USER:
            self._begin(ROLE_USER).append(cls.text or "", cls.raw_text or "")
        elif kind == kinds.AGENT:
            draft = self._begin(ROLE_AGENT)
            if cls.text:
                draft.append(cls.text, cls.raw_text or "")
        elif kind == kinds.EMPTY:
            if not self.started:
                return
            if current is not None and current.role == ROLE_USER:
                self._flush()
            elif current is not None:
                current.append("", "")
        elif kind == kinds.TOOL:
            self.is_thinking = False
            if not self.started:
                return
            if current is None or current.role != ROLE_AGENT:
                self._flush()
                current = self._current = _Draft(ROLE_AGENT)
            current.append(item.line, item.raw_line)
        elif kind == kinds.TOOL_RESULT:
            if current is not None and current.role == ROLE_AGENT:
                current.append(item.line, item.raw_line)
        else:
            # continuation
            self.is_thinking = False
            if not self.started:
                return
            if current is None:
                current = self._current = _Draft(ROLE_SYSTEM)
            current.append(item.line, item.raw_line)

    def feed_all(self, items: Iterable[ClassifiedLine]) -> None:
        for item in items:
            self.feed(item)

    def finish(self) -> ParseResult:
        self._flush()
        return ParseResult(messages=list(self.messages), is_thinking=self.is_thinking)


def parse_messages(raw: str, adapter: ToolAdapter | None) -> ParseResult:
    """Parse a raw pane buffer into messages with the given adapter.

    Returns an empty result if there is no buffer or no adapter.
    """
    if not raw or adapter is None:
        return ParseResult()
    assembler = MessageAssembler()
    assembler.feed_all(classify_buffer(raw, adapter))
    return assembler.finish()
