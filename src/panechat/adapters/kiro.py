"""Kiro CLI adapter — textual conventions of the kiro-cli agent.

Parses pane content from a running kiro-cli session:
  - Prompt glyph colours: 256-colour 141 marks the agent's ``>``,
    256-colour 93 marks the user's ``>``. Both are rewritten into sentinel
    markers before stripping.
  - Line classification via RULES, an ordered table of guarded rules
    (order matters — first match wins; unmatched lines are continuations).
  - Status line ``NN% >`` (context usage percentage + idle prompt).
  - ``▸ Credits: ...`` ledger line closing every agent turn.

All kiro-cli text patterns live here. To follow a changed kiro-cli
version, edit the patterns / RULES below.

Key class: KiroCliAdapter(ToolAdapter).
"""

from __future__ import annotations

import re
from typing import Callable

from ..ansi import AGENT_MARKER, USER_MARKER, strip_ansi, strip_markers
from .base import (
    AGENT,
    COMPACT_END,
    COMPACT_START,
    CONTINUATION,
    EMPTY,
    MODEL_CONFIRMED,
    MODEL_HEADER,
    MODEL_ITEM,
    MODEL_SELECTED,
    SKIP,
    THINKING,
    TOOL,
    TOOL_RESULT,
    TURN_END,
    USER,
    Classification,
    StatusSnapshot,
    ToolAdapter,
)

DEFAULT_IDLE_TAIL_CHARS = 500

# ── Prompt glyph escapes ─────────────────────────────────────────────────

_AGENT_GLYPH_COLOR = "\x1b[38;5;141m"
_USER_GLYPH_COLOR = "\x1b[38;5;93m"

_RE_AGENT_GLYPH = re.compile(re.escape(_AGENT_GLYPH_COLOR) + r"(?=>)")
_RE_USER_GLYPH = re.compile(re.escape(_USER_GLYPH_COLOR) + r"(?=>)")

# Unanswered user prompt at the very end of the buffer (typed text allowed)
_RE_RAW_USER_PROMPT_TAIL = re.compile(
    re.escape(_USER_GLYPH_COLOR) + r">\s?(?:\x1b\[[\d;]*m)?\s*(?:\S.*)?\s*\Z"
)

# ── Text patterns ────────────────────────────────────────────────────────

_RE_IDLE_PROMPT_ANY = re.compile(r"(?<!\d)\d+%\s*(?:!\s*)?>")
_RE_IDLE_PROMPT = re.compile(r"^\d+%\s*(?:!\s*)?>")
_RE_IDLE_PROMPT_INPUT = re.compile(r"^\d+%\s*(?:!\s*)?>\s*(.*)")
_RE_PERCENTAGE = re.compile(r"^(\d+)%\s")

# Fixed-width prefix; searched on every line, so no nested quantifiers
_RE_CREDITS_COST = re.compile(r"\d\.\d+x\s*credits", re.IGNORECASE)

_SKIP_PATTERNS = (
    # Init glyphs; the braille frame is only a spinner when "Thinking" follows
    re.compile(r"^(?:○|⠋(?!\s*thinking))", re.IGNORECASE),
    re.compile(r"^kiro-cli$"),
    re.compile(r"^✓.*loaded in"),
    re.compile(r"^--More--$"),
    re.compile(r"^Warning:"),
    re.compile(r"^═{4,}"),
    re.compile(r"^CONVERSATION SUMMARY$"),
)

_RE_THINKING = re.compile(r"^[⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏]\s*Thinking", re.IGNORECASE)
_RE_COMPACT_START = re.compile(r"^✔\s*Conversation compacted")
_RE_COMPACT_END = re.compile(r"conversation history has been replaced")
_RE_MODEL_HEADER = re.compile(r"^Select model")
_RE_MODEL_CONFIRMED = re.compile(r"^Using\s+(\S.*)")
_RE_MODEL_SELECTED = re.compile(r"^>\s*\*?\s*\S.*credits", re.IGNORECASE)
_RE_TURN_END = re.compile(r"^▸\s*Credits:")

_RE_AFTER_USER_MARKER = re.compile(r"^.*" + re.escape(USER_MARKER) + r">?\s*")
_RE_AFTER_AGENT_MARKER = re.compile(r"^.*" + re.escape(AGENT_MARKER) + r">?\s*")
_RE_RAW_AFTER_USER_MARKER = re.compile(
    r"^.*" + re.escape(USER_MARKER) + r">?\s?(?:\x1b\[39m)?\s*"
)
_RE_RAW_AFTER_AGENT_MARKER = re.compile(
    r"^.*" + re.escape(AGENT_MARKER) + r">?\s?(?:\x1b\[39m)?\s*"
)

_RE_TOOL = (
    re.compile(r"\(using tool:"),
    re.compile(r"^(?:Searching|Reading|Looking up|Search |Found \d)"),
)
_RE_TOOL_RESULT = (
    re.compile(r"^[✓❗]"),
    re.compile(r"- Completed in"),
)


# ── Credit-cost checks ───────────────────────────────────────────────────


def _costed_entry(text: str, end: int | None = None) -> bool:
    """True for ``<word> ... N.NNx credits``: non-blank start, cost after it."""
    if not text or text[0].isspace():
        return False
    if end is None:
        end = len(text)
    return _RE_CREDITS_COST.search(text, 1, end) is not None


def _is_indented_model(line: str) -> bool:
    body = line.lstrip()
    return len(line) - len(body) >= 2 and _costed_entry(body)


def _is_selector_entry(text: str) -> bool:
    if text.startswith("*"):
        text = text[1:].lstrip()
    return _costed_entry(text)


def _is_model_candidate(text: str) -> bool:
    return text.endswith("..") and _costed_entry(text, len(text) - 2)


# ── Rules (order matters, first match wins) ───────────────────────────────

Rule = Callable[[str, str], "Classification | None"]


def _skip(trimmed: str, raw_line: str) -> Classification | None:
    if any(p.search(trimmed) for p in _SKIP_PATTERNS):
        return Classification(SKIP)
    return None


def _thinking(trimmed: str, raw_line: str) -> Classification | None:
    return Classification(THINKING) if _RE_THINKING.search(trimmed) else None


def _compact(trimmed: str, raw_line: str) -> Classification | None:
    if _RE_COMPACT_START.search(trimmed):
        return Classification(COMPACT_START)
    if _RE_COMPACT_END.search(trimmed):
        return Classification(COMPACT_END)
    return None


def _model_selector(trimmed: str, raw_line: str) -> Classification | None:
    if _RE_MODEL_HEADER.search(trimmed):
        return Classification(MODEL_HEADER)
    m = _RE_MODEL_CONFIRMED.match(trimmed)
    if m:
        return Classification(MODEL_CONFIRMED, text=strip_markers(m.group(1)).strip())
    if _RE_MODEL_SELECTED.search(trimmed):
        return Classification(MODEL_SELECTED, text=trimmed)
    # Indentation is only visible on the untrimmed line
    if AGENT_MARKER not in raw_line and USER_MARKER not in raw_line:
        if _is_indented_model(strip_ansi(raw_line)):
            return Classification(MODEL_ITEM, text="  " + trimmed)
    return None


def _turn_end(trimmed: str, raw_line: str) -> Classification | None:
    return Classification(TURN_END) if _RE_TURN_END.search(trimmed) else None


def _user_marked(trimmed: str, raw_line: str) -> Classification | None:
    if USER_MARKER not in trimmed:
        return None
    text = strip_markers(_RE_AFTER_USER_MARKER.sub("", trimmed, count=1)).strip()
    raw = strip_markers(_RE_RAW_AFTER_USER_MARKER.sub("", raw_line, count=1))
    # Empty prompt, or a hint echoed through the same glyph (starts coloured)
    if not text or raw.startswith("\x1b["):
        return Classification(SKIP)
    return Classification(USER, text=text, raw_text=raw)


def _agent_marked(trimmed: str, raw_line: str) -> Classification | None:
    if AGENT_MARKER not in trimmed:
        return None
    text = strip_markers(_RE_AFTER_AGENT_MARKER.sub("", trimmed, count=1)).strip()
    if _is_selector_entry(text):
        return Classification(MODEL_SELECTED, text="> " + text)
    raw = strip_markers(_RE_RAW_AFTER_AGENT_MARKER.sub("", raw_line, count=1))
    return Classification(AGENT, text=text, raw_text=raw)


def _user_fallback(trimmed: str, raw_line: str) -> Classification | None:
    m = _RE_IDLE_PROMPT_INPUT.match(trimmed)
    if not m:
        return None
    text = m.group(1).strip()
    if not text:
        return Classification(SKIP)
    return Classification(USER, text=text, raw_text=raw_line)


def _model_candidate(trimmed: str, raw_line: str) -> Classification | None:
    if _is_model_candidate(trimmed):
        return Classification(MODEL_ITEM, text="  " + trimmed)
    return None


def _empty(trimmed: str, raw_line: str) -> Classification | None:
    return None if trimmed else Classification(EMPTY)


def _tool(trimmed: str, raw_line: str) -> Classification | None:
    if any(p.search(trimmed) for p in _RE_TOOL):
        return Classification(TOOL)
    if any(p.search(trimmed) for p in _RE_TOOL_RESULT):
        return Classification(TOOL_RESULT)
    return None


RULES: tuple[Rule, ...] = (
    _skip,
    _thinking,
    _compact,
    _model_selector,
    _turn_end,
    _user_marked,
    _agent_marked,
    _user_fallback,
    _model_candidate,
    _empty,
    _tool,
)


class KiroCliAdapter(ToolAdapter):
    """Interprets panes running kiro-cli."""

    name = "kiro-cli"

    def __init__(self, idle_tail_chars: int = DEFAULT_IDLE_TAIL_CHARS) -> None:
        self.idle_tail_chars = idle_tail_chars

    def detect(self, raw: str, command: str = "") -> bool:
        if command and "kiro" in command.lower():
            return True
        return _RE_IDLE_PROMPT_ANY.search(strip_ansi(raw)) is not None

    def insert_markers(self, raw: str) -> str:
        """Replace the prompt glyph colour escapes with sentinel markers.

        Only the colour escape is replaced; the ``>`` glyph and everything
        after it stay, so stripping markers and escapes afterwards gives
        exactly the same text as stripping the original buffer.
        """
        if "\x1b[38;5;" not in raw:
            return raw
        marked = _RE_AGENT_GLYPH.sub(AGENT_MARKER, raw)
        return _RE_USER_GLYPH.sub(USER_MARKER, marked)

    def classify_line(self, trimmed: str, raw_line: str) -> Classification:
        for rule in RULES:
            result = rule(trimmed, raw_line)
            if result is not None:
                return result
        return Classification(CONTINUATION)

    def extract_status(self, raw: str) -> StatusSnapshot:
        """Find the last ``NN% `` indicator, scanning from the bottom up."""
        for line in reversed(strip_ansi(raw).split("\n")):
            m = _RE_PERCENTAGE.match(line.strip())
            if m:
                return StatusSnapshot(percentage=int(m.group(1)), tool=self.name)
        return StatusSnapshot(percentage=None, tool=self.name)

    def is_waiting_for_input(self, raw: str) -> bool:
        tail = raw[-self.idle_tail_chars:]
        if _RE_RAW_USER_PROMPT_TAIL.search(tail):
            return True
        lines = [line for line in strip_ansi(tail).split("\n") if line.strip()]
        if not lines:
            return False
        return _RE_IDLE_PROMPT.match(lines[-1].strip()) is not None
