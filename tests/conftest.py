"""Shared test fixtures and helpers for panechat test suite.

Provides builders for kiro-cli prompt lines (with the real 256-colour
prompt glyph escapes) and realistic pane capture constants for the
adapter, assembler and transcript tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

# ── Escape helpers ───────────────────────────────────────────────────────

AGENT_COLOR = "\x1b[38;5;141m"
USER_COLOR = "\x1b[38;5;93m"
RESET_FG = "\x1b[39m"
DIM = "\x1b[90m"
BOLD = "\x1b[1m"
RESET = "\x1b[0m"


def agent_line(text: str) -> str:
    """Build an agent reply line as kiro-cli renders it."""
    return f"{AGENT_COLOR}> {RESET_FG}{text}"


def user_line(text: str = "", pct: int = 42) -> str:
    """Build a user prompt line (``NN% > text``) as kiro-cli renders it."""
    return f"{pct}% {USER_COLOR}> {RESET_FG}{text}"


def pane(*lines: str) -> str:
    """Join pane lines the way tmux capture-pane prints them."""
    return "\n".join(lines) + "\n"


# ── Realistic pane capture constants ─────────────────────────────────────

PANE_CONVERSATION = pane(
    "✓ github loaded in 0.42 s",
    "○ Initializing MCP servers",
    "Welcome to Kiro CLI",
    "",
    user_line("hello there"),
    "",
    agent_line(f"Hi! {BOLD}How{RESET} can I help?"),
    "I can read files.",
    "▸ Credits: 0.02x • Time: 1s",
    "",
    user_line(),
)

PANE_TOOL_USE = pane(
    user_line("find config"),
    "",
    agent_line("Let me look."),
    "Reading file: src/config.py (using tool: read)",
    "✓ Successfully read 120 lines",
    " - Completed in 0.003s",
    "Here is the summary.",
    "▸ Credits: 0.05x • Time: 3s",
    "",
    user_line(pct=43),
)

PANE_THINKING = pane(
    user_line("explain the parser"),
    "",
    "⠙ Thinking...",
)

PANE_MODEL_SELECTION = pane(
    user_line("/model"),
    "",
    "Select model (esc to cancel):",
    agent_line("* claude-sonnet-4    1.30x credits"),
    "  claude-haiku-4         0.40x credits",
    "  auto                   1.00x credits",
    "Using claude-sonnet-4",
)

PANE_COMPACTED = pane(
    "✔ Conversation compacted",
    "════════════════════",
    "CONVERSATION SUMMARY",
    "We discussed config loading.",
    "════════════════════",
    "The conversation history has been replaced with this summary.",
)

PANE_AGENT_BUSY = pane(
    user_line("hi"),
    "",
    agent_line("Working on it"),
)

PANE_PLAIN_SHELL = pane(
    "user@host:~$ ls",
    "README.md  src  tests",
    "user@host:~$ ",
)


@pytest.fixture
def snapshot_dir(tmp_path: Path):
    """Factory fixture: write pane snapshot files into a directory."""

    def _create(files: dict[str, str]) -> Path:
        for name, content in files.items():
            (tmp_path / name).write_text(content, encoding="utf-8")
        return tmp_path

    return _create
