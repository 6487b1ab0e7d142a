"""ANSI normalization — strips terminal escapes from captured pane text.

Pane snapshots are captured with colours kept (``tmux capture-pane -e``), so
every line carries SGR/CSI noise and the occasional OSC title sequence.
Role information lives in some of those colours; adapters rewrite the
relevant escapes into sentinel markers before stripping (see
ToolAdapter.insert_markers), and the markers survive strip_ansi().

Key functions: strip_ansi(), strip_markers().
"""

from __future__ import annotations

import re

# Sentinel tokens. NUL-delimited so they never collide with pane text and
# are not whitespace (str.strip() keeps them).
AGENT_MARKER = "\x00AGENT\x00"
USER_MARKER = "\x00UPROMPT\x00"

# CSI: ESC [ params final-letter. OSC: ESC ] body BEL, where the body may not
# contain another ESC, so a truncated OSC stops at the next escape and the
# scan stays linear. Anything malformed is left in the text as-is.
_RE_ESCAPE = re.compile(r"\x1b\[[?0-9;]*[a-zA-Z]|\x1b\][^\x07\x1b]*\x07")
_RE_MARKER = re.compile(f"{re.escape(AGENT_MARKER)}|{re.escape(USER_MARKER)}")


def strip_ansi(text: str) -> str:
    """Remove CSI and OSC escape sequences, keeping sentinel markers."""
    if "\x1b" not in text:
        return text
    return _RE_ESCAPE.sub("", text)


def strip_markers(text: str) -> str:
    """Remove sentinel markers inserted by an adapter."""
    if "\x00" not in text:
        return text
    return _RE_MARKER.sub("", text)
