"""Tests for panechat.ansi — escape stripping and sentinel markers."""

from panechat.adapters import KiroCliAdapter
from panechat.ansi import AGENT_MARKER, USER_MARKER, strip_ansi, strip_markers

from conftest import PANE_CONVERSATION, PANE_MODEL_SELECTION, agent_line, user_line


class TestStripAnsi:
    def test_plain_text_unchanged(self):
        assert strip_ansi("hello world") == "hello world"

    def test_sgr_removed(self):
        assert strip_ansi("\x1b[1mbold\x1b[0m and \x1b[38;5;141mcolour\x1b[39m") == "bold and colour"

    def test_private_mode_removed(self):
        assert strip_ansi("\x1b[?25lhidden cursor\x1b[?25h") == "hidden cursor"

    def test_osc_title_removed(self):
        assert strip_ansi("\x1b]0;kiro-cli\x07prompt") == "prompt"

    def test_truncated_csi_passed_through(self):
        assert strip_ansi("text \x1b[38;5") == "text \x1b[38;5"

    def test_unterminated_osc_passed_through(self):
        text = "\x1b]0;title without bell \x1b[1mbold\x1b[0m"
        assert strip_ansi(text) == "\x1b]0;title without bell bold"

    def test_markers_survive(self):
        text = f"{AGENT_MARKER}> \x1b[39mhello"
        assert strip_ansi(text) == f"{AGENT_MARKER}> hello"

    def test_empty(self):
        assert strip_ansi("") == ""


class TestStripMarkers:
    def test_removes_both_markers(self):
        assert strip_markers(f"a{AGENT_MARKER}b{USER_MARKER}c") == "abc"

    def test_no_markers_unchanged(self):
        assert strip_markers("plain") == "plain"


class TestMarkerRoundTrip:
    def test_agent_and_user_lines(self):
        adapter = KiroCliAdapter()
        raw = "\n".join([user_line("hello"), agent_line("Hi there"), "plain"])
        marked = adapter.insert_markers(raw)
        assert AGENT_MARKER in marked
        assert USER_MARKER in marked
        assert strip_markers(strip_ansi(marked)) == strip_ansi(raw)

    def test_realistic_panes(self):
        adapter = KiroCliAdapter()
        for raw in (PANE_CONVERSATION, PANE_MODEL_SELECTION):
            assert strip_markers(strip_ansi(adapter.insert_markers(raw))) == strip_ansi(raw)

    def test_glyph_colour_without_glyph_untouched(self):
        adapter = KiroCliAdapter()
        raw = "\x1b[38;5;141mpurple text\x1b[39m"
        assert adapter.insert_markers(raw) == raw
