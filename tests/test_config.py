"""Tests for panechat.config — environment-driven settings."""

import sys
from pathlib import Path

import pytest

from panechat.config import Config

from conftest import PANE_CONVERSATION, user_line


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "PANECHAT_IDLE_TAIL_CHARS",
        "PANECHAT_HISTORY_LINES",
        "PANECHAT_POLL_INTERVAL",
        "TMUX_SOCKET",
        "PANECHAT_SNAPSHOT_DIR",
        "PANECHAT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("panechat.config.load_dotenv", lambda: None)


class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.idle_tail_chars == 500
        assert cfg.history_lines == 200
        assert cfg.poll_interval == 0.2
        assert cfg.tmux_socket is None
        assert cfg.snapshot_dir is None
        assert cfg.debug is False

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PANECHAT_IDLE_TAIL_CHARS", "800")
        monkeypatch.setenv("PANECHAT_POLL_INTERVAL", "1.5")
        monkeypatch.setenv("TMUX_SOCKET", "/tmp/tmux-1000/default")
        monkeypatch.setenv("PANECHAT_SNAPSHOT_DIR", "/var/lib/panes")
        monkeypatch.setenv("PANECHAT_DEBUG", "true")
        cfg = Config()
        assert cfg.idle_tail_chars == 800
        assert cfg.poll_interval == 1.5
        assert cfg.tmux_socket == "/tmp/tmux-1000/default"
        assert cfg.snapshot_dir == Path("/var/lib/panes")
        assert cfg.debug is True

    def test_non_numeric_rejected(self, monkeypatch):
        monkeypatch.setenv("PANECHAT_HISTORY_LINES", "lots")
        with pytest.raises(ValueError, match="PANECHAT_HISTORY_LINES"):
            Config()

    def test_non_positive_rejected(self, monkeypatch):
        monkeypatch.setenv("PANECHAT_POLL_INTERVAL", "0")
        with pytest.raises(ValueError, match="PANECHAT_POLL_INTERVAL"):
            Config()


# ── Configured adapters ──────────────────────────────────────────────────


class TestConfiguredAdapters:
    def test_default_registry_ignores_config(self, monkeypatch):
        from panechat.adapters import default_adapters

        monkeypatch.setattr("panechat.config.config.idle_tail_chars", 123)
        (adapter,) = default_adapters()
        assert adapter.idle_tail_chars == 500

    def test_explicit_tail(self):
        from panechat.adapters import default_adapters

        (adapter,) = default_adapters(123)
        assert adapter.idle_tail_chars == 123

    def test_engine_works_without_config(self, monkeypatch):
        # Broken env makes importing panechat.config fail; the engine must not care
        from panechat import build_transcript

        monkeypatch.setitem(sys.modules, "panechat.config", None)
        transcript = build_transcript(PANE_CONVERSATION)
        assert transcript.tool == "kiro-cli"
        assert transcript.waiting_for_input is True

    def test_watcher_uses_configured_tail(self, monkeypatch):
        from panechat.sources.file import FilePaneSource
        from panechat.watcher import PaneWatcher

        monkeypatch.setattr("panechat.config.config.idle_tail_chars", 77)
        watcher = PaneWatcher(FilePaneSource(Path(".")), ["w"], poll_interval=0.01)
        (adapter,) = watcher.adapters
        assert adapter.idle_tail_chars == 77

    def test_cli_uses_configured_tail(self, monkeypatch, tmp_path, capsys):
        from panechat.main import main

        # Prompt sits 30+ characters before the end of the buffer
        path = tmp_path / "pane.log"
        path.write_text(user_line() + "\n" + "x" * 40 + "\n", encoding="utf-8")
        monkeypatch.setattr("panechat.config.config.idle_tail_chars", 10)
        assert main(["render", str(path), "--command", "kiro-cli", "--json"]) == 0
        assert '"waiting_for_input": false' in capsys.readouterr().out
