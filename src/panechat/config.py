"""Application configuration — reads env vars and exposes a singleton.

Loads heuristic thresholds (idle tail window), capture depth, polling
interval, tmux socket and snapshot directory from environment variables
(with .env support). Nothing is required; every value has a default.
The engine itself (adapters, assembler) never reads this module at parse
time: values are passed into adapters when they are constructed.

Key class: Config (singleton instantiated as `config`).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        load_dotenv()

        # How much of the buffer tail the idle check looks at
        self.idle_tail_chars: int = _positive_int("PANECHAT_IDLE_TAIL_CHARS", 500)

        # Scrollback depth for tmux capture-pane -S -N
        self.history_lines: int = _positive_int("PANECHAT_HISTORY_LINES", 200)

        # Watcher polling interval in seconds
        self.poll_interval: float = _positive_float("PANECHAT_POLL_INTERVAL", 0.2)

        # Optional tmux server socket (tmux -S)
        self.tmux_socket: str | None = os.getenv("TMUX_SOCKET") or None

        # Directory of snapshot files for FilePaneSource
        snapshot_dir = os.getenv("PANECHAT_SNAPSHOT_DIR", "")
        self.snapshot_dir: Path | None = Path(snapshot_dir).expanduser() if snapshot_dir else None

        self.debug: bool = os.getenv("PANECHAT_DEBUG", "").lower() in ("1", "true", "yes")

        logger.debug(
            "Config initialized: idle_tail=%d, history=%d, poll=%.2fs, socket=%s, snapshots=%s",
            self.idle_tail_chars,
            self.history_lines,
            self.poll_interval,
            self.tmux_socket,
            self.snapshot_dir,
        )


config = Config()
