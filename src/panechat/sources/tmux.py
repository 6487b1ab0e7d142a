"""Tmux pane source.

Captures pane content with colours preserved and joined wrapped lines
(``tmux capture-pane -p -e -J -S -N``) through an asyncio subprocess, and
uses libtmux for pane discovery and the current-command hint. Blocking
libtmux calls are wrapped in asyncio.to_thread().

Key class: TmuxPaneSource(PaneSource).
"""

from __future__ import annotations

import asyncio
import logging

import libtmux

from .base import PaneInfo, PaneSource

logger = logging.getLogger(__name__)


class TmuxPaneSource(PaneSource):
    """Reads panes from a tmux server."""

    def __init__(self, socket_path: str | None = None, history_lines: int = 200) -> None:
        self.socket_path = socket_path
        self.history_lines = history_lines
        self._server: libtmux.Server | None = None

    @property
    def server(self) -> libtmux.Server:
        """Get or create tmux server connection."""
        if self._server is None:
            if self.socket_path:
                self._server = libtmux.Server(socket_path=self.socket_path)
            else:
                self._server = libtmux.Server()
        return self._server

    def _tmux_args(self, *args: str) -> list[str]:
        base = ["tmux"]
        if self.socket_path:
            base += ["-S", self.socket_path]
        return base + list(args)

    async def capture(self, target: str) -> str | None:
        """Capture a pane with ANSI escapes and the last history_lines of scrollback."""
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._tmux_args(
                    "capture-pane", "-p", "-e", "-J",
                    "-S", f"-{self.history_lines}",
                    "-t", target,
                ),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            logger.error("Failed to run tmux for %s: %s", target, e)
            return None

        if proc.returncode != 0:
            logger.error(
                "Failed to capture pane %s: %s",
                target, stderr.decode("utf-8", errors="replace").strip(),
            )
            return None
        return stdout.decode("utf-8", errors="replace")

    async def command_hint(self, target: str) -> str:
        """Return the pane's foreground command (``#{pane_current_command}``)."""

        def _sync_command() -> str:
            try:
                result = self.server.cmd(
                    "display-message", "-t", target, "-p", "#{pane_current_command}",
                )
            except Exception as e:
                logger.debug("Error reading command of %s: %s", target, e)
                return ""
            if result.stderr:
                logger.debug("tmux display-message %s: %s", target, " ".join(result.stderr))
                return ""
            return (result.stdout[0] if result.stdout else "").strip()

        return await asyncio.to_thread(_sync_command)

    async def list_panes(self, session: str) -> list[PaneInfo]:
        """List all panes of a tmux session."""

        def _sync_list_panes() -> list[PaneInfo]:
            try:
                tmux_session = self.server.sessions.get(session_name=session)
            except Exception as e:
                logger.debug("Session %s not found: %s", session, e)
                return []
            if tmux_session is None:
                return []

            panes = []
            for pane in tmux_session.panes:
                try:
                    panes.append(
                        PaneInfo(
                            target=f"{session}:{pane.window_index}.{pane.pane_index}",
                            current_command=pane.pane_current_command or "",
                            width=int(pane.pane_width or 0),
                            height=int(pane.pane_height or 0),
                        )
                    )
                except (TypeError, ValueError) as e:
                    logger.debug("Error getting pane info: %s", e)
            return panes

        return await asyncio.to_thread(_sync_list_panes)
