"""Snapshot file pane source.

Each target names a file under a directory holding one raw pane snapshot
(for instance written by ``tmux capture-pane -e -p > dir/work.log`` from a
cron job or a remote host). The command hint comes from an optional
sibling ``<target>.cmd`` file. Files are read with aiofiles.

Key class: FilePaneSource(PaneSource).
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles

from .base import PaneInfo, PaneSource

logger = logging.getLogger(__name__)

_COMMAND_SUFFIX = ".cmd"


class FilePaneSource(PaneSource):
    """Reads pane snapshots from files in a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, target: str) -> Path:
        return self.directory / target

    async def _read(self, path: Path) -> str | None:
        try:
            async with aiofiles.open(path, "r", encoding="utf-8", errors="replace") as f:
                return await f.read()
        except OSError as e:
            logger.debug("Error reading %s: %s", path, e)
            return None

    async def capture(self, target: str) -> str | None:
        content = await self._read(self._path(target))
        if content is None:
            logger.error("Failed to read snapshot %s", self._path(target))
        return content

    async def command_hint(self, target: str) -> str:
        path = self._path(target + _COMMAND_SUFFIX)
        if not path.exists():
            return ""
        return (await self._read(path) or "").strip()

    async def list_panes(self, session: str) -> list[PaneInfo]:
        """List snapshot files; ``session`` is a glob prefix ("" for all)."""
        if not self.directory.is_dir():
            return []
        panes = []
        for path in sorted(self.directory.glob(f"{session}*")):
            if not path.is_file() or path.suffix == _COMMAND_SUFFIX:
                continue
            panes.append(
                PaneInfo(target=path.name, current_command=await self.command_hint(path.name))
            )
        return panes
