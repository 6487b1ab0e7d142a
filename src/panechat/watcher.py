"""Pane watcher — polls panes and emits transcripts when they change.

Runs an async polling loop that:
  1. Captures every watched target through a PaneSource.
  2. Skips targets whose buffer is identical to the previous capture.
  3. Detects the adapter once per target (retrying while none matches) and
     keeps it until redetect() is called.
  4. Builds a PaneTranscript and hands a PaneUpdate to the callback.

The per-target memo (last buffer, adapter) lives here, in the caller of
the engine; build_transcript() itself keeps no state between calls.

Key classes: PaneWatcher, PaneUpdate.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Awaitable, Callable

from .adapters import ToolAdapter, default_adapters, detect_adapter
from .sources import PaneSource
from .transcript import PaneTranscript, build_transcript

logger = logging.getLogger(__name__)


@dataclass
class PaneUpdate:
    """A changed pane and its new transcript."""

    target: str
    transcript: PaneTranscript


@dataclass
class _TargetState:
    last_raw: str | None = None
    adapter: ToolAdapter | None = None


class PaneWatcher:
    """Polls a set of panes and reports changed transcripts."""

    def __init__(
        self,
        source: PaneSource,
        targets: Sequence[str] = (),
        poll_interval: float | None = None,
        adapters: Sequence[ToolAdapter] | None = None,
    ) -> None:
        if poll_interval is None or adapters is None:
            from .config import config

            if poll_interval is None:
                poll_interval = config.poll_interval
            if adapters is None:
                adapters = default_adapters(config.idle_tail_chars)
        self.source = source
        self.poll_interval = poll_interval
        self.adapters = adapters
        self._targets: dict[str, _TargetState] = {t: _TargetState() for t in targets}
        self._running = False
        self._task: asyncio.Task | None = None
        self._callback: Callable[[PaneUpdate], Awaitable[None]] | None = None

    @property
    def targets(self) -> list[str]:
        return list(self._targets)

    def set_callback(self, callback: Callable[[PaneUpdate], Awaitable[None]]) -> None:
        self._callback = callback

    def add_target(self, target: str) -> None:
        self._targets.setdefault(target, _TargetState())

    def remove_target(self, target: str) -> None:
        self._targets.pop(target, None)

    def redetect(self, target: str) -> None:
        """Forget the target's adapter and last buffer so the next poll re-detects."""
        if target in self._targets:
            self._targets[target] = _TargetState()

    def adapter_for(self, target: str) -> ToolAdapter | None:
        state = self._targets.get(target)
        return state.adapter if state else None

    async def _poll_target(self, target: str, state: _TargetState) -> PaneUpdate | None:
        raw = await self.source.capture(target)
        if raw is None or raw == state.last_raw:
            return None
        state.last_raw = raw

        if state.adapter is None:
            hint = await self.source.command_hint(target)
            state.adapter = detect_adapter(raw, hint, self.adapters)
            if state.adapter is not None:
                logger.info("Pane %s: using adapter %s", target, state.adapter.name)

        transcript = build_transcript(raw, adapter=state.adapter) if state.adapter else PaneTranscript()
        return PaneUpdate(target=target, transcript=transcript)

    async def poll_once(self) -> list[PaneUpdate]:
        """Run one polling cycle and return the updates for changed panes."""
        updates = []
        for target, state in list(self._targets.items()):
            update = await self._poll_target(target, state)
            if update is not None:
                updates.append(update)
        return updates

    async def _watch_loop(self) -> None:
        logger.info(
            "Pane watcher started for %d target(s), polling every %ss",
            len(self._targets), self.poll_interval,
        )
        while self._running:
            try:
                for update in await self.poll_once():
                    logger.debug(
                        "[%s] %d message(s), thinking=%s",
                        update.target,
                        len(update.transcript.messages),
                        update.transcript.is_thinking,
                    )
                    if self._callback:
                        try:
                            await self._callback(update)
                        except Exception as e:
                            logger.error("Update callback error: %s", e)
            except Exception as e:
                logger.error("Watch loop error: %s", e)

            await asyncio.sleep(self.poll_interval)

        logger.info("Pane watcher stopped")

    def start(self) -> None:
        if self._running:
            logger.warning("Watcher already running")
            return
        self._running = True
        self._task = asyncio.create_task(self._watch_loop())

    def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            self._task = None

    async def run(self) -> None:
        """Run the polling loop in the current task until stop() is called."""
        self._running = True
        await self._watch_loop()
