"""Pane source package — where raw pane buffers come from.

Re-exports the core types and provides a factory:
  - PaneSource: ABC for all sources.
  - PaneInfo: pane description dataclass.
  - create_source(): TmuxPaneSource, or FilePaneSource when
    PANECHAT_SNAPSHOT_DIR is configured.
"""

from .base import PaneInfo, PaneSource

__all__ = ["PaneInfo", "PaneSource", "create_source"]


def create_source() -> PaneSource:
    """Build the pane source selected by configuration."""
    from ..config import config

    if config.snapshot_dir is not None:
        from .file import FilePaneSource

        return FilePaneSource(config.snapshot_dir)

    from .tmux import TmuxPaneSource

    return TmuxPaneSource(socket_path=config.tmux_socket, history_lines=config.history_lines)
