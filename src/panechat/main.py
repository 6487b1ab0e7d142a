"""Application entry point — CLI for interpreting agent panes.

Subcommands:
  1. `panechat render [FILE]` — interpret a saved buffer (stdin by default).
  2. `panechat capture TARGET` — capture a pane once and print its transcript.
  3. `panechat panes SESSION` — list panes and their current commands.
  4. `panechat watch TARGET...` — poll panes and print changed transcripts.

Panes are read from tmux unless PANECHAT_SNAPSHOT_DIR points at a
directory of snapshot files.
"""

import argparse
import asyncio
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _configured_adapters():
    from .adapters import default_adapters
    from .config import config

    return default_adapters(config.idle_tail_chars)


def _print_transcript(transcript, as_json: bool, target: str = "") -> None:
    from .transcript import format_transcript

    if as_json:
        data = transcript.to_dict()
        if target:
            data["target"] = target
        print(json.dumps(data, ensure_ascii=False))
        return
    if target:
        print(f"=== {target} ===")
    print(format_transcript(transcript))


def _cmd_render(args: argparse.Namespace) -> int:
    from .transcript import build_transcript

    if args.file in (None, "-"):
        raw = sys.stdin.read()
    else:
        try:
            with open(args.file, encoding="utf-8", errors="replace") as f:
                raw = f.read()
        except OSError as e:
            print(f"Cannot read {args.file}: {e}", file=sys.stderr)
            return 1
    _print_transcript(build_transcript(raw, args.command, adapters=_configured_adapters()), args.json)
    return 0


async def _capture(target: str, command: str | None) -> tuple[str | None, str]:
    from .sources import create_source

    source = create_source()
    raw = await source.capture(target)
    hint = command if command is not None else await source.command_hint(target)
    return raw, hint


def _cmd_capture(args: argparse.Namespace) -> int:
    from .transcript import build_transcript

    raw, hint = asyncio.run(_capture(args.target, args.command))
    if raw is None:
        print(f"Failed to capture pane {args.target}", file=sys.stderr)
        return 1
    _print_transcript(build_transcript(raw, hint, adapters=_configured_adapters()), args.json)
    return 0


def _cmd_panes(args: argparse.Namespace) -> int:
    from .sources import create_source

    panes = asyncio.run(create_source().list_panes(args.session))
    for pane in panes:
        print(f"{pane.target}\t{pane.current_command}")
    return 0


async def _watch(targets: list[str], as_json: bool) -> None:
    from .sources import create_source
    from .watcher import PaneUpdate, PaneWatcher

    async def _on_update(update: PaneUpdate) -> None:
        _print_transcript(update.transcript, as_json, update.target)
        sys.stdout.flush()

    watcher = PaneWatcher(create_source(), targets)
    watcher.set_callback(_on_update)
    await watcher.run()


def _cmd_watch(args: argparse.Namespace) -> int:
    try:
        asyncio.run(_watch(args.targets, args.json))
    except KeyboardInterrupt:
        pass
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panechat",
        description="Render AI agent terminal panes as a chat transcript",
    )
    sub = parser.add_subparsers(dest="subcommand", required=True)

    render = sub.add_parser("render", help="Interpret a saved pane buffer")
    render.add_argument("file", nargs="?", help="Buffer file (default: stdin)")
    render.add_argument("--command", default="", help="Launch command hint")
    render.add_argument("--json", action="store_true", help="Print JSON")
    render.set_defaults(func=_cmd_render)

    capture = sub.add_parser("capture", help="Capture a pane once")
    capture.add_argument("target", help="Pane target, e.g. work:1.0")
    capture.add_argument("--command", default=None, help="Override the command hint")
    capture.add_argument("--json", action="store_true", help="Print JSON")
    capture.set_defaults(func=_cmd_capture)

    panes = sub.add_parser("panes", help="List panes of a session")
    panes.add_argument("session", help="Session name")
    panes.set_defaults(func=_cmd_panes)

    watch = sub.add_parser("watch", help="Print transcripts whenever panes change")
    watch.add_argument("targets", nargs="+", help="Pane targets")
    watch.add_argument("--json", action="store_true", help="Print JSON lines")
    watch.set_defaults(func=_cmd_watch)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.WARNING,
    )

    # Import after logging is configured: Config() validates env vars
    try:
        from .config import config
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if config.debug:
        logging.getLogger("panechat").setLevel(logging.DEBUG)
    logger.debug("Running %s", args.subcommand)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
