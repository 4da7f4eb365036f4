#!/usr/bin/env python3
"""CLI entry point for mdview.

Render a markdown document as formatted terminal text, dump its event
stream, watch it for changes, and manage viewer settings.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import DEFAULT_SETTINGS_PATH, SettingsManager, ViewerSettings
from .consumer import BlockListSink, BlockLogSink
from .emitter import BlockEmitter
from .parser import iter_events, read_document, read_event_log, write_event_log
from .renderer import MalformedEventStreamError, render_events
from .theme import resolve_dark_mode
from .watcher import DocumentWatcher

logger = logging.getLogger(__name__)

COMMANDS = ("render", "events", "watch", "settings")

# Unreadable or non-UTF-8 input
READ_ERRORS = (OSError, UnicodeDecodeError)


# ---------------------------------------------------------------------------
# Helper Functions
# ---------------------------------------------------------------------------


def setup_logging(level: str) -> None:
    """Configure logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _resolve_dark_mode(args: argparse.Namespace, settings: ViewerSettings) -> bool:
    """Command-line theme flags win over the settings file."""
    if getattr(args, "dark", False):
        return True
    if getattr(args, "light", False):
        return False
    return resolve_dark_mode(settings.theme)


def _require_file(path: Path) -> bool:
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return False
    return True


def _read_failed(path: Path, error: Exception) -> int:
    print(f"Error: Cannot read {path}: {error}", file=sys.stderr)
    return 1


def _write_failed(path: Path, error: OSError) -> int:
    print(f"Error: Cannot write {path}: {error}", file=sys.stderr)
    return 1


# ---------------------------------------------------------------------------
# Command Implementations
# ---------------------------------------------------------------------------


def _render(args: argparse.Namespace, settings: ViewerSettings) -> int:
    """Render a document (or an event log) to stdout."""
    path: Path = args.file
    if not _require_file(path):
        return 1

    width = args.width or settings.width

    if args.raw or (settings.show_raw_markdown and not args.from_events):
        if args.from_events:
            print("Error: --raw needs a markdown file", file=sys.stderr)
            return 1
        try:
            source = read_document(path)
        except READ_ERRORS as e:
            return _read_failed(path, e)
        print(source, end="")
        return 0

    screen = BlockListSink()
    emitter = BlockEmitter()
    emitter.subscribe(screen)

    blocks_out = None
    if args.blocks_out is not None:
        try:
            blocks_out = open(args.blocks_out, "w", encoding="utf-8")
        except OSError as e:
            return _write_failed(args.blocks_out, e)
        emitter.subscribe(BlockLogSink(blocks_out))

    try:
        events = read_event_log(path) if args.from_events else iter_events(read_document(path))
        render_events(events, emitter, dark_mode=_resolve_dark_mode(args, settings))
    except MalformedEventStreamError as e:
        print(f"Error: Malformed event stream: {e}", file=sys.stderr)
        return 1
    except READ_ERRORS as e:
        return _read_failed(path, e)
    finally:
        if blocks_out is not None:
            blocks_out.close()

    print(screen.to_text(width))
    return 0


def _events(args: argparse.Namespace) -> int:
    """Dump the event stream of a markdown document as JSONL."""
    path: Path = args.file
    if not _require_file(path):
        return 1

    try:
        events = list(iter_events(read_document(path)))
    except READ_ERRORS as e:
        return _read_failed(path, e)

    if args.output is None:
        write_event_log(events, sys.stdout)
        return 0

    try:
        with open(args.output, "w", encoding="utf-8") as f:
            count = write_event_log(events, f)
    except OSError as e:
        return _write_failed(args.output, e)

    logger.info("event_log_written", extra={"output": str(args.output), "event_count": count})
    return 0


def _watch(args: argparse.Namespace, settings: ViewerSettings) -> int:
    """Re-render a document on every change until interrupted."""
    path: Path = args.file
    if not _require_file(path):
        return 1

    on_render = None
    if args.output is None:
        def on_render(text: str) -> None:
            print(text, flush=True)

    watcher = DocumentWatcher(
        path,
        args.output,
        dark_mode=_resolve_dark_mode(args, settings),
        width=args.width or settings.width,
        on_render=on_render,
    )

    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        logger.info("received_keyboard_interrupt")
        watcher.stop()
    except READ_ERRORS as e:
        return _read_failed(path, e)
    return 0


def _settings(args: argparse.Namespace, manager: SettingsManager) -> int:
    """Show or change persisted settings."""
    try:
        settings = manager.load()
    except (OSError, ValueError) as e:
        print(f"Error: Invalid settings file: {e}", file=sys.stderr)
        return 1

    if args.settings_command == "show":
        print(f"Settings file: {manager.settings_path}")
        for key, value in settings.to_dict().items():
            print(f"{key}: {value}")
        return 0

    if args.settings_command == "set":
        try:
            manager.set_value(args.key, args.value)
        except KeyError:
            print(f"Error: Unknown setting: {args.key}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid value for {args.key}: {e}", file=sys.stderr)
            return 1
        except OSError as e:
            return _write_failed(manager.settings_path, e)
        print(f"{args.key} = {args.value}")
        return 0

    print("Usage: mdview settings <show|set>", file=sys.stderr)
    return 1



# ---------------------------------------------------------------------------
# Argument Parser
# ---------------------------------------------------------------------------


def _add_theme_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--dark", action="store_true", help="Use the dark palette")
    group.add_argument("--light", action="store_true", help="Use the light palette")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        help="Output width in columns (default: from settings)",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdview",
        description="Render markdown documents as formatted terminal text",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=DEFAULT_SETTINGS_PATH,
        help=f"Path to settings.yaml (default: {DEFAULT_SETTINGS_PATH})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a markdown file")
    render_parser.add_argument("file", type=Path, help="Markdown file to render")
    _add_theme_options(render_parser)
    render_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the markdown source instead of rendering it",
    )
    render_parser.add_argument(
        "--from-events",
        action="store_true",
        help="Treat FILE as a JSONL event log instead of markdown",
    )
    render_parser.add_argument(
        "--blocks-out",
        type=Path,
        default=None,
        help="Also write the visual blocks as JSONL to this path",
    )

    events_parser = subparsers.add_parser("events", help="Dump the event stream as JSONL")
    events_parser.add_argument("file", type=Path, help="Markdown file to parse")
    events_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write to this path instead of stdout",
    )

    watch_parser = subparsers.add_parser("watch", help="Re-render a file whenever it changes")
    watch_parser.add_argument("file", type=Path, help="Markdown file to watch")
    watch_parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Write each rendering here instead of stdout",
    )
    _add_theme_options(watch_parser)

    settings_parser = subparsers.add_parser("settings", help="Show or change settings")
    settings_subparsers = settings_parser.add_subparsers(dest="settings_command")
    settings_subparsers.add_parser("show", help="Show current settings")
    set_parser = settings_subparsers.add_parser("set", help="Change one setting")
    set_parser.add_argument("key", choices=["theme", "show_raw_markdown", "width"])
    set_parser.add_argument("value", type=str)

    return parser


# ---------------------------------------------------------------------------
# Main Entry Point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Run the mdview CLI.

    Usage:
        mdview <file.md>                 # Render a file
        mdview render <file.md> --dark   # Explicit render
        mdview events <file.md>          # Dump events as JSONL
        mdview watch <file.md> [out.txt] # Live re-render
        mdview settings show|set         # Manage settings

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: mdview <file>
    if len(argv) == 1 and not argv[0].startswith("-") and argv[0] not in COMMANDS:
        argv = ["render", argv[0]]

    parser = _create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    manager = SettingsManager(args.settings)

    if args.command == "settings":
        return _settings(args, manager)

    try:
        settings = manager.load()
    except (OSError, ValueError) as e:
        print(f"Error: Invalid settings file: {e}", file=sys.stderr)
        return 1

    if args.command == "render":
        return _render(args, settings)
    if args.command == "events":
        return _events(args)
    if args.command == "watch":
        return _watch(args, settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
