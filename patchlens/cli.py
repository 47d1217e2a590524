"""CLI entry point for patchlens.

Provides ``patchlens diff`` (run git in a repository) and ``patchlens parse``
(read a saved patch or stdin). Both share the output flags ``--json``,
``--stat`` and ``-L/--lines``.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import structlog

from patchlens.errors import PatchlensError
from patchlens.settings import settings

logger = structlog.get_logger(__name__)


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--json", action="store_true", help="Output as JSON")
    mode.add_argument("--stat", action="store_true", help="Show diffstat only")
    parser.add_argument(
        "-L", "--lines", metavar="RANGE", help="New-side line range (e.g. 10,20 or 10,+5)"
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of skipping file blocks with unreadable headers",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``patchlens`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="patchlens",
        description="Structured views of unified diffs",
    )
    sub = parser.add_subparsers(dest="command")

    # patchlens diff
    diff_parser = sub.add_parser("diff", help="Show changes in a git repository")
    diff_parser.add_argument("file", nargs="?", help="Limit the diff to one path")
    diff_parser.add_argument("-C", dest="directory", default=".", help="Repository directory")
    diff_parser.add_argument("-s", "--staged", action="store_true", help="Show staged changes")
    diff_parser.add_argument("-c", "--commit", metavar="HASH", help="Show changes in a commit")
    _add_output_options(diff_parser)

    # patchlens parse
    parse_parser = sub.add_parser("parse", help="Parse a patch file or stdin")
    parse_parser.add_argument("path", nargs="?", default="-", help="Patch file, '-' for stdin")
    _add_output_options(parse_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point (``patchlens`` command)."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command not in ("diff", "parse"):
        parser.print_help()
        sys.exit(1)

    # Load config from .env files before anything reads settings
    from patchlens.config import load_config
    from patchlens.logging import configure_logging

    load_config()
    configure_logging()

    try:
        raw = _read_from_git(args) if args.command == "diff" else _read_input(args.path)
        output = render_output(raw, args)
    except PatchlensError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    sys.stdout.write(output + "\n")


def _read_from_git(args: argparse.Namespace) -> str:
    """Handle ``patchlens diff``."""
    from patchlens.git import read_git_diff

    return read_git_diff(
        args.directory, staged=args.staged, commit=args.commit, path=args.file
    )


def _read_input(path: str) -> str:
    """Handle ``patchlens parse``."""
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise PatchlensError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def use_color(args: argparse.Namespace) -> bool:
    """Decide whether text views get ANSI colors."""
    if args.json or args.no_color:
        return False
    forced = settings.color()
    if forced is not None:
        return forced
    if "NO_COLOR" in os.environ:
        return False
    return sys.stdout.isatty()


def render_output(raw: str, args: argparse.Namespace) -> str:
    """Parse *raw* and render it the way *args* asks."""
    from patchlens.diff import parse_report
    from patchlens.filters import LineRange, filter_files
    from patchlens.render import render_full, render_json, render_stat

    # Validate the range before parsing so a typo fails fast.
    line_range = LineRange.parse(args.lines) if args.lines else None

    report = parse_report(raw)
    if report.warnings:
        if args.strict:
            raise PatchlensError("; ".join(report.warnings))
        for warning in report.warnings:
            logger.warning("Diff block skipped", detail=warning)

    files = list(report.files)
    if line_range is not None:
        files = filter_files(files, line_range)

    if args.json:
        return render_json(files)
    color = use_color(args)
    if args.stat:
        return render_stat(files, color=color)
    return render_full(files, color=color)


if __name__ == "__main__":
    main()
