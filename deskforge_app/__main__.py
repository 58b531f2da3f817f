"""CLI entry point for the DeskForge application."""

from __future__ import annotations

import argparse
import curses
import sys
from typing import Optional, Sequence

from . import __version__
from .app import FormSession
from .commands import launcher_exists, list_launchers, remove_launcher
from .errors import DeskforgeError, LauncherExistsError, LauncherNotFoundError
from .log import setup_logging
from .paths import applications_dir, ensure_applications_dir, normalize_desktop_name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskforge",
        usage="deskforge [COMMANDS] [OPTIONS]",
        description="DeskForge - A launcher creation tool",
    )
    commands = parser.add_mutually_exclusive_group()
    commands.add_argument(
        "-n",
        "--new",
        nargs="?",
        const="",
        metavar="FILE_NAME",
        help="Create a new launcher (file name optional)",
    )
    commands.add_argument("-e", "--edit", metavar="FILE_NAME", help="Edit an existing launcher")
    commands.add_argument("-l", "--list", action="store_true", help="List all existing launchers")
    commands.add_argument("-r", "--remove", metavar="FILE_NAME", help="Remove an existing launcher")
    parser.add_argument(
        "--launcher",
        default="",
        metavar="PREFIX",
        help="Command placed in front of Exec, e.g. 'env GDK_BACKEND=x11'",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run_form(name: Optional[str], edit: bool, launcher: str) -> None:
    session = FormSession(name=name, edit=edit, launcher=launcher)
    curses.wrapper(session.run)


def _dispatch(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.list:
        list_launchers(applications_dir(), sys.stdout)
        return 0

    if args.remove is not None:
        remove_launcher(ensure_applications_dir(), args.remove)
        return 0

    if args.new is not None:
        name = args.new.strip()
        if name and launcher_exists(ensure_applications_dir(), name):
            raise LauncherExistsError(normalize_desktop_name(name))
        _run_form(name or None, False, args.launcher)
        return 0

    if args.edit is not None:
        if not launcher_exists(ensure_applications_dir(), args.edit):
            raise LauncherNotFoundError(normalize_desktop_name(args.edit))
        _run_form(args.edit, True, args.launcher)
        return 0

    print("[WARNING]: Wrong command!", file=sys.stderr)
    parser.print_help(sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run the requested command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    try:
        return _dispatch(args, parser)
    except DeskforgeError as exc:
        print(f"[ERROR]: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
