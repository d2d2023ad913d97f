"""
Command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import autopass

from .config import AutoPassConfig, AutoPassError, GenerationOptions
from .history import HistoryStore, open_history
from .state import AppState, clear, generate
from .strength import score

logger = logging.getLogger(__name__)


def _format_strength(result) -> str:
    return f"{result.label} ({result.score}/100)"


def _open_history(args, config: AutoPassConfig) -> HistoryStore:
    return open_history(config, args.history_file, args.history_key_file)


def cmd_generate(args, config: AutoPassConfig) -> int:
    """generate one or more passwords"""
    state = AppState(
        mode="hint" if args.hint is not None else "random",
        length=args.length,
        options=GenerationOptions(
            uppercase=not args.no_uppercase,
            numbers=not args.no_numbers,
            symbols=not args.no_symbols,
        ),
        hint=args.hint or "",
        history=None if args.no_save else _open_history(args, config),
    )
    for _ in range(args.count):
        entry = generate(state)
        if args.show_strength:
            print(f"{entry.password}\t{_format_strength(entry.strength)}")
        else:
            print(entry.password)
    return 0


def cmd_score(args, config: AutoPassConfig) -> int:
    """score the strength of a password"""
    print(_format_strength(score(args.password)))
    return 0


def cmd_history(args, config: AutoPassConfig) -> int:
    """list, clear or export saved passwords"""
    store = _open_history(args, config)
    if args.action == "list":
        if not len(store):
            print("No passwords generated yet")
        for i, entry in enumerate(store.entries, 1):
            print(f"{i:>2}. {entry.password}  [{entry.mode}] {_format_strength(entry.strength)}")
    elif args.action == "clear":
        state = AppState(history=store)
        print("All passwords cleared" if clear(state) else "History is already empty")
    elif args.action == "export":
        target = store.export_to_file(args.directory)
        print(f"Passwords exported to {target}")
    return 0


def build_parser(config: AutoPassConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("autopass", description="random and hint-based password generator")
    parser.add_argument("--version", action="version", version=autopass.__version__)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--history-file", type=Path, default=None,
                        help="history file (default: per-user data directory)")
    parser.add_argument("--history-key-file", type=Path, default=None,
                        help="encrypt history with the Fernet key in this file (created if missing)")
    cmd = parser.add_subparsers(dest="command", required=True, title="available commands")

    gen = cmd.add_parser("generate", help=cmd_generate.__doc__)
    gen.add_argument("-l", "--length", type=int, default=config.default_length,
                     help=f"password length (default: {config.default_length})")
    gen.add_argument("--hint", default=None,
                     help="keep this text (whitespace removed) at the start of the password")
    gen.add_argument("--no-uppercase", action="store_true", help="no uppercase letters")
    gen.add_argument("--no-numbers", action="store_true", help="no digits")
    gen.add_argument("--no-symbols", action="store_true", help="no symbols")
    gen.add_argument("-n", "--count", type=int, default=1, help="how many passwords to generate")
    gen.add_argument("--no-save", action="store_true", help="do not record in history")
    gen.add_argument("-s", "--show-strength", action="store_true", help="print the strength next to each password")
    gen.set_defaults(handler=cmd_generate)

    sc = cmd.add_parser("score", help=cmd_score.__doc__)
    sc.add_argument("password")
    sc.set_defaults(handler=cmd_score)

    hist = cmd.add_parser("history", help=cmd_history.__doc__)
    hist.add_argument("action", choices=("list", "clear", "export"))
    hist.add_argument("directory", nargs="?", type=Path, default=Path("."),
                      help="target directory for export (default: current directory)")
    hist.set_defaults(handler=cmd_history)
    return parser


def main(argv=None) -> int:
    """
    Entry point for the ``autopass`` script and ``run_autopass.py``.
    """
    config = AutoPassConfig.from_env()
    args = build_parser(config).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args, config)
    except AutoPassError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
