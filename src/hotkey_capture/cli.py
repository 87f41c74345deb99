from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from .capture import CaptureSession, KeyDownEvent
from .logging_setup import configure_logging
from .shortcut.canonical import canonicalize, parse_combination, serialize
from .shortcut.config import BUILTIN_MESSAGES, CaptureConfig, load_config
from .shortcut.display import format_hotkey
from .shortcut.ir import RawModifiers

_FLAG_WORDS = {
    "ctrl": "control",
    "control": "control",
    "alt": "alt",
    "option": "alt",
    "shift": "shift",
    "meta": "meta",
    "cmd": "meta",
    "command": "meta",
}
_MODIFIER_KEYS = {"control": "Control", "alt": "Alt", "shift": "Shift", "meta": "Meta"}
_NAMED_KEYS = {"space": " ", "esc": "Escape", "escape": "Escape"}


def _load(path: Optional[str]) -> CaptureConfig:
    if path is None:
        return CaptureConfig()
    return load_config(Path(path))


def parse_key_line(line: str) -> KeyDownEvent:
    """Turn a demo input line such as ``ctrl+shift+k`` into a key-down event.

    A line of modifiers only simulates pressing the last of them.
    """

    flags: dict[str, bool] = {}
    key: Optional[str] = None
    last_modifier: Optional[str] = None
    for part in line.strip().split("+"):
        word = part.strip()
        flag = _FLAG_WORDS.get(word.lower())
        if flag is not None:
            flags[flag] = True
            last_modifier = flag
        elif word:
            key = _NAMED_KEYS.get(word.lower(), word)
        elif line.strip().endswith("+"):
            key = "+"
    if key is None and last_modifier is not None:
        key = _MODIFIER_KEYS[last_modifier]
    return KeyDownEvent(key=key, modifiers=RawModifiers(**flags))


def _cmd_canonicalize(args: argparse.Namespace, out: TextIO) -> int:
    modifiers = RawModifiers(control=args.ctrl, alt=args.alt, shift=args.shift, meta=args.meta)
    combination = canonicalize(modifiers, args.key)
    out.write(serialize(combination) + "\n")
    return 1 if combination.is_empty else 0


def _cmd_format(args: argparse.Namespace, out: TextIO) -> int:
    config = _load(args.config)
    apple = config.apple if args.apple is None else args.apple
    labels = BUILTIN_MESSAGES[args.locale] if args.locale else config.labels
    out.write(format_hotkey(args.canonical, apple=apple, space_label=labels.space_label) + "\n")
    return 0


def _cmd_normalize(args: argparse.Namespace, out: TextIO) -> int:
    try:
        combination = parse_combination(args.text)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    out.write(serialize(combination) + "\n")
    return 0


def _cmd_record(args: argparse.Namespace, out: TextIO, inp: TextIO) -> int:
    config = _load(args.config)

    def on_change(value: str) -> None:
        out.write(f"value: {value!r}\n")

    session = CaptureSession(config.default, on_change=on_change, config=config)
    out.write(f"display: {session.current_display_value()}\n")
    for raw in inp:
        line = raw.strip()
        if not line:
            continue
        command = line.lower()
        if command == "quit":
            break
        if command == "blur":
            session.handle_blur()
        elif command == "clear":
            session.clear()
        elif command == "start":
            session.start_recording()
        else:
            if not session.is_recording_active():
                session.start_recording()
            outcome = session.handle_key_down(parse_key_line(line))
            out.write(f"{outcome.value}\n")
        out.write(f"display: {session.current_display_value()}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hotkey-capture",
        description="Canonicalize and format hotkey combinations.",
    )
    parser.add_argument("--config", help="Capture config toml path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("canonicalize", help="Canonicalize raw modifier flags plus a key")
    p.add_argument("key", help="Key identifier as reported by the host (e.g. k, ' ', Shift)")
    p.add_argument("--ctrl", action="store_true")
    p.add_argument("--alt", action="store_true")
    p.add_argument("--shift", action="store_true")
    p.add_argument("--meta", action="store_true")

    p = sub.add_parser("format", help="Render a canonical string as a label")
    p.add_argument("canonical")
    p.add_argument("--apple", dest="apple", action="store_true", default=None)
    p.add_argument("--no-apple", dest="apple", action="store_false")
    p.add_argument("--locale", choices=sorted(BUILTIN_MESSAGES))

    p = sub.add_parser("normalize", help="Re-parse a combination into canonical form")
    p.add_argument("text")

    sub.add_parser("record", help="Interactive capture demo reading key lines from stdin")
    return parser


def main(
    argv: list[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stdin: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    out = stdout or sys.stdout

    if args.command == "canonicalize":
        return _cmd_canonicalize(args, out)
    if args.command == "format":
        return _cmd_format(args, out)
    if args.command == "normalize":
        return _cmd_normalize(args, out)
    return _cmd_record(args, out, stdin or sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())
