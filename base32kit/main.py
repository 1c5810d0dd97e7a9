"""Command line front end: ``python -m base32kit {encode,decode}``."""

import argparse
import os as _os_module
import pathlib
import sys

from .codec import (
    BASE32_RFC4648_ALPHABET,
    BASE32_RFC4648_HEX_ALPHABET,
    make_encoding,
)
from .version import __version__


def _cli_plain_mode() -> bool:
    if _os_module.getenv("BASE32KIT_CLI_PLAIN"):
        return True
    if _os_module.getenv("NO_COLOR"):
        return True
    style = (_os_module.getenv("BASE32KIT_CLI_STYLE") or "").strip().lower()
    return style in {"plain", "boring", "0", "false", "off"}


class _CliTheme:
    def __init__(self, plain: bool):
        self.plain = plain
        self.reset = "" if plain else "\033[0m"
        self.bold = "" if plain else "\033[1m"
        self.red = "" if plain else "\033[31m"

    def _wrap(self, msg: str, color: str, emoji: str | None = None) -> str:
        if self.plain:
            return msg
        prefix = f"{emoji} " if emoji else ""
        return f"{self.bold}{color}{prefix}{msg}{self.reset}"

    def err(self, msg: str) -> str:
        return self._wrap(msg, self.red, "❌")


def _parse_alias(item: str) -> tuple[str, str]:
    if len(item) < 3 or item[1] != "=":
        raise argparse.ArgumentTypeError(f"alias must look like K=V, got {item!r}")
    return item[0], item[2:]


def _read_input(args, binary: bool):
    if args.text is not None and args.input is not None:
        raise ValueError("give either TEXT or --input, not both")
    if args.text is not None:
        return args.text.encode("utf-8") if binary else args.text
    if args.input in (None, "-"):
        return sys.stdin.buffer.read() if binary else sys.stdin.read()
    path = pathlib.Path(args.input)
    return path.read_bytes() if binary else path.read_text(encoding="utf-8")


def _write_output(path, payload) -> None:
    if path in (None, "-"):
        if isinstance(payload, str):
            sys.stdout.write(payload + "\n")
            sys.stdout.flush()
        else:
            sys.stdout.buffer.write(payload)
            sys.stdout.buffer.flush()
        return
    out_path = pathlib.Path(path)
    if isinstance(payload, str):
        out_path.write_text(payload, encoding="utf-8")
    else:
        out_path.write_bytes(payload)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="base32kit", description="Configurable Base32 codec")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("text", nargs="?", default=None, help="Input given inline (default: stdin)")
    common.add_argument("-i", "--input", default=None, help="Input file path ('-' for stdin)")
    common.add_argument("-o", "--output", default=None, help="Output file path (default: stdout)")
    alphabet = common.add_mutually_exclusive_group()
    alphabet.add_argument(
        "--hex",
        dest="alphabet",
        action="store_const",
        const=BASE32_RFC4648_HEX_ALPHABET,
        help="Use the RFC 4648 extended-hex alphabet",
    )
    alphabet.add_argument("--alphabet", dest="alphabet", help="Custom 32-character alphabet")
    common.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Do not fold the alphabet to upper case when decoding",
    )
    common.add_argument(
        "--alias",
        dest="aliases",
        action="append",
        type=_parse_alias,
        default=[],
        metavar="K=V",
        help="Accept K as an alias for alphabet symbol V (repeatable)",
    )
    common.add_argument("--padding", default="=", help="Padding character (default '=')")
    common.set_defaults(alphabet=BASE32_RFC4648_ALPHABET)

    enc = subparsers.add_parser("encode", parents=[common], help="Encode bytes to Base32 text")
    enc.add_argument("--pad", action="store_true", help="Pad the output to a multiple of 8 characters")

    subparsers.add_parser("decode", parents=[common], help="Decode Base32 text back to bytes")

    return parser


def cli(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    theme = _CliTheme(_cli_plain_mode())

    try:
        encoding = make_encoding(
            args.alphabet,
            case_sensitive=args.case_sensitive,
            alias_table=dict(args.aliases) or None,
            padding=args.padding,
        )

        if args.command == "encode":
            payload = encoding.encode(_read_input(args, binary=True), args.pad)
        else:
            payload = encoding.decode(_read_input(args, binary=False).strip())
        _write_output(args.output, payload)
        return 0
    except (OSError, ValueError) as exc:
        print(theme.err(f"{args.command} failed: {exc}"), file=sys.stderr)
        return 1


def main(argv=None) -> int:
    try:
        return cli(argv)
    except KeyboardInterrupt:
        print("Exiting...")
        return 130


__all__ = ["build_arg_parser", "cli", "main"]


if __name__ == "__main__":
    raise SystemExit(main())
