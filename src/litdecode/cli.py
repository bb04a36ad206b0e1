"""Command-line interface for litdecode."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from litdecode.debug import dump_outcome
from litdecode.decoder import DecoderConfig, LiteralDecoder, LiteralKind, Outcome, Status
from litdecode.source import decode_auto
from litdecode.values import FloatValue, IntegerValue, describe

logger = logging.getLogger(__name__)

CONFIG_NAME = "litdecode.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    lexemes: list[str]
    kind: LiteralKind | None  # None: classify each lexeme
    config: DecoderConfig
    json_output: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="litdecode",
        description="Decode literal lexemes into their values",
    )
    p.add_argument("lexemes", nargs="*", metavar="LEXEME", help="Literal lexeme to decode")
    p.add_argument(
        "-k",
        "--kind",
        choices=["auto"] + [k.value for k in LiteralKind],
        default="auto",
        help="Interpretation to request (default: classify each lexeme)",
    )
    p.add_argument(
        "-f",
        "--file",
        action="append",
        default=[],
        metavar="FILE",
        help="Read a lexeme from FILE (repeatable)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--no-wide-integers",
        action="store_true",
        default=None,
        help="Limit integers to 64 bits and reject u128/i128",
    )
    p.add_argument(
        "--pointer-width",
        type=int,
        choices=[16, 32, 64],
        default=None,
        help="Width of usize/isize (default: 64)",
    )
    p.add_argument(
        "--float-width",
        type=int,
        choices=[32, 64],
        default=None,
        help="Width of unsuffixed float literals (default: 64)",
    )
    p.add_argument("--json", action="store_true", help="Emit one JSON object per lexeme")
    p.add_argument("--debug", action="store_true", help="Dump decode details to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def read_lexeme_file(path: Path) -> str:
    """Read one lexeme from a file, dropping a single trailing line break."""
    text = path.read_text(encoding="utf-8")
    return text.removesuffix("\n").removesuffix("\r")


def resolve_options(args: argparse.Namespace, base_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir or Path("."))

    settings: dict[str, Any] = {}
    cfg_decoder = config.get("decoder")
    if isinstance(cfg_decoder, dict):
        for key, expected in (
            ("wide_integers", bool),
            ("pointer_width", int),
            ("default_int_type", str),
            ("default_float_width", int),
        ):
            if key in cfg_decoder:
                value = cfg_decoder[key]
                if not isinstance(value, expected):
                    raise argparse.ArgumentTypeError(
                        f"config: decoder.{key} must be {expected.__name__}, got {value!r}"
                    )
                settings[key] = value

    if args.no_wide_integers:
        settings["wide_integers"] = False
    if args.pointer_width is not None:
        settings["pointer_width"] = args.pointer_width
    if args.float_width is not None:
        settings["default_float_width"] = args.float_width

    lexemes = list(args.lexemes)
    lexemes.extend(read_lexeme_file(Path(p)) for p in args.file)
    if not lexemes:
        raise argparse.ArgumentTypeError("no lexemes given")

    return CliOptions(
        lexemes=lexemes,
        kind=None if args.kind == "auto" else LiteralKind(args.kind),
        config=DecoderConfig(**settings),
        json_output=args.json,
        debug=args.debug,
    )


def decode_lexeme(decoder: LiteralDecoder, lexeme: str, kind: LiteralKind | None) -> Outcome | None:
    """Decode one lexeme, classifying it first when no kind was requested."""
    if kind is None:
        return decode_auto(decoder, lexeme)
    return decoder.outcome(lexeme, kind)


def to_json(lexeme: str, outcome: Outcome | None) -> str:
    """Render one result as a JSON object."""
    record: dict[str, Any] = {"lexeme": lexeme}
    if outcome is None:
        record.update(kind=None, status="unclassified")
    else:
        record.update(kind=outcome.kind.value, status=outcome.status.value)
        if outcome.status is Status.OK:
            record["value"] = _json_value(outcome.value)
        elif outcome.error is not None:
            record["error"] = outcome.error.message
    return json.dumps(record, ensure_ascii=False)


def _json_value(value: object) -> Any:
    if isinstance(value, IntegerValue):
        return {"magnitude": value.magnitude, "type": value.type_name}
    if isinstance(value, FloatValue):
        return {"value": value.value, "type": value.type_name}
    if isinstance(value, bytes):
        return list(value)
    return value


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, ValueError, OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    decoder = LiteralDecoder(options.config)
    malformed = False
    undecoded = False

    for lexeme in options.lexemes:
        outcome = decode_lexeme(decoder, lexeme, options.kind)
        if options.debug and outcome is not None:
            dump_outcome(lexeme, outcome)

        if outcome is None:
            undecoded = True
        elif outcome.status is Status.MALFORMED:
            malformed = True
        elif outcome.status is Status.MISMATCH:
            undecoded = True

        if options.json_output:
            print(to_json(lexeme, outcome))
        elif outcome is None:
            print(f"error: cannot classify literal {lexeme!r}", file=sys.stderr)
        elif outcome.status is Status.MALFORMED and outcome.error is not None:
            print(outcome.error.format(), file=sys.stderr)
        elif outcome.status is Status.MISMATCH:
            print(f"error: {lexeme!r} is not a {outcome.kind.value} literal", file=sys.stderr)
        else:
            print(f"{outcome.kind.value}: {describe(outcome.value)}")

    logger.debug(f"decoded {len(options.lexemes)} lexeme(s)")
    if malformed:
        return 1
    if undecoded:
        return 2
    return 0
