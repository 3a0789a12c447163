"""Command-line front end for formatting and inspecting masked values."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Sequence, TypedDict

from .literals import insert_literals, remove_literals
from .mask_config import MaskConfigError, load_mask_config
from .presets import resolve_pattern
from .tokens import DEFAULT_PROMPT_CHAR, CompiledMask, MaskPatternError, compile_mask
from .transducer import UNBOUNDED, capacity, extract_raw, format_raw, is_complete


class ValuePayload(TypedDict):
    """Structured description of a value rendered through a mask."""

    pattern: str
    raw: str
    display: str
    complete: bool
    capacity: int | None


class TokenRecord(TypedDict):
    """Structured representation of one compiled token."""

    index: int
    kind: str
    character: str
    optional: bool


def _add_mask_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--mask",
        "-m",
        default=None,
        help="Mask pattern or preset name (e.g. phone_us)",
    )
    parser.add_argument(
        "--field",
        default=None,
        help="Take the mask from this field of --config",
    )
    parser.add_argument(
        "--prompt-char",
        default=None,
        help=f"Placeholder for unfilled slots (default {DEFAULT_PROMPT_CHAR!r})",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the mask CLI."""

    parser = argparse.ArgumentParser(prog="textmask", description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file describing masked fields",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit structured JSON instead of plain text",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    format_parser = commands.add_parser("format", help="Render a raw value")
    _add_mask_options(format_parser)
    format_parser.add_argument("value", help="Raw value to render")
    format_parser.add_argument(
        "--show-optional",
        action="store_true",
        help="Show prompts for unfilled optional slots",
    )

    extract_parser = commands.add_parser("extract", help="Recover a raw value")
    _add_mask_options(extract_parser)
    extract_parser.add_argument("value", help="Display text to parse")
    extract_parser.add_argument(
        "--include-literals",
        action="store_true",
        help="Keep matched literal characters in the output",
    )

    check_parser = commands.add_parser("check", help="Report whether a raw value is complete")
    _add_mask_options(check_parser)
    check_parser.add_argument("value", help="Raw value to check")

    insert_parser = commands.add_parser(
        "insert-literals", help="Interleave literals without validation"
    )
    _add_mask_options(insert_parser)
    insert_parser.add_argument("value", help="Input-only text")

    remove_parser = commands.add_parser(
        "remove-literals", help="Strip literals without validation"
    )
    _add_mask_options(remove_parser)
    remove_parser.add_argument("value", help="Text containing mask literals")

    tokens_parser = commands.add_parser("tokens", help="List the compiled tokens")
    _add_mask_options(tokens_parser)

    return parser.parse_args(argv)


def resolve_mask(args: argparse.Namespace) -> CompiledMask:
    """Compile the mask selected by ``--mask`` or ``--config``/``--field``."""

    prompt_char = args.prompt_char
    if args.field is not None:
        if args.config is None:
            raise SystemExit("--field requires --config")
        if not args.config.exists():
            raise SystemExit(f"configuration file not found: {args.config}")
        try:
            spec = load_mask_config(args.config).require_field(args.field)
        except MaskConfigError as exc:
            raise SystemExit(f"invalid configuration: {exc}") from exc
        except KeyError as exc:
            raise SystemExit(str(exc.args[0])) from exc
        pattern = spec.pattern
        if prompt_char is None:
            prompt_char = spec.prompt_char
    elif args.mask is not None:
        pattern = resolve_pattern(args.mask)
    else:
        raise SystemExit("either --mask or --field is required")

    try:
        return compile_mask(
            pattern, prompt_char if prompt_char is not None else DEFAULT_PROMPT_CHAR
        )
    except MaskPatternError as exc:
        raise SystemExit(str(exc)) from exc


def build_value_payload(mask: CompiledMask, raw: str, display: str) -> ValuePayload:
    limit = capacity(mask)
    return {
        "pattern": mask.pattern,
        "raw": raw,
        "display": display,
        "complete": is_complete(mask, raw),
        "capacity": None if limit == UNBOUNDED else limit,
    }


def render_tokens(mask: CompiledMask) -> List[TokenRecord]:
    return [
        {
            "index": index,
            "kind": token.kind.value,
            "character": token.character,
            "optional": token.is_optional,
        }
        for index, token in enumerate(mask.tokens)
    ]


def _run_format(args: argparse.Namespace, mask: CompiledMask) -> int:
    display = format_raw(mask, args.value, args.show_optional)
    raw = extract_raw(mask, display)
    _emit(args, build_value_payload(mask, raw, display), display)
    return 0


def _run_extract(args: argparse.Namespace, mask: CompiledMask) -> int:
    raw = extract_raw(mask, args.value, include_literals=args.include_literals)
    payload = build_value_payload(mask, raw, args.value)
    if args.include_literals:
        payload["complete"] = is_complete(mask, extract_raw(mask, args.value))
    _emit(args, payload, raw)
    return 0


def _run_check(args: argparse.Namespace, mask: CompiledMask) -> int:
    payload = build_value_payload(mask, args.value, format_raw(mask, args.value))
    _emit(args, payload, "complete" if payload["complete"] else "incomplete")
    return 0 if payload["complete"] else 1


def _run_insert(args: argparse.Namespace, mask: CompiledMask) -> int:
    output = insert_literals(mask, args.value)
    _emit(args, {"input": args.value, "output": output}, output)
    return 0


def _run_remove(args: argparse.Namespace, mask: CompiledMask) -> int:
    output = remove_literals(mask, args.value)
    _emit(args, {"input": args.value, "output": output}, output)
    return 0


def _run_tokens(args: argparse.Namespace, mask: CompiledMask) -> int:
    records = render_tokens(mask)
    lines = [
        f"{record['index']:>3} {record['kind']:<22} {record['character']!r}"
        for record in records
    ]
    _emit(args, {"pattern": mask.pattern, "tokens": records}, "\n".join(lines))
    return 0


def _emit(args: argparse.Namespace, payload: object, text: str) -> None:
    if args.json:
        print(json.dumps(payload))
    else:
        print(text)


COMMANDS: Dict[str, Callable[[argparse.Namespace, CompiledMask], int]] = {
    "format": _run_format,
    "extract": _run_extract,
    "check": _run_check,
    "insert-literals": _run_insert,
    "remove-literals": _run_remove,
    "tokens": _run_tokens,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``textmask`` commands."""

    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    mask = resolve_mask(args)
    return COMMANDS[args.command](args, mask)


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
