"""
vdsl command line: parse solver output and inspect the frames.

Usage:
  python -m vdsl out.txt                      # per-mode summary
  python -m vdsl out.txt --json               # full parse result as JSON
  python -m vdsl out.txt --errors             # every frame diagnostic
  python -m vdsl out.txt --layout default 3   # pixel layout of one frame
  solver < in.txt 2>&1 | python -m vdsl -     # read from stdin
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter

from dotenv import load_dotenv

from vdsl import load_source
from vdsl.config import settings
from vdsl.dsl.parser import parse
from vdsl.errors import SourceReadError
from vdsl.layout.config import LayoutConfig
from vdsl.layout.engine import layout_frame
from vdsl.models.frame import ParsedModes, dump_parsed_modes, ordered_modes

logger = logging.getLogger("vdsl")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vdsl",
        description="Parse $v visualization DSL output into frames",
    )
    parser.add_argument("source", help="DSL text file, or - for stdin")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--json", action="store_true", help="print the parse result as JSON")
    group.add_argument("--errors", action="store_true", help="print every frame error")
    group.add_argument(
        "--layout",
        nargs=2,
        metavar=("MODE", "INDEX"),
        help="print the pixel layout of one frame as JSON (negative INDEX counts from the end)",
    )
    return parser


def summarize(parsed: ParsedModes) -> str:
    lines = []
    for mode in ordered_modes(parsed):
        frames = parsed.get(mode, [])
        kinds = Counter(cmd.type for frame in frames for cmd in frame.commands)
        n_errors = sum(len(frame.errors) for frame in frames)
        detail = ", ".join(f"{kind}={n}" for kind, n in sorted(kinds.items()))
        lines.append(f"{mode}: {len(frames)} frame(s), {n_errors} error(s)" + (f" [{detail}]" if detail else ""))
    return "\n".join(lines)


def list_errors(parsed: ParsedModes) -> str:
    lines = [
        f"{mode}[{i}] {error}"
        for mode in ordered_modes(parsed)
        for i, frame in enumerate(parsed.get(mode, []))
        for error in frame.errors
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, settings.vdsl_log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    args = build_parser().parse_args(argv)
    logger.debug("vdsl (%s) reading %s", settings.vdsl_env, args.source)

    try:
        text = sys.stdin.read() if args.source == "-" else load_source(args.source)
    except SourceReadError as e:
        print(str(e), file=sys.stderr)
        return 1

    config = LayoutConfig.from_settings(settings)
    parsed = parse(text, config)

    if args.json:
        print(dump_parsed_modes(parsed, indent=2))
    elif args.errors:
        output = list_errors(parsed)
        if output:
            print(output)
    elif args.layout:
        mode, raw_index = args.layout
        frames = parsed.get(mode, [])
        try:
            frame = frames[int(raw_index)]
        except (ValueError, IndexError):
            print(f"No frame {raw_index} in mode '{mode}' ({len(frames)} frame(s))", file=sys.stderr)
            return 1
        print(layout_frame(frame, config).model_dump_json(by_alias=True, indent=2))
    else:
        print(summarize(parsed))
    return 0


if __name__ == "__main__":
    sys.exit(main())
