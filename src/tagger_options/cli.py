"""Command line tool to inspect and convert tagger option files."""

import sys
import logging
import argparse

from .options.errors import TaggerOptionsError
from .options.text_format import format_text
from .utils.config import FORMATS, ConfigError, load_options, save_options
from .utils.logging_utils import LoggingError, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagger-options",
        description="Inspect and convert tagger option files",
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Also write log messages here"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log informational messages"
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Ignore TAGGER_<FIELD> environment overrides",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print options in text format")
    show.add_argument("input", help="Options file")
    show.add_argument("--from", dest="input_format", choices=FORMATS)
    show.add_argument(
        "--reverse-bytes",
        action="store_true",
        help="Binary input was written on a machine of the other endianness",
    )

    convert = subparsers.add_parser("convert", help="Convert between formats")
    convert.add_argument("input", help="Options file to read")
    convert.add_argument("output", help="Options file to write")
    convert.add_argument("--from", dest="input_format", choices=FORMATS)
    convert.add_argument("--to", dest="output_format", choices=FORMATS)
    convert.add_argument(
        "--reverse-bytes",
        action="store_true",
        help="Binary input was written on a machine of the other endianness",
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        logger = setup_logger(
            "tagger_options",
            log_file=args.log_file,
            level=logging.INFO if args.verbose else logging.WARNING,
        )
    except LoggingError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        options = load_options(
            args.input,
            fmt=args.input_format,
            reverse_bytes=args.reverse_bytes,
            apply_env=not args.no_env,
        )
        if args.command == "show":
            sys.stdout.write(format_text(options))
        else:
            save_options(options, args.output, fmt=args.output_format)
            logger.info(f"Converted {args.input} to {args.output}")
    except (TaggerOptionsError, ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
