"""
=============================================================================
HTTPUTIL CLI ENTRY POINT
=============================================================================

Command-line access to the header and query string utilities.

=============================================================================
USAGE
=============================================================================

    # Parse a captured header block (file or stdin, LF or CRLF endings)
    httputil headers response.txt
    curl -sI https://example.com | httputil headers

    # Build a query string from a JSON object
    httputil build '{"q": "hello world", "tag": ["a", "b"]}'

    # Parse a URL's query, lists unless collapsed
    httputil query "http://x/?id=boo&another=wee&another=boo" --collapse id

    # Parse a URL's query, single values unless expected to repeat
    httputil query "http://x/?one=1&many=a&many=b" --collapsed-mode --array many

Results are printed as JSON. Malformed input prints "Error: ..." on
stderr and exits with status 1.

=============================================================================
"""

import argparse
import json
import logging
import re
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_LEVELS, UtilConfig
from .http import (
    FormatError,
    build_query_string,
    get_query_params,
    get_query_params_collapsed,
    parse_headers,
)


logger = logging.getLogger(__name__)

# A lone LF (not already part of a CRLF)
BARE_LF_PATTERN = re.compile(r"(?<!\r)\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httputil",
        description="Parse HTTP header blocks and build or parse URL query strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  httputil headers response.txt
  httputil build '{"param1": ["value", "another value"], "param3": false}'
  httputil query "http://x/?id=boo&another=wee" --collapse id
  httputil query "http://x/?multi=a&multi=b" --collapsed-mode --array multi
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: HTTPUTIL_LOG_LEVEL or WARNING)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httputil {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────
    # headers
    # ─────────────────────────────────────────────────────────────────────

    headers = commands.add_parser("headers", help="Parse a raw header block")
    headers.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="File holding the header block (default: stdin)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # build
    # ─────────────────────────────────────────────────────────────────────

    build = commands.add_parser("build", help="Build a query string from JSON")
    build.add_argument(
        "parameters",
        nargs="?",
        default=None,
        help="JSON object of parameters (default: read from stdin)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # query
    # ─────────────────────────────────────────────────────────────────────

    query = commands.add_parser("query", help="Parse the query string of a URL")
    query.add_argument("url", help="URL whose query component is parsed")
    query.add_argument(
        "--collapse", "-c",
        action="append",
        default=None,
        metavar="NAME",
        help="Store NAME as a single value; repeating it is an error"
    )
    query.add_argument(
        "--collapsed-mode",
        action="store_true",
        help="Store every parameter as a single value unless it repeats"
    )
    query.add_argument(
        "--array", "-a",
        action="append",
        default=None,
        metavar="NAME",
        help="With --collapsed-mode, allow NAME to repeat"
    )

    return parser


def _setup_logging(config: UtilConfig) -> None:
    """Configure logging based on config."""
    logging.basicConfig(
        level=config.log_level_number,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httputil").setLevel(config.log_level_number)


def _dump(result, config: UtilConfig) -> str:
    return json.dumps(result, indent=config.indent, ensure_ascii=False)


def run_headers(args: argparse.Namespace, config: UtilConfig) -> str:
    if args.file is sys.stdin:
        raw = args.file.read()
    else:
        with args.file:
            raw = args.file.read()
    # Captured blocks often lose their CRs on the way to a file
    raw = BARE_LF_PATTERN.sub("\r\n", raw)
    return _dump(parse_headers(raw), config)


def run_build(args: argparse.Namespace, config: UtilConfig) -> str:
    raw = args.parameters if args.parameters is not None else sys.stdin.read()
    try:
        parameters = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON parameters: {e}", fragment=raw) from e

    if not isinstance(parameters, dict):
        raise FormatError("Parameters must be a JSON object", fragment=raw)

    return build_query_string(parameters)


def run_query(args: argparse.Namespace, config: UtilConfig) -> str:
    if args.collapsed_mode:
        names = args.array if args.array is not None else config.expected_array_params
        result = get_query_params_collapsed(args.url, names)
    else:
        names = args.collapse if args.collapse is not None else config.collapsed_params
        result = get_query_params(args.url, names)
    return _dump(result, config)


COMMANDS = {
    "headers": run_headers,
    "build": run_build,
    "query": run_query,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).

    Returns:
        Process exit status: 0 on success, 1 on malformed input.
    """
    args = _build_parser().parse_args(argv)

    config = UtilConfig.from_env()
    if args.log_level is not None:
        config.log_level = args.log_level
    config.validate()

    _setup_logging(config)
    logger.debug(f"Running {args.command!r} command")

    try:
        output = COMMANDS[args.command](args, config)
    except FormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================
# Allows running: python -m httputil

if __name__ == "__main__":
    sys.exit(main())
