r"""
=============================================================================
HTTP HEADER BLOCK PARSER
=============================================================================

Parses a raw HTTP header block (as captured from a request or a response)
into a plain dict keyed by canonicalized header name.

=============================================================================
HEADER BLOCK ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     RAW HEADER BLOCK                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTP/1.1 200 OK\r\n                  ◄── status line (response)   │
    │   content-type: text/html\r\n          ◄── field                    │
    │   Set-Cookie: foo=bar\r\n              ◄── field                    │
    │   Set-Cookie: baz=quux\r\n             ◄── repeated field           │
    │   Folds: are\r\n                       ◄── field ...                │
    │   \treformatted\r\n                    ◄── ... folded continuation  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘
                                   │
                                   ▼
    {
        "Response Code": 200,
        "Response Status": "OK",
        "Content-Type": "text/html",
        "Set-Cookie": ["foo=bar", "baz=quux"],
        "Folds": "are reformatted",
    }

A request block starts with "GET /path HTTP/1.1" instead and yields
"Request Method" / "Request Url" keys.

=============================================================================
LINE CLASSIFICATION ORDER
=============================================================================

Every line is tried against three patterns, ALWAYS in this order:

    1. FIELD         ([^:]+): (.*)
    2. REQUEST LINE  ([A-Za-z]+) +([^ ]+) +HTTP/([\d.]+)
    3. STATUS LINE   HTTP/([\d.]+) +(\d{3}) +(.*)

The field pattern wins whenever it matches, so a request line whose URL
happens to contain ": " is stored as a field. Lines matching none of the
three raise FormatError.

=============================================================================
SYNTHESIZED KEYS
=============================================================================

"Request Method", "Request Url", "Response Code" and "Response Status"
live in the same dict as the real headers. Canonical header names never
contain spaces, so a header sent as "Response Code: 1" is stored under
"Response-Code" and both keys coexist. A second status or request line
overwrites the synthesized keys of the first.

=============================================================================
"""

import logging
import re
from typing import Dict, List, Union

from .errors import FormatError
from .fields import FieldAccumulator


logger = logging.getLogger(__name__)


HeaderValue = Union[str, int, List[str]]
ParsedHeaders = Dict[str, HeaderValue]

# Characters stripped by trim(): space, tab, LF, CR, NUL and vertical tab.
TRIM_CHARS = " \t\n\r\0\x0b"

REQUEST_METHOD = "Request Method"
REQUEST_URL = "Request Url"
RESPONSE_CODE = "Response Code"
RESPONSE_STATUS = "Response Status"


class HeaderParser:
    """
    Parses raw header blocks into dicts.

    The parser holds no per-call state; one instance can be shared freely
    between threads. Use parse_headers() for one-off calls.
    """

    # Compiled once at class load time.
    FOLD_PATTERN = re.compile(r"\r\n[\t ]+")
    FIELD_PATTERN = re.compile(r"([^:]+): (.*)")
    REQUEST_LINE_PATTERN = re.compile(r"([A-Za-z]+) +([^ ]+) +HTTP/([\d.]+)")
    STATUS_LINE_PATTERN = re.compile(r"HTTP/([\d.]+) +(\d{3}) +(.*)")
    NAME_SEPARATOR_PATTERN = re.compile(r"[ \t\n\r\f\v-]+")

    def parse(self, raw_headers: str) -> ParsedHeaders:
        """
        Parse a header block.

        Args:
            raw_headers: Header text with CRLF line endings.

        Returns:
            Dict of canonical header name -> value. Repeated headers hold
            a list of values in the order they appeared.

        Raises:
            FormatError: If a line is neither a field, a request line nor
                         a status line. The error's fragment is that line.
        """
        unfolded = self.FOLD_PATTERN.sub(" ", raw_headers.strip(TRIM_CHARS))
        lines = unfolded.split("\r\n")
        logger.debug(f"Parsing header block with {len(lines)} line(s)")

        headers = FieldAccumulator()

        for line in lines:
            match = self.FIELD_PATTERN.search(line)
            if match:
                name = self.canonicalize_name(match.group(1))
                value = match.group(2).strip(TRIM_CHARS)

                if name in headers:
                    headers.append(name, value)
                else:
                    headers.set(name, value)
                continue

            match = self.REQUEST_LINE_PATTERN.search(line)
            if match:
                self._add_request_data(match, headers)
                continue

            match = self.STATUS_LINE_PATTERN.search(line)
            if match:
                self._add_response_data(match, headers)
                continue

            logger.warning(f"Unsupported header line: {line!r}")
            raise FormatError(f"Unsupported header format: {line}", fragment=line)

        return headers.to_dict()

    def canonicalize_name(self, name: str) -> str:
        """
        Rewrite a header name as Title-Case-With-Hyphens.

        Runs of whitespace and hyphens collapse into a single hyphen:

            "content-type"      -> "Content-Type"
            "x   foo-bar"       -> "X-Foo-Bar"
            "FOLDS"             -> "Folds"
        """
        name = name.strip(TRIM_CHARS).lower()
        words = self.NAME_SEPARATOR_PATTERN.split(name)
        return "-".join(word[:1].upper() + word[1:] for word in words)

    def _add_request_data(self, match: "re.Match[str]", headers: FieldAccumulator) -> None:
        # HTTP version (group 3) is matched but not kept
        headers.set(REQUEST_METHOD, match.group(1).strip(TRIM_CHARS))
        headers.set(REQUEST_URL, match.group(2).strip(TRIM_CHARS))

    def _add_response_data(self, match: "re.Match[str]", headers: FieldAccumulator) -> None:
        headers.set(RESPONSE_CODE, int(match.group(2)))
        headers.set(RESPONSE_STATUS, match.group(3).strip(TRIM_CHARS))


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

_default_parser = HeaderParser()


def parse_headers(raw_headers: str) -> ParsedHeaders:
    """
    Parse an HTTP header block into a dict.

    Example:
        parse_headers("GET /x HTTP/1.1\\r\\nHost: foo.com\\r\\n")
        # {"Request Method": "GET", "Request Url": "/x", "Host": "foo.com"}
    """
    return _default_parser.parse(raw_headers)
