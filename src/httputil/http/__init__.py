"""
=============================================================================
HTTP TEXT UTILITIES
=============================================================================

Pure text transformations for data that travels with HTTP messages.
Nothing here opens a socket: callers obtain the raw header text or the
URL however they like and hand it over as a string.

=============================================================================
MODULE COMPONENTS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADER PARSER (headers.py)                                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Input:   "HTTP/1.1 200 OK\r\ncontent-type: text/html\r\n"          │
    │ Output:  {"Response Code": 200, "Response Status": "OK",           │
    │           "Content-Type": "text/html"}                              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ QUERY STRINGS (query.py)                                            │
    │ ─────────────────────────────────────────────────────────────────── │
    │ build_query_string({"q": "a b"})         → "q=a%20b"               │
    │ get_query_params("/?a=1&a=2")            → {"a": ["1", "2"]}       │
    │ get_query_params_collapsed("/?a=1")      → {"a": "1"}              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ SUPPORT                                                             │
    │ ─────────────────────────────────────────────────────────────────── │
    │ errors.py  FormatError, the only input error raised                 │
    │ fields.py  FieldAccumulator, scalar → list bookkeeping per key      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .errors import FormatError
from .fields import FieldAccumulator
from .headers import HeaderParser, parse_headers
from .query import (
    QueryStringBuilder,
    QueryStringParser,
    build_query_string,
    get_query_params,
    get_query_params_collapsed,
    raw_url_decode,
    raw_url_encode,
)

__all__ = [
    # Errors
    "FormatError",

    # Headers
    "HeaderParser",
    "parse_headers",

    # Query strings
    "QueryStringBuilder",
    "QueryStringParser",
    "build_query_string",
    "get_query_params",
    "get_query_params_collapsed",
    "raw_url_encode",
    "raw_url_decode",

    # Internals shared by the parsers
    "FieldAccumulator",
]
