"""
=============================================================================
HTTPUTIL - Text Utilities for HTTP Headers and Query Strings
=============================================================================

Three side-effect-free helpers for data that travels with HTTP messages:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   parse_headers(raw)                                                │
    │      raw header block → {"Content-Type": "...", ...}                │
    │                                                                      │
    │   build_query_string(params)                                        │
    │      {"q": "a b", "tag": ["x", "y"]} → "q=a%20b&tag=x&tag=y"        │
    │                                                                      │
    │   get_query_params(url, collapsed_params)                           │
    │   get_query_params_collapsed(url, expected_array_params)            │
    │      "http://x/?a=1&a=2" → {"a": ["1", "2"]}                        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

All of them raise FormatError on malformed input and nothing else.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httputil/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httputil)
    ├── config.py            # UtilConfig dataclass
    └── http/
        ├── errors.py        # FormatError
        ├── fields.py        # Scalar/list accumulator shared by parsers
        ├── headers.py       # Header block parsing
        └── query.py         # Query string building and parsing

=============================================================================
QUICK START
=============================================================================

    from httputil import parse_headers, build_query_string, get_query_params

    parse_headers("HTTP/1.1 200 OK\\r\\nSet-Cookie: a=b\\r\\nSet-Cookie: c=d\\r\\n")
    # {"Response Code": 200, "Response Status": "OK", "Set-Cookie": ["a=b", "c=d"]}

    build_query_string({"param2": "a value", "param3": False})
    # "param2=a%20value&param3=false"

    get_query_params("http://foo.com/?id=boo&another=wee&another=boo", {"id"})
    # {"id": "boo", "another": ["wee", "boo"]}

=============================================================================
"""

__version__ = "1.0.0"

from .config import UtilConfig
from .http import (
    FormatError,
    build_query_string,
    get_query_params,
    get_query_params_collapsed,
    parse_headers,
)

__all__ = [
    "FormatError",
    "UtilConfig",
    "build_query_string",
    "get_query_params",
    "get_query_params_collapsed",
    "parse_headers",
    "__version__",
]
