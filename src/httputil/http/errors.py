"""
=============================================================================
PARSE ERRORS
=============================================================================

Every malformed-input condition in this package surfaces as a FormatError.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  WHERE FormatError IS RAISED                                        │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   parse_headers              line matches no known shape            │
    │   get_query_params           collapsed parameter repeated           │
    │   get_query_params_collapsed repeated parameter not expected        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Parsing is all-or-nothing: no partial mapping is ever returned alongside
the error. The caller has to fix its input; retrying will not help.

=============================================================================
"""


class FormatError(Exception):
    """
    Raised when input text cannot be parsed.

    The offending fragment (the unparseable header line, or the name of
    the repeated query parameter) is kept on the exception so callers can
    report it without scraping the message.
    """

    def __init__(self, message: str, fragment: str = ""):
        super().__init__(message)
        self.fragment = fragment  # Offending line or parameter name
