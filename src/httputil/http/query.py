"""
=============================================================================
QUERY STRING BUILDING AND PARSING
=============================================================================

Turns parameter dicts into URL query strings and back again.

=============================================================================
ENCODING: RAW PERCENT-ENCODING (RFC 3986)
=============================================================================

Only the unreserved characters are left alone:

    A-Z a-z 0-9 - _ . ~

Everything else becomes %XX (UTF-8 bytes). In particular a space is
"%20", never "+". Decoding is the exact inverse: "%20" -> " " while a
literal "+" stays a "+". Form-encoding (urlencode / parse_qs) is NOT used
anywhere in this module because it treats "+" as a space.

=============================================================================
BUILDING
=============================================================================

    {"param1": ["value", "another value"],      param1=value
     "param2": "a value",               ──►     &param1=another%20value
     "param3": False}                           &param2=a%20value
                                                &param3=false

    - list / tuple  → one pair per element, name repeated
    - True / False  → literal "true" / "false"
    - anything else → str() then percent-encoded (None → empty value)

=============================================================================
PARSING: TWO POLICIES FOR REPEATED NAMES
=============================================================================

    URL: http://x/?id=boo&another=wee&another=boo

    get_query_params(url, collapsed_params={"id"})
        Every name is a list, unless listed as collapsed.
        A collapsed name that repeats is an error.
        → {"id": "boo", "another": ["wee", "boo"]}

    get_query_params_collapsed(url, expected_array_params={"another"})
        Every name is a scalar, unless it repeats.
        A repeating name must be listed as an expected array.
        → {"id": "boo", "another": ["wee", "boo"]}

Both policies share one tokenizer (iter_query_pairs) so they always agree
on how "name=value" and bare "name" tokens are split and decoded.

=============================================================================
"""

import logging
from typing import Any, Collection, Dict, Iterator, List, Mapping, Sequence, Tuple, Union
from urllib.parse import quote, unquote, urlsplit

from .errors import FormatError
from .fields import FieldAccumulator


logger = logging.getLogger(__name__)


Scalar = Union[str, int, float, bool, None]
QueryValue = Union[Scalar, Sequence[Scalar]]
QueryParams = Dict[str, Union[str, List[str]]]


# =============================================================================
# PERCENT-ENCODING HELPERS
# =============================================================================

def raw_url_encode(value: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(value, safe="")


def raw_url_decode(value: str) -> str:
    """
    Inverse of raw_url_encode. "+" is left untouched.

    Escapes that do not form valid UTF-8 (e.g. "%FF") decode to U+FFFD
    instead of raising.
    """
    return unquote(value, errors="replace")


# =============================================================================
# BUILDER
# =============================================================================

class QueryStringBuilder:
    """
    Serializes parameter dicts into query strings.

    Example:
        QueryStringBuilder().build({"q": "hello world", "page": 2})
        # "q=hello%20world&page=2"
    """

    def build(self, parameters: Mapping[str, QueryValue]) -> str:
        """
        Build a query string.

        Args:
            parameters: Parameter name -> value. Iteration order of the
                        mapping is the order of the emitted pairs.

        Returns:
            Pairs joined with "&". An empty mapping gives "".
        """
        pairs: List[str] = []

        for name, value in parameters.items():
            encoded_name = raw_url_encode(str(name))

            if isinstance(value, (list, tuple)):
                # Empty list emits nothing
                for each_value in value:
                    pairs.append(f"{encoded_name}={self._format_value(each_value)}")
            else:
                pairs.append(f"{encoded_name}={self._format_value(value)}")

        return "&".join(pairs)

    def _format_value(self, value: Any) -> str:
        # bool is checked first because it is a subclass of int
        if value is False:
            return "false"
        if value is True:
            return "true"
        if value is None:
            return ""
        return raw_url_encode(str(value))


# =============================================================================
# PARSER
# =============================================================================

def split_query(url: str) -> List[str]:
    """
    Split the query component of url into raw "name=value" tokens.

    A URL without a query component (or with an empty one) gives [].
    The fragment is never part of the query. Tab, CR and LF characters
    are removed from url before splitting (urlsplit follows the WHATWG
    URL rules here), so "?a=x\\ty" yields "a=xy".

    Raises:
        FormatError: If url cannot be split, e.g. an unclosed IPv6 host
                     such as "http://[::1/?a=1".
    """
    try:
        query = urlsplit(url).query
    except ValueError as e:
        logger.warning(f"Invalid URL: {url!r}")
        raise FormatError(f"Invalid URL: {url}", fragment=url) from e

    if not query:
        return []
    return query.split("&")


def iter_query_pairs(url: str) -> Iterator[Tuple[str, str]]:
    """
    Yield decoded (name, value) pairs from the query of url.

    Each token is split on its FIRST "=". A token without "=" is a name
    with an empty value:

        "a=1"    -> ("a", "1")
        "a=1=2"  -> ("a", "1=2")
        "flag"   -> ("flag", "")
    """
    for token in split_query(url):
        name, _, value = token.partition("=")
        yield raw_url_decode(name), raw_url_decode(value)


class QueryStringParser:
    """
    Parses URL query strings into dicts.

    =========================================================================
    POLICIES
    =========================================================================

    collapsed=False (get_query_params)
        names: parameters stored as a single value. Repeating one of them
        raises FormatError. Everything else is a list.

    collapsed=True (get_query_params_collapsed)
        names: parameters allowed to repeat. Everything is a single value
        until it repeats; repeating a name not in names raises FormatError.

    Names absent from the query never appear in the result.

    =========================================================================
    """

    def __init__(self, collapsed: bool = False):
        self.collapsed = collapsed

    def parse(self, url: str, names: Collection[str] = ()) -> QueryParams:
        """
        Parse the query of url.

        Args:
            url: Absolute or relative URL, e.g. "http://foo.com/bar/?id=boo".
            names: Collapsed names (collapsed=False) or expected array
                   names (collapsed=True).

        Returns:
            Dict of decoded name -> value or list of values, in order of
            first occurrence.

        Raises:
            FormatError: On a repeat the policy does not allow.
        """
        names = frozenset(names)
        result = FieldAccumulator()

        for name, value in iter_query_pairs(url):
            if self.collapsed:
                self._add_collapsed(result, name, value, names)
            else:
                self._add_listed(result, name, value, names)

        logger.debug(f"Parsed {len(result)} query parameter(s) from {url!r}")
        return result.to_dict()

    def _add_listed(
        self,
        result: FieldAccumulator,
        name: str,
        value: str,
        collapsed_params: frozenset,
    ) -> None:
        collapsed = name in collapsed_params

        if name not in result:
            if collapsed:
                result.set(name, value)
            else:
                result.start_list(name, value)
            return

        if collapsed:
            logger.warning(f"Collapsed query parameter repeated: {name!r}")
            raise FormatError(
                f"Parameter '{name}' had more than one value but in collapsed_params",
                fragment=name,
            )

        result.append(name, value)

    def _add_collapsed(
        self,
        result: FieldAccumulator,
        name: str,
        value: str,
        expected_array_params: frozenset,
    ) -> None:
        if name not in result:
            result.set(name, value)
            return

        if name not in expected_array_params:
            logger.warning(f"Unexpected repeated query parameter: {name!r}")
            raise FormatError(
                f"Parameter '{name}' is not expected to be an array, but array given",
                fragment=name,
            )

        result.append(name, value)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_builder = QueryStringBuilder()
_listed_parser = QueryStringParser(collapsed=False)
_collapsed_parser = QueryStringParser(collapsed=True)


def build_query_string(parameters: Mapping[str, QueryValue]) -> str:
    """
    Generate a URL-encoded query string.

    Example:
        build_query_string({
            "param1": ["value", "another value"],
            "param2": "a value",
            "param3": False,
        })
        # "param1=value&param1=another%20value&param2=a%20value&param3=false"
    """
    return _builder.build(parameters)


def get_query_params(url: str, collapsed_params: Collection[str] = ()) -> QueryParams:
    """
    Get all URL parameters, as lists unless collapsed.

    Example:
        get_query_params("http://foo.com/bar/?id=boo&another=wee&another=boo", {"id"})
        # {"id": "boo", "another": ["wee", "boo"]}
    """
    return _listed_parser.parse(url, collapsed_params)


def get_query_params_collapsed(url: str, expected_array_params: Collection[str] = ()) -> QueryParams:
    """
    Get all URL parameters, as single values unless repeated.

    Example:
        get_query_params_collapsed("http://foo.com/bar/?single=boo&multi=wee&multi=boo", {"multi"})
        # {"single": "boo", "multi": ["wee", "boo"]}
    """
    return _collapsed_parser.parse(url, expected_array_params)
