"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def sample_response_headers() -> str:
    """Sample response header block with repeated and folded fields."""
    return (
        "HTTP/1.1 200 OK\r\n"
        "content-type: text/html; charset=UTF-8\r\n"
        "Server: Funky/1.0\r\n"
        "Set-Cookie: foo=bar\r\n"
        "Set-Cookie: baz=quux\r\n"
        "Folds: are\r\n\treformatted\r\n"
    )


@pytest.fixture
def sample_request_headers() -> str:
    """Sample request header block."""
    return (
        "GET /api/users?page=1 HTTP/1.1\r\n"
        "Host: localhost:8080\r\n"
        "User-Agent: pytest\r\n"
        "Accept: application/json\r\n"
    )


@pytest.fixture
def sample_url() -> str:
    """URL with one single and one repeated parameter."""
    return "http://foo.com/bar/?id=boo&another=wee&another=boo"
