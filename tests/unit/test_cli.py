"""
Unit tests for the command-line interface.
"""

import io
import json

import pytest

from httputil.__main__ import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep HTTPUTIL_* variables from the outer shell out of the tests."""
    for name in (
        "HTTPUTIL_LOG_LEVEL",
        "HTTPUTIL_COLLAPSED_PARAMS",
        "HTTPUTIL_EXPECTED_ARRAY_PARAMS",
        "HTTPUTIL_INDENT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestHeadersCommand:
    """Tests for 'httputil headers'."""

    def test_from_file(self, tmp_path, capsys, sample_response_headers: str):
        """Test parsing a header block stored in a file."""
        path = tmp_path / "response.txt"
        path.write_bytes(sample_response_headers.encode())

        assert main(["headers", str(path)]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result["Response Code"] == 200
        assert result["Set-Cookie"] == ["foo=bar", "baz=quux"]
        assert result["Folds"] == "are reformatted"

    def test_from_stdin_with_lf(self, monkeypatch, capsys):
        """Test that bare LF line endings are accepted."""
        monkeypatch.setattr("sys.stdin", io.StringIO("GET /x HTTP/1.1\nHost: foo.com\n"))

        assert main(["headers"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result == {"Request Method": "GET", "Request Url": "/x", "Host": "foo.com"}

    def test_bad_line(self, monkeypatch, capsys):
        """Test that malformed input exits with status 1."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Bad Line Without Colon Or HTTP\n"))

        assert main(["headers"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Unsupported header format" in captured.err

    def test_file_is_closed(self, tmp_path, monkeypatch, capsys):
        """Test that a header file opened by argparse is closed after reading."""
        path = tmp_path / "request.txt"
        path.write_text("GET / HTTP/1.1\nHost: a\n")

        opened = []

        def tracking_open(*args, **kwargs):
            handle = open(*args, **kwargs)
            opened.append(handle)
            return handle

        monkeypatch.setattr("argparse.open", tracking_open, raising=False)

        assert main(["headers", str(path)]) == 0
        assert len(opened) == 1
        assert opened[0].closed


class TestBuildCommand:
    """Tests for 'httputil build'."""

    def test_build_argument(self, capsys):
        """Test building from a JSON argument."""
        parameters = '{"param1": ["value", "another value"], "param2": "a value", "param3": false}'

        assert main(["build", parameters]) == 0

        out = capsys.readouterr().out.strip()
        assert out == "param1=value&param1=another%20value&param2=a%20value&param3=false"

    def test_build_stdin(self, monkeypatch, capsys):
        """Test building from JSON on stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO('{"q": "a b"}'))

        assert main(["build"]) == 0
        assert capsys.readouterr().out.strip() == "q=a%20b"

    def test_invalid_json(self, capsys):
        """Test that invalid JSON is reported as malformed input."""
        assert main(["build", "{not json"]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_non_object(self, capsys):
        """Test that JSON other than an object is rejected."""
        assert main(["build", "[1, 2]"]) == 1
        assert "JSON object" in capsys.readouterr().err


class TestQueryCommand:
    """Tests for 'httputil query'."""

    def test_listed_mode(self, capsys, sample_url: str):
        """Test the default (lists unless collapsed) mode."""
        assert main(["query", sample_url, "--collapse", "id"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result == {"id": "boo", "another": ["wee", "boo"]}

    def test_collapsed_mode(self, capsys):
        """Test --collapsed-mode with an expected array."""
        url = "http://x/?single=boo&multi=wee&multi=boo"

        assert main(["query", url, "--collapsed-mode", "--array", "multi"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result == {"single": "boo", "multi": ["wee", "boo"]}

    def test_collapsed_mode_rejects_repeat(self, capsys):
        """Test that an unexpected repeat exits with status 1."""
        url = "http://x/?multi=wee&multi=boo"

        assert main(["query", url, "--collapsed-mode"]) == 1
        assert "multi" in capsys.readouterr().err

    def test_invalid_url(self, capsys):
        """Test that a malformed URL exits with status 1."""
        assert main(["query", "http://[::1/?a=1"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: Invalid URL" in captured.err

    def test_names_from_env(self, monkeypatch, capsys, sample_url: str):
        """Test that configured names apply when none are given."""
        monkeypatch.setenv("HTTPUTIL_COLLAPSED_PARAMS", "id")
        monkeypatch.setenv("HTTPUTIL_INDENT", "none")

        assert main(["query", sample_url]) == 0

        out = capsys.readouterr().out.strip()
        assert out == '{"id": "boo", "another": ["wee", "boo"]}'


class TestArguments:
    """Tests for argument handling."""

    def test_command_required(self):
        """Test that a subcommand must be given."""
        with pytest.raises(SystemExit):
            main([])

    def test_version(self, capsys):
        """Test --version output."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "httputil 1.0.0" in capsys.readouterr().out
