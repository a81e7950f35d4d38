"""Tests for location parsing."""

import pytest

from uripick.location import NO_PROTOCOL, Location, parse_location, split_protocol


class TestParseLocation:
    def test_scheme_with_authority(self):
        assert parse_location("s3://bucket/key") == Location("s3", "bucket/key")

    def test_no_scheme(self):
        assert parse_location("a/b/c") == Location(NO_PROTOCOL, "a/b/c")

    def test_no_scheme_strips_one_leading_slash(self):
        assert parse_location("/abs/path") == Location(None, "abs/path")

    def test_triple_slash_strips_one_slash_after_authority(self):
        """file:///a/b has an empty authority; one slash of /a/b is removed."""
        assert parse_location("file:///a/b") == Location("file", "a/b")

    def test_scheme_without_authority(self):
        assert parse_location("mem:a/b") == Location("mem", "a/b")
        assert parse_location("mem:/a/b") == Location("mem", "a/b")

    def test_protocol_has_no_trailing_colon(self):
        loc = parse_location("mem://x")
        assert loc.protocol == "mem"
        assert not loc.protocol.endswith(":")

    def test_protocol_is_lowercased(self):
        assert parse_location("S3://Bucket/Key") == Location("s3", "Bucket/Key")

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("//double/slash", Location(None, "/double/slash")),
            ("file:////x", Location("file", "/x")),
            ("mem:///", Location("mem", "")),
        ],
    )
    def test_strips_at_most_one_leading_slash(self, raw, expected):
        assert parse_location(raw) == expected

    def test_globs_pass_through(self):
        loc = parse_location("mem://src/**/*.{js,ts}")
        assert loc.path == "src/**/*.{js,ts}"

    def test_query_and_fragment_pass_through(self):
        loc = parse_location("http://host/p?x=1#frag")
        assert loc == Location("http", "host/p?x=1#frag")

    def test_empty_string(self):
        assert parse_location("") == Location(None, "")

    def test_malformed_input_degrades_to_bare_path(self):
        assert parse_location("://nothing") == Location(None, "://nothing")
        assert parse_location("1abc://x") == Location(None, "1abc://x")

    def test_scheme_special_characters(self):
        assert parse_location("git+ssh://host/repo").protocol == "git+ssh"


class TestSplitProtocol:
    def test_remainder_untouched(self):
        assert split_protocol("mem:///a") == ("mem", "///a")

    def test_no_protocol(self):
        assert split_protocol("a:b/c") == ("a", "b/c")
        assert split_protocol("./a:b") == (None, "./a:b")
