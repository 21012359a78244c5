"""Tests for link target sanitization."""

import logging

import pytest

from safemark.urls import SAFE_FALLBACK_HREF, canonicalize_url, sanitize_href


class TestAcceptedTargets:
    """Absolute http(s) URLs are kept, canonicalized and escaped."""

    def test_https_unchanged(self) -> None:
        assert sanitize_href("https://example.com") == "https://example.com"

    def test_http_with_path_and_query(self) -> None:
        assert sanitize_href("http://example.com/path?q=1") == "http://example.com/path?q=1"

    def test_ampersand_escaped_for_attribute(self) -> None:
        assert sanitize_href("https://example.com/?a=1&b=2") == "https://example.com/?a=1&amp;b=2"

    def test_scheme_and_host_lowercased(self) -> None:
        assert sanitize_href("HTTPS://EXAMPLE.COM/Path") == "https://example.com/Path"

    def test_default_port_dropped(self) -> None:
        assert sanitize_href("https://example.com:443/x") == "https://example.com/x"
        assert sanitize_href("http://example.com:80/x") == "http://example.com/x"

    def test_non_default_port_kept(self) -> None:
        assert sanitize_href("http://example.com:8080/") == "http://example.com:8080/"

    def test_ipv6_host(self) -> None:
        assert sanitize_href("http://[::1]:8000/") == "http://[::1]:8000/"

    def test_unicode_host_punycoded(self) -> None:
        assert sanitize_href("https://bücher.example/") == "https://xn--bcher-kva.example/"

    def test_unsafe_path_characters_percent_encoded(self) -> None:
        assert sanitize_href('https://example.com/a"b') == "https://example.com/a%22b"
        assert sanitize_href("https://example.com/café") == "https://example.com/caf%C3%A9"

    def test_existing_percent_escapes_preserved(self) -> None:
        assert sanitize_href("https://example.com/a%20b") == "https://example.com/a%20b"

    def test_single_quote_escaped(self) -> None:
        assert sanitize_href("https://example.com/it's") == "https://example.com/it&#x27;s"

    def test_userinfo_kept(self) -> None:
        assert sanitize_href("https://user:pw@Example.com/") == "https://user:pw@example.com/"

    def test_fragment_kept(self) -> None:
        assert sanitize_href("https://example.com/#top") == "https://example.com/#top"


class TestRejectedTargets:
    """Everything that is not an absolute http(s) URL becomes the fallback."""

    @pytest.mark.parametrize(
        "candidate",
        [
            "",
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            "data:text/html,<script>alert(1)</script>",
            "vbscript:msgbox(1)",
            "mailto:someone@example.com",
            "ftp://example.com/file",
            "/relative/path",
            "relative",
            "//example.com",
            "#anchor",
            "https://",
            "https:example.com",
            "https:/example.com",
            "https://exa mple.com",
            " https://example.com",
            "https://example.com\n",
            "https://example.com:99999",
            "https://example.com:abc",
            "https://[::1",
            "https://a<b.com",
            "https:\\\\evil.com",
            "https://evil.com\\@good.com",
            "https://a..b/",
        ],
    )
    def test_rejected(self, candidate: str) -> None:
        assert sanitize_href(candidate) == SAFE_FALLBACK_HREF
        assert canonicalize_url(candidate) is None

    def test_fallback_is_noop_anchor(self) -> None:
        assert SAFE_FALLBACK_HREF == "#"

    def test_rejection_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="safemark.urls"):
            sanitize_href("javascript:alert(1)")
        assert any("Rejected link target" in r.getMessage() for r in caplog.records)
        assert all(r.levelno == logging.DEBUG for r in caplog.records)


class TestCanonicalizeUrl:
    """canonicalize_url returns unescaped canonical text."""

    def test_not_escaped(self) -> None:
        assert canonicalize_url("https://example.com/?a=1&b=2") == "https://example.com/?a=1&b=2"

    def test_trailing_dot_host(self) -> None:
        assert canonicalize_url("https://example.com./") == "https://example.com./"
