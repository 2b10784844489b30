"""Tests for is_safe_url — post-login return target validation."""

import pytest

from folio.security.urls import is_safe_url


class TestIsSafeUrl:
    @pytest.mark.parametrize(
        "url",
        ["/", "/admin/issues", "/articles/42?ref=home#c2", "/authors/Ada%20Lovelace"],
    )
    def test_safe(self, url: str) -> None:
        assert is_safe_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "admin",
            "//evil.example",
            "/\\evil.example",
            "https://evil.example/admin",
            "/redirect?to=https://evil.example",
            "/admin\n/issues",
        ],
    )
    def test_unsafe(self, url: str) -> None:
        assert is_safe_url(url) is False

    def test_non_string(self) -> None:
        assert is_safe_url(None) is False  # type: ignore[arg-type]
