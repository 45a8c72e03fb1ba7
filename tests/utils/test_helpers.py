# tests/utils/test_helpers.py
"""Tests for app/utils/helpers.py module."""

from datetime import UTC

import pytest

from app.utils.helpers import generate_slug, today_str, total_pages, utc_now


class TestGenerateSlug:
    """Tests for generate_slug."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Getting Started with FastAPI", "getting-started-with-fastapi"),
            ("Hello, World!  Again", "hello-world-again"),
            ("  --Trim me--  ", "trim-me"),
            ("Python 3.13 is out", "python-313-is-out"),
            ("a - b", "a-b"),
        ],
    )
    def test_slugifies(self, title: str, expected: str) -> None:
        assert generate_slug(title) == expected

    def test_non_ascii_letters_are_dropped(self) -> None:
        assert generate_slug("Café au lait") == "caf-au-lait"

    def test_nothing_usable_gives_empty_slug(self) -> None:
        assert generate_slug("!!! ???") == ""


class TestTotalPages:
    """Tests for total_pages."""

    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 20, 2)],
    )
    def test_rounds_up(self, total: int, limit: int, expected: int) -> None:
        assert total_pages(total, limit) == expected

    def test_zero_limit(self) -> None:
        assert total_pages(5, 0) == 0


def test_utc_now_is_timezone_aware() -> None:
    assert utc_now().tzinfo == UTC


def test_today_str_format() -> None:
    assert len(today_str()) == len("2025-01-01 00:00:00")
