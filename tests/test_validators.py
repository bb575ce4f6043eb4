from __future__ import annotations

from app.utils.pagination import page_request
from app.utils.validators import like_pattern, sanitize_text


def test_sanitize_text_strips_null_and_trims():
    assert sanitize_text("  hello\x00world  ") == "helloworld"
    assert sanitize_text(None) == ""
    assert sanitize_text("abcdef", max_len=3) == "abc"


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%") == "%50\\%%"
    assert like_pattern("a_b") == "%a\\_b%"
    assert like_pattern("c:\\dir") == "%c:\\\\dir%"


def test_page_request_clamps_values():
    paging = page_request(None, None, default_limit=10, max_limit=100)
    assert (paging.page, paging.limit, paging.offset) == (1, 10, 0)

    paging = page_request(3, 500, default_limit=10, max_limit=100)
    assert (paging.page, paging.limit, paging.offset) == (3, 100, 200)

    paging = page_request(-4, 0, default_limit=10, max_limit=100)
    assert (paging.page, paging.limit) == (1, 10)
