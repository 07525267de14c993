"""Tests for identity token normalization and the bounded cache."""

import pytest

from orgchart_engine.identity.normalizer import (
    GuidCache,
    compare_guids,
    is_valid_guid,
    normalize_guid,
)

BRACED = "{3F2504E0-4F89-11D3-9A0C-0305E82C3301}"
BARE = "3f2504e04f8911d39a0c0305e82c3301"


class TestNormalize:
    def test_strips_braces_and_hyphens(self) -> None:
        assert normalize_guid(BRACED, GuidCache()) == BARE

    def test_missing_token(self) -> None:
        assert normalize_guid(None) == ""
        assert normalize_guid("") == ""

    @pytest.mark.parametrize("token", [BRACED, BARE, "{a-b}", "Plain-Text", "---", "x"])
    def test_idempotent(self, token: str) -> None:
        cache = GuidCache()
        once = normalize_guid(token, cache)
        assert normalize_guid(once, cache) == once


class TestCompare:
    def test_exact_match(self) -> None:
        assert compare_guids("abc", "abc")

    def test_normalized_match(self) -> None:
        assert compare_guids(BRACED, BARE)

    def test_symmetric(self) -> None:
        pairs = [(BRACED, BARE), ("a", "b"), ("{A}", "a"), (BARE, "other")]
        for a, b in pairs:
            assert compare_guids(a, b) == compare_guids(b, a)

    def test_reflexive(self) -> None:
        for token in (BRACED, BARE, "x"):
            assert compare_guids(token, token)

    def test_missing_tokens_never_match(self) -> None:
        assert not compare_guids(None, None)
        assert not compare_guids("", "")
        assert not compare_guids(None, BARE)

    def test_different_guids(self) -> None:
        assert not compare_guids(BARE, "00000000000000000000000000000000")


class TestGuidCache:
    def test_memoizes(self) -> None:
        cache = GuidCache()
        cache.normalize(BRACED)
        assert BRACED in cache
        assert len(cache) == 1

    def test_evicts_oldest_half_when_full(self) -> None:
        cache = GuidCache(capacity=10)
        for i in range(10):
            cache.normalize(f"TOKEN-{i}")
        assert len(cache) == 10

        cache.normalize("TOKEN-new")
        assert len(cache) == 6
        assert "TOKEN-0" not in cache
        assert "TOKEN-4" not in cache
        assert "TOKEN-5" in cache
        assert "TOKEN-new" in cache

    def test_never_exceeds_capacity(self) -> None:
        cache = GuidCache(capacity=50)
        for i in range(500):
            cache.normalize(f"{{{i:08d}}}")
            assert len(cache) <= 50

    def test_clear(self) -> None:
        cache = GuidCache()
        cache.normalize(BRACED)
        cache.clear()
        assert len(cache) == 0

    def test_capacity_too_small(self) -> None:
        with pytest.raises(ValueError):
            GuidCache(capacity=1)


class TestIsValidGuid:
    @pytest.mark.parametrize(
        "value",
        [BRACED, BARE, "3F2504E0-4F89-11D3-9A0C-0305E82C3301", "(3f2504e0-4f89-11d3-9a0c-0305e82c3301)"],
    )
    def test_valid(self, value: str) -> None:
        assert is_valid_guid(value)

    @pytest.mark.parametrize("value", ["", None, "not-a-guid", "3f2504e0-4f89", BARE + "00"])
    def test_invalid(self, value: str | None) -> None:
        assert not is_valid_guid(value)
