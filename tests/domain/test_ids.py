"""Tests for id generation and the clock helper."""

from __future__ import annotations

import pytest

from snipvault.domain.ids import (
    CATEGORY_PREFIX,
    ID_PATTERN,
    ITEM_PREFIX,
    generate_id,
    now_ms,
    seed_category_id,
    to_base36,
)


class TestBase36:
    @pytest.mark.parametrize(
        ("value", "expected"), [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "10")]
    )
    def test_values(self, value: int, expected: str) -> None:
        assert to_base36(value) == expected

    def test_negative(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            to_base36(-1)


class TestGenerateId:
    def test_prefix(self) -> None:
        assert generate_id(ITEM_PREFIX).startswith("p_")
        assert generate_id(CATEGORY_PREFIX).startswith("cat_")

    def test_pattern(self) -> None:
        assert ID_PATTERN.match(generate_id(ITEM_PREFIX))

    def test_unique(self) -> None:
        assert len({generate_id(ITEM_PREFIX) for _ in range(200)}) == 200


class TestSeedIds:
    def test_seed_category_id(self) -> None:
        assert seed_category_id(1) == "cat_seed_1"
        assert ID_PATTERN.match(seed_category_id(7))


def test_now_ms_is_epoch_millis() -> None:
    # 2020-01-01 in ms; guards against seconds or nanoseconds
    assert now_ms() > 1_577_836_800_000
    assert now_ms() < 10**14
