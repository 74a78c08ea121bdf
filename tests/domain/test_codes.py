from __future__ import annotations

import pytest

from tiersync.domain.codes import code_for, format_percentage, title_for
from tiersync.domain.model import Tier


def test_code_for_joins_prefix_and_percentage() -> None:
    assert code_for(Tier(count=4, percentage=15), "fubndl") == "fubndl-15"


def test_code_for_keeps_decimal_percentages_verbatim() -> None:
    assert code_for(Tier(count=2, percentage=12.5), "fuprbl") == "fuprbl-12.5"


def test_code_for_renders_integral_floats_like_json_numbers() -> None:
    assert code_for(Tier(count=2, percentage=15.0), "fubndl") == "fubndl-15"


def test_code_for_is_injective_over_percentages() -> None:
    tiers = [Tier(count=2, percentage=value) for value in (5, 10, 12.5, 15, 50, 100)]

    codes = {code_for(tier, "fubndl") for tier in tiers}

    assert len(codes) == len(tiers)


def test_code_for_ignores_count() -> None:
    assert code_for(Tier(count=2, percentage=5), "fubndl") == code_for(
        Tier(count=7, percentage=5), "fubndl"
    )


def test_prefixes_isolate_surfaces() -> None:
    tier = Tier(count=3, percentage=10)

    assert code_for(tier, "fubndl") != code_for(tier, "fuprbl")


@pytest.mark.parametrize(
    ("tier", "expected"),
    [
        (Tier(count=4, percentage=15), "15% off when you buy 4+ items"),
        (Tier(count=1, percentage=5), "5% off when you buy 1+ item"),
        (Tier(count=3, percentage=7.5), "7.5% off when you buy 3+ items"),
    ],
)
def test_title_for(tier: Tier, expected: str) -> None:
    assert title_for(tier) == expected


def test_format_percentage_leaves_ints_alone() -> None:
    assert format_percentage(100) == "100"
