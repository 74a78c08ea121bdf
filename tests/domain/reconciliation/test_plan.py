from __future__ import annotations

import pytest

from tiersync.domain.codes import code_for
from tiersync.domain.model import Tier, TierIdentity
from tiersync.domain.reconciliation import Recount, build_plan

PREFIX = "fubndl"

TIER_SETS: list[list[Tier]] = [
    [],
    [Tier(2, 5)],
    [Tier(2, 5), Tier(3, 10)],
    [Tier(3, 10), Tier(4, 15)],
    [Tier(2, 5), Tier(3, 10), Tier(4, 15), Tier(5, 20), Tier(6, 25)],
    [Tier(5, 5), Tier(2, 12.5)],
]


@pytest.mark.parametrize("previous", TIER_SETS)
@pytest.mark.parametrize("desired", TIER_SETS)
def test_plan_deletes_retired_percentages_and_upserts_all_desired(
    previous: list[Tier], desired: list[Tier]
) -> None:
    plan = build_plan(previous, desired, PREFIX)

    desired_percentages = {tier.percentage for tier in desired}
    expected_deletes = {
        code_for(tier, PREFIX) for tier in previous if tier.percentage not in desired_percentages
    }
    assert set(plan.to_delete) == expected_deletes
    assert {code_for(tier, PREFIX) for tier in plan.to_upsert} == {
        code_for(tier, PREFIX) for tier in desired
    }
    assert not set(plan.to_delete) & {code_for(tier, PREFIX) for tier in plan.to_upsert}


def test_plan_keeps_previous_order_for_deletes_and_desired_order_for_upserts() -> None:
    previous = [Tier(4, 15), Tier(2, 5), Tier(3, 10)]
    desired = [Tier(6, 30), Tier(5, 20)]

    plan = build_plan(previous, desired, PREFIX)

    assert plan.to_delete == ["fubndl-15", "fubndl-5", "fubndl-10"]
    assert plan.to_upsert == desired


def test_plan_deletes_duplicate_previous_codes_once() -> None:
    plan = build_plan([Tier(2, 5), Tier(3, 5)], [], PREFIX)

    assert plan.to_delete == ["fubndl-5"]


def test_plan_upserts_duplicate_desired_percentages_in_order() -> None:
    desired = [Tier(2, 10), Tier(3, 10)]

    plan = build_plan([], desired, PREFIX)

    assert plan.to_upsert == desired


def test_plan_treats_int_and_float_percentages_as_equal() -> None:
    plan = build_plan([Tier(2, 5)], [Tier(2, 5.0)], PREFIX)

    assert plan.to_delete == []


def test_count_only_change_goes_unreported_under_percentage_identity() -> None:
    plan = build_plan([Tier(2, 5)], [Tier(3, 5)], PREFIX)

    assert plan.to_delete == []
    assert plan.to_upsert == [Tier(3, 5)]
    assert plan.recounts == []


def test_count_only_change_is_a_recount_under_count_identity() -> None:
    plan = build_plan(
        [Tier(2, 5)], [Tier(3, 5)], PREFIX, identity=TierIdentity.PERCENTAGE_AND_COUNT
    )

    assert plan.to_delete == []
    assert plan.to_upsert == [Tier(3, 5)]
    assert plan.recounts == [Recount(code="fubndl-5", previous_count=2, desired_count=3)]


@pytest.mark.parametrize("previous", TIER_SETS)
@pytest.mark.parametrize("desired", TIER_SETS)
def test_identity_key_only_changes_recounts(previous: list[Tier], desired: list[Tier]) -> None:
    by_percentage = build_plan(previous, desired, PREFIX)
    by_count = build_plan(previous, desired, PREFIX, identity=TierIdentity.PERCENTAGE_AND_COUNT)

    assert by_percentage.to_delete == by_count.to_delete
    assert by_percentage.to_upsert == by_count.to_upsert
    assert by_percentage.recounts == []


def test_count_identity_still_updates_shared_codes_in_place() -> None:
    plan = build_plan(
        [Tier(2, 5), Tier(3, 10)],
        [Tier(4, 5), Tier(2, 10), Tier(3, 10)],
        PREFIX,
        identity=TierIdentity.PERCENTAGE_AND_COUNT,
    )

    assert plan.to_delete == []
    assert [tier.count for tier in plan.to_upsert] == [4, 2, 3]
    assert plan.recounts == [Recount(code="fubndl-5", previous_count=2, desired_count=4)]
