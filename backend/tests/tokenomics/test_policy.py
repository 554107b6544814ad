import pytest

from backend.config import MILESTONE_TIER_TABLE, TOKENOMICS_VARIANT
from backend.tokenomics.errors import TokenomicsError, TokenomicsConfigError, MonotonicityViolationError
from backend.tokenomics.policy import TokenomicsPolicy, TierMultiplier, get_policy


def test_shipped_variants_are_valid():
    milestone = TokenomicsPolicy.for_variant("milestone")
    verification = TokenomicsPolicy.for_variant("verification")

    assert milestone.follower_scaling == "log"
    assert verification.follower_scaling == "linear"
    assert milestone.tiers() == ["nano", "micro", "macro", "mega", "celebrity"]


def test_unknown_variant():
    with pytest.raises(TokenomicsConfigError, match="Unknown tokenomics variant"):
        TokenomicsPolicy.for_variant("experimental")


def test_get_policy():
    assert get_policy().variant == TOKENOMICS_VARIANT
    assert get_policy("verification").variant == "verification"

    policy = TokenomicsPolicy.for_variant("milestone", base_supply=2_000_000)
    assert get_policy(policy) is policy


@pytest.mark.parametrize("value", [5, {}, ["milestone"], True])
def test_get_policy_rejects_other_types(value):
    with pytest.raises(TokenomicsError, match="variant must be a name") as excinfo:
        get_policy(value)

    assert not isinstance(excinfo.value, TokenomicsConfigError)


def test_overrides_apply():
    policy = TokenomicsPolicy.for_variant("milestone", base_price=0.02, price_decimals=4)

    assert policy.base_price == 0.02
    assert policy.price_decimals == 4
    assert policy.variant == "milestone"


def test_single_bonus_cannot_more_than_double():
    with pytest.raises(TokenomicsConfigError, match="follower bonus can contribute"):
        TokenomicsPolicy.for_variant("milestone", supply_weights=(0.5, 0.2, 0.15))


def test_combined_bonuses_bounded():
    with pytest.raises(TokenomicsConfigError, match="above the 3.0x limit"):
        TokenomicsPolicy.for_variant("milestone", supply_weights=(0.3, 0.3, 0.3))


def test_tier_table_must_be_ordered():
    table = dict(MILESTONE_TIER_TABLE)
    table["micro"] = (0.5, 1.5, 1.3, 1.2)

    with pytest.raises(TokenomicsConfigError, match="micro.supply must exceed nano.supply"):
        TokenomicsPolicy.for_variant("milestone", tier_table=table)


def test_tier_table_needs_nano():
    table = {tier: row for tier, row in MILESTONE_TIER_TABLE.items() if tier != "nano"}

    with pytest.raises(TokenomicsConfigError, match="fallback row"):
        TokenomicsPolicy.for_variant("milestone", tier_table=table)


def test_tier_table_rejects_unknown_tier():
    table = dict(MILESTONE_TIER_TABLE, legendary=(30, 6, 3.5, 3))

    with pytest.raises(TokenomicsConfigError, match="unknown tiers"):
        TokenomicsPolicy.for_variant("milestone", tier_table=table)


def test_tier_table_may_omit_large_tiers():
    table = {"nano": (1, 1, 1, 1), "micro": (2, 1.5, 1.2, 1)}
    policy = TokenomicsPolicy.for_variant("milestone", tier_table=table)

    assert policy.tiers() == ["nano", "micro"]
    assert policy.tier_multiplier("mega") is None


def test_base_schedule_must_increase():
    with pytest.raises(MonotonicityViolationError, match="Milestone 2: reward"):
        TokenomicsPolicy.for_variant("milestone", base_schedule=((50, 0.05), (100, 0.05)))


def test_base_schedule_not_empty():
    with pytest.raises(TokenomicsConfigError, match="must not be empty"):
        TokenomicsPolicy.for_variant("milestone", base_schedule=())


def test_unknown_follower_scaling():
    with pytest.raises(TokenomicsConfigError, match="follower scaling"):
        TokenomicsPolicy.for_variant("milestone", follower_scaling="sqrt")


def test_tier_multiplier_from_json():
    row = TierMultiplier.from_json({"supply": 2, "price": 1.5, "rewards": 1.2})

    assert row.milestone_bonus == 1
    assert TierMultiplier.from_json((2, 1.5, 1.2, 1)) == row


def test_policy_to_json():
    data = TokenomicsPolicy.for_variant("verification").to_json()

    assert data["variant"] == "verification"
    assert data["tier_table"]["mega"] == {"supply": 10, "price": 3, "rewards": 2, "milestone_bonus": 1}
    assert data["max_supply_factor"] == pytest.approx(3.0)
    assert data["base_schedule"][0] == [100, 0.05]
