import math

import pytest

from backend.tokenomics.bonuses import (
    follower_bonus,
    engagement_bonus,
    influence_bonus,
    activity_bonus,
    compute_bonuses,
    rounded_bonuses,
)
from backend.tokenomics.metrics import CreatorMetrics
from backend.tokenomics.policy import TokenomicsPolicy

MILESTONE = TokenomicsPolicy.for_variant("milestone")
VERIFICATION = TokenomicsPolicy.for_variant("verification")


def test_follower_bonus_logarithmic():
    assert follower_bonus(0, MILESTONE) == 0
    assert follower_bonus(99_999, MILESTONE) == pytest.approx(1.0)
    assert follower_bonus(10 ** 20, MILESTONE) == 3


def test_follower_bonus_linear():
    assert follower_bonus(15_000, VERIFICATION) == 1.5
    assert follower_bonus(10 ** 9, VERIFICATION) == 10


def test_engagement_bonus_capped():
    assert engagement_bonus(0.02, MILESTONE) == pytest.approx(1.0)
    assert engagement_bonus(0.5, MILESTONE) == 2
    assert engagement_bonus(0.03, VERIFICATION) == pytest.approx(3.0)
    assert engagement_bonus(0.5, VERIFICATION) == 5


def test_influence_bonus_capped():
    assert influence_bonus(45, MILESTONE) == 1.5
    assert influence_bonus(100, MILESTONE) == 3
    assert influence_bonus(60, VERIFICATION) == 3
    assert influence_bonus(100, VERIFICATION) == 5


def test_activity_bonus():
    assert activity_bonus(True, MILESTONE) == 1.1
    assert activity_bonus(False, MILESTONE) == 0.9
    assert activity_bonus(None, MILESTONE) == 1.0
    assert activity_bonus(True, VERIFICATION) == 1.0


def test_compute_bonuses_keeps_full_precision():
    metrics = CreatorMetrics(followers=15000, engagement_rate=0.05, influence_score=60, is_active=True)
    bonuses = compute_bonuses(metrics, MILESTONE)

    assert bonuses["follower_bonus"] == math.log10(15001) / 5
    assert rounded_bonuses(bonuses) == {
        "follower_bonus": 0.84,
        "engagement_bonus": 2,
        "influence_bonus": 2,
        "activity_bonus": 1.1,
    }
