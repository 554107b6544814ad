import pytest

from backend.tokenomics.engine import compute_tokenomics
from backend.tokenomics.errors import (
    InvalidMetricsError,
    InvalidMilestoneError,
    MonotonicityViolationError,
    TokenomicsConfigError,
)
from backend.tokenomics.milestones import Milestone, generate_milestones, evaluate_progress
from backend.tokenomics.policy import TokenomicsPolicy, TierMultiplier


@pytest.fixture
def micro_tokenomics():
    return compute_tokenomics(
        {"followers": 15000, "engagement_rate": 0.05, "influence_score": 60},
        "micro",
        policy="milestone"
    )


def test_generate_milestones_scales_base_schedule():
    policy = TokenomicsPolicy.for_variant("milestone")
    milestones = generate_milestones(TierMultiplier(2.5, 1.5, 1.3, 1.2), policy)

    assert [m.holders for m in milestones] == [60, 120, 300, 600, 1200, 3000, 6000, 12000]
    assert milestones[0].reward == pytest.approx(0.039)
    assert milestones[-1].reward == pytest.approx(0.325)
    assert milestones[0].description == "Milestone 1: 60 holders"
    assert milestones[-1].index == 8


def test_generate_milestones_nano_matches_base_schedule():
    policy = TokenomicsPolicy.for_variant("verification")
    milestones = generate_milestones(policy.tier_multiplier("nano"), policy)

    assert [(m.holders, m.reward) for m in milestones] == list(policy.base_schedule)


def test_generate_milestones_rejects_collapsed_thresholds():
    policy = TokenomicsPolicy.for_variant("milestone", base_schedule=((50, 0.03), (51, 0.04)))

    with pytest.raises(MonotonicityViolationError, match="Milestone 2: holders must be strictly increasing"):
        generate_milestones(TierMultiplier(1, 1, 1, 0.5), policy)


def test_generate_milestones_rejects_reward_above_one():
    policy = TokenomicsPolicy.for_variant("milestone")

    with pytest.raises(TokenomicsConfigError, match="outside"):
        generate_milestones(TierMultiplier(1, 1, 5, 1), policy)


def test_progress_with_no_holders(micro_tokenomics):
    progress = evaluate_progress(micro_tokenomics, 0)

    assert progress.current_milestone is None
    assert progress.current_index == 0
    assert progress.next_milestone == micro_tokenomics.milestones[0]
    assert progress.progress_percent == 0
    assert progress.pending_unlocks == []


def test_progress_between_milestones(micro_tokenomics):
    progress = evaluate_progress(micro_tokenomics, 130)

    assert progress.current_milestone.index == 2
    assert progress.next_milestone.index == 3
    assert progress.progress_percent == pytest.approx(130 / 300 * 100)
    assert progress.holders_needed == 170
    assert [m.index for m in progress.pending_unlocks] == [1, 2]


def test_progress_exactly_on_threshold(micro_tokenomics):
    progress = evaluate_progress(micro_tokenomics, 120)

    assert progress.current_milestone.index == 2
    assert progress.next_milestone.index == 3


def test_progress_past_last_milestone(micro_tokenomics):
    last = micro_tokenomics.milestones[-1]

    for holders in (last.holders, last.holders * 10):
        progress = evaluate_progress(micro_tokenomics, holders)

        assert progress.current_milestone == last
        assert progress.next_milestone is None
        assert progress.progress_percent == 100
        assert progress.holders_needed == 0


def test_progress_is_idempotent(micro_tokenomics):
    before = [m.to_json() for m in micro_tokenomics.milestones]
    first = evaluate_progress(micro_tokenomics, 700)
    second = evaluate_progress(micro_tokenomics, 700)

    assert first.to_json() == second.to_json()
    assert [m.to_json() for m in micro_tokenomics.milestones] == before


def test_unlocked_milestones_are_not_pending(micro_tokenomics):
    # the tracker persisted unlocks for the first two milestones
    for milestone in micro_tokenomics.milestones[:2]:
        milestone.unlocked = True

    progress = evaluate_progress(micro_tokenomics, 130)

    assert progress.current_milestone.index == 2
    assert progress.pending_unlocks == []


def test_next_milestone_skips_already_unlocked(micro_tokenomics):
    micro_tokenomics.milestones[2].unlocked = True

    progress = evaluate_progress(micro_tokenomics, 130)

    assert progress.next_milestone.index == 4
    assert progress.progress_percent == pytest.approx(130 / 600 * 100)


@pytest.mark.parametrize("holders_count", [-1, 1.5, None, "10", True])
def test_progress_rejects_bad_holder_count(micro_tokenomics, holders_count):
    with pytest.raises(InvalidMetricsError, match="holders_count"):
        evaluate_progress(micro_tokenomics, holders_count)


def test_progress_to_json(micro_tokenomics):
    data = evaluate_progress(micro_tokenomics, 60).to_json()

    assert data["current_index"] == 1
    assert data["next_milestone"]["holders"] == 120
    assert data["progress_percent"] == 50
    assert data["pending_unlocks"] == [1]


def test_milestone_json_defaults():
    milestone = Milestone.from_json({"holders": 100, "reward": 0.05, "index": 1})

    assert milestone.unlocked is False
    assert milestone.description == "Milestone 1: 100 holders"


@pytest.mark.parametrize("data, field", [
    ({"holders": "10", "reward": 0.05, "index": 1}, "holders"),
    ({"holders": 10.5, "reward": 0.05, "index": 1}, "holders"),
    ({"holders": 10, "reward": "0.05", "index": 1}, "reward"),
    ({"holders": 10, "reward": float("inf"), "index": 1}, "reward"),
    ({"holders": 10, "reward": 0.05, "index": "1"}, "index"),
    ({"holders": 10, "reward": 0.05}, "index"),
])
def test_milestone_from_json_checks_types(data, field):
    with pytest.raises(InvalidMilestoneError) as excinfo:
        Milestone.from_json(data)

    assert excinfo.value.field == field


def test_milestone_from_json_requires_object():
    with pytest.raises(InvalidMilestoneError, match="must be an object"):
        Milestone.from_json([10, 0.05, 1])
