import math

from backend.tokenomics.errors import (
    InvalidMetricsError,
    InvalidMilestoneError,
    TokenomicsConfigError,
    MonotonicityViolationError,
)
from backend.util.log import log_debug


def _is_whole(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and math.isfinite(value)


class Milestone:
    """
    A holder-count threshold that unlocks a one-time reward share once crossed.

    `unlocked` is owned by whatever tracks live holder counts; the engine only
    ever creates milestones with unlocked=False and never flips it.
    """

    def __init__(self, holders, reward, index, unlocked=False, description=None):
        self.holders = holders
        self.reward = reward
        self.unlocked = unlocked
        self.index = index
        self.description = description or Milestone.describe(index, holders)

    def __eq__(self, other):
        return isinstance(other, Milestone) and self.to_json() == other.to_json()

    def __repr__(self):
        return f"Milestone({self.to_json()})"

    @staticmethod
    def describe(index, holders):
        return f"Milestone {index}: {holders} holders"

    def to_json(self):
        return dict(self.__dict__)

    @staticmethod
    def from_json(milestone_json):
        if isinstance(milestone_json, Milestone):
            return milestone_json
        if not isinstance(milestone_json, dict):
            raise InvalidMilestoneError(None, None, "Stored milestone must be an object")

        index = milestone_json.get("index")
        if not _is_whole(index):
            raise InvalidMilestoneError(None, "index", f"Stored milestone index {index!r} is not an integer")
        holders = milestone_json.get("holders")
        if not _is_whole(holders):
            raise InvalidMilestoneError(index, "holders", f"holders {holders!r} is not an integer")
        reward = milestone_json.get("reward")
        if not _is_number(reward):
            raise InvalidMilestoneError(index, "reward", f"reward {reward!r} is not a number")

        return Milestone(
            holders=holders,
            reward=reward,
            index=index,
            unlocked=bool(milestone_json.get("unlocked", False)),
            description=milestone_json.get("description"),
        )


def check_schedule(milestones):
    """
    Every threshold and reward must be strictly larger than the one before:
    next-milestone lookups walk the list in order and stop at the first match.
    """
    previous = None
    for milestone in milestones:
        if milestone.holders <= 0:
            raise TokenomicsConfigError(f"Milestone {milestone.index}: holders must be positive")
        if not 0 < milestone.reward < 1:
            raise TokenomicsConfigError(
                f"Milestone {milestone.index}: reward {milestone.reward} outside (0, 1)"
            )
        if previous is not None:
            if milestone.holders <= previous.holders:
                raise MonotonicityViolationError(
                    milestone.index, "holders", previous.holders, milestone.holders
                )
            if milestone.reward <= previous.reward:
                raise MonotonicityViolationError(
                    milestone.index, "reward", previous.reward, milestone.reward
                )
        previous = milestone


def generate_milestones(tier_multiplier, policy):
    """
    Scale the policy's base schedule for one tier: thresholds by the tier's
    milestone bonus (floored), rewards by its reward multiplier.
    """
    milestones = []
    for index, (base_holders, base_reward) in enumerate(policy.base_schedule, start=1):
        holders = math.floor(base_holders * tier_multiplier.milestone_bonus)
        reward = base_reward * tier_multiplier.rewards
        milestones.append(Milestone(holders=holders, reward=reward, index=index))

    check_schedule(milestones)
    log_debug(
        f"[MILESTONE] Generated {len(milestones)} milestones "
        f"first={milestones[0].holders} last={milestones[-1].holders}"
    )
    return milestones


class MilestoneProgress:
    def __init__(self, holders_count, current_milestone, next_milestone, progress_percent, pending_unlocks):
        self.holders_count = holders_count
        self.current_milestone = current_milestone
        self.next_milestone = next_milestone
        self.progress_percent = progress_percent
        self.pending_unlocks = pending_unlocks

    @property
    def current_index(self):
        return self.current_milestone.index if self.current_milestone else 0

    @property
    def holders_needed(self):
        if self.next_milestone is None:
            return 0
        return self.next_milestone.holders - self.holders_count

    def to_json(self):
        return {
            "holders_count": self.holders_count,
            "current_milestone": self.current_milestone.to_json() if self.current_milestone else None,
            "current_index": self.current_index,
            "next_milestone": self.next_milestone.to_json() if self.next_milestone else None,
            "progress_percent": self.progress_percent,
            "holders_needed": self.holders_needed,
            "pending_unlocks": [milestone.index for milestone in self.pending_unlocks],
        }


def evaluate_progress(tokenomics, holders_count) -> MilestoneProgress:
    """
    Where a live holder count sits on a token's milestone schedule.

    - current_milestone: highest-index milestone with holders <= holders_count
    - next_milestone: lowest-index milestone above holders_count not yet unlocked
    - progress_percent: holders_count / next.holders * 100, capped at 100
    - pending_unlocks: reached milestones still flagged locked; the caller
      unlocks and pays each of them once, then persists the flag

    Read-only: evaluating the same count twice returns the same answer.
    """
    if isinstance(holders_count, bool) or not isinstance(holders_count, int) or holders_count < 0:
        raise InvalidMetricsError("holders_count", holders_count, "must be a whole number >= 0")

    milestones = sorted(tokenomics.milestones, key=lambda milestone: milestone.index)

    current_milestone = None
    pending_unlocks = []
    for milestone in milestones:
        if milestone.holders <= holders_count:
            current_milestone = milestone
            if not milestone.unlocked:
                pending_unlocks.append(milestone)

    next_milestone = next(
        (
            milestone for milestone in milestones
            if milestone.holders > holders_count and not milestone.unlocked
        ),
        None
    )

    if next_milestone is None:
        progress_percent = 100.0
    else:
        progress_percent = min(100.0, holders_count / next_milestone.holders * 100)

    return MilestoneProgress(
        holders_count=holders_count,
        current_milestone=current_milestone,
        next_milestone=next_milestone,
        progress_percent=progress_percent,
        pending_unlocks=pending_unlocks,
    )
