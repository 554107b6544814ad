import math

from backend.config import (
    ACTIVITY_ACTIVE,
    ACTIVITY_INACTIVE,
    ACTIVITY_UNKNOWN,
    BONUS_DECIMALS,
)


def follower_bonus(followers: int, policy) -> float:
    """
    Follower counts are heavy-tailed, so the default policy scales them
    logarithmically; the linear shape is kept for the verification variant.
    """
    if policy.follower_scaling == "log":
        raw = math.log10(followers + 1) / policy.follower_divisor
    else:
        raw = followers / policy.follower_divisor
    return min(raw, policy.follower_cap)


def engagement_bonus(engagement_rate: float, policy) -> float:
    return min(engagement_rate * policy.engagement_factor, policy.engagement_cap)


def influence_bonus(influence_score: float, policy) -> float:
    return min(influence_score / policy.influence_divisor, policy.influence_cap)


def activity_bonus(is_active, policy) -> float:
    if not policy.use_activity or is_active is None:
        return ACTIVITY_UNKNOWN
    return ACTIVITY_ACTIVE if is_active else ACTIVITY_INACTIVE


def compute_bonuses(metrics, policy) -> dict:
    """
    Full-precision bonuses used by the supply and price formulas.
    """
    return {
        "follower_bonus": follower_bonus(metrics.followers, policy),
        "engagement_bonus": engagement_bonus(metrics.engagement_rate, policy),
        "influence_bonus": influence_bonus(metrics.influence_score, policy),
        "activity_bonus": activity_bonus(metrics.is_active, policy),
    }


def rounded_bonuses(bonuses: dict) -> dict:
    return {name: round(value, BONUS_DECIMALS) for name, value in bonuses.items()}
