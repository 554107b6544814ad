from backend.config import (
    DEFAULT_TIER,
    TIER_FOLLOWER_THRESHOLDS,
    CROSS_PLATFORM_TIER_THRESHOLDS,
    CROSS_PLATFORM_BONUS_PER_PLATFORM,
    CROSS_PLATFORM_MAX_BONUS,
    CROSS_PLATFORM_MIN_FOLLOWERS,
    CROSS_PLATFORM_MIN_ENGAGEMENT_RATE,
    CROSS_PLATFORM_MIN_SCORE,
    VERIFICATION_MIN_FOLLOWERS,
    VERIFICATION_MIN_ENGAGEMENT_RATE,
    VERIFICATION_MIN_INFLUENCE_SCORE,
)
from backend.tokenomics.policy import get_policy
from backend.util.log import log_warn


def normalize_tier(tier) -> str:
    if not isinstance(tier, str):
        return ""
    return tier.strip().lower()


def resolve_tier_multiplier(tier, policy=None):
    """
    Look up the multiplier row for a tier label.

    Never rejects: an unrecognised label resolves to the nano row and the
    returned tier name is "nano", so the record says which row was applied.
    """
    policy = get_policy(policy)
    name = normalize_tier(tier)
    multiplier = policy.tier_multiplier(name)
    if multiplier is None:
        log_warn(f"[TIER] Unknown tier {tier!r}, falling back to {DEFAULT_TIER}")
        return DEFAULT_TIER, policy.tier_multiplier(DEFAULT_TIER)
    return name, multiplier


def classify_tier(metrics) -> str:
    """
    Single-platform tier from follower count alone.
    """
    for tier, min_followers in TIER_FOLLOWER_THRESHOLDS:
        if metrics.followers >= min_followers:
            return tier
    return DEFAULT_TIER


def classify_cross_platform_tier(total_followers: int, score: float) -> str:
    for tier, min_followers, min_score in CROSS_PLATFORM_TIER_THRESHOLDS:
        if total_followers >= min_followers and score >= min_score:
            return tier
    return DEFAULT_TIER


def meets_verification_criteria(metrics) -> bool:
    return (
        metrics.followers >= VERIFICATION_MIN_FOLLOWERS
        and metrics.engagement_rate >= VERIFICATION_MIN_ENGAGEMENT_RATE
        and metrics.influence_score >= VERIFICATION_MIN_INFLUENCE_SCORE
    )


def verification_report(metrics) -> dict:
    return {
        "verified": meets_verification_criteria(metrics),
        "tier": classify_tier(metrics),
        "score": metrics.influence_score,
        "requirements": {
            "min_followers": VERIFICATION_MIN_FOLLOWERS,
            "min_engagement_rate": VERIFICATION_MIN_ENGAGEMENT_RATE,
            "min_influence_score": VERIFICATION_MIN_INFLUENCE_SCORE,
        },
    }


def cross_platform_report(platform_metrics) -> dict:
    """
    Verification across several linked accounts: followers are summed,
    engagement and influence averaged, and the averaged influence lifted by
    a per-platform bonus before tiering. This is the only path that can
    classify a creator as celebrity.
    """
    platform_metrics = list(platform_metrics)
    requirements = {
        "min_followers": CROSS_PLATFORM_MIN_FOLLOWERS,
        "min_engagement_rate": CROSS_PLATFORM_MIN_ENGAGEMENT_RATE,
        "min_influence_score": CROSS_PLATFORM_MIN_SCORE,
    }
    if not platform_metrics:
        return {"verified": False, "tier": DEFAULT_TIER, "score": 0, "platforms": 0, "requirements": requirements}

    count = len(platform_metrics)
    total_followers = sum(metrics.followers for metrics in platform_metrics)
    avg_engagement = sum(metrics.engagement_rate for metrics in platform_metrics) / count
    avg_influence = sum(metrics.influence_score for metrics in platform_metrics) / count
    platform_bonus = min(count * CROSS_PLATFORM_BONUS_PER_PLATFORM, CROSS_PLATFORM_MAX_BONUS)
    score = avg_influence * (1 + platform_bonus)

    return {
        "verified": (
            total_followers >= CROSS_PLATFORM_MIN_FOLLOWERS
            and avg_engagement >= CROSS_PLATFORM_MIN_ENGAGEMENT_RATE
            and score >= CROSS_PLATFORM_MIN_SCORE
        ),
        "tier": classify_cross_platform_tier(total_followers, score),
        "score": score,
        "platforms": count,
        "total_followers": total_followers,
        "requirements": requirements,
    }
