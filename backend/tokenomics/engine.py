"""
Entry points of the tokenomics engine.

All three functions are pure: no I/O, no shared state, safe to call from any
number of request handlers at once. For fixed inputs compute_tokenomics
returns the same record every time apart from `calculated_at`.
"""

from backend.economics import total_supply, initial_price
from backend.tokenomics.bonuses import compute_bonuses, rounded_bonuses
from backend.tokenomics.custom import validate_custom_tokenomics
from backend.tokenomics.metrics import CreatorMetrics
from backend.tokenomics.milestones import generate_milestones, evaluate_progress
from backend.tokenomics.policy import get_policy
from backend.tokenomics.record import Tokenomics
from backend.tokenomics.tiers import resolve_tier_multiplier
from backend.util.log import log_info

__all__ = [
    "compute_tokenomics",
    "validate_custom_tokenomics",
    "evaluate_progress",
]


def compute_tokenomics(metrics, tier, policy=None) -> Tokenomics:
    """
    Derive supply, initial price and the milestone schedule for a creator.

    metrics may be a CreatorMetrics or its JSON dict; malformed metrics raise
    InvalidMetricsError. policy defaults to the configured variant.
    """
    policy = get_policy(policy)
    metrics = CreatorMetrics.from_json(metrics)
    tier_name, multiplier = resolve_tier_multiplier(tier, policy)

    bonuses = compute_bonuses(metrics, policy)
    supply = total_supply(multiplier, bonuses, policy)
    price = initial_price(multiplier, bonuses, policy)
    milestones = generate_milestones(multiplier, policy)

    displayed_bonuses = rounded_bonuses(bonuses)
    if not policy.use_activity:
        displayed_bonuses.pop("activity_bonus")

    tokenomics = Tokenomics(
        total_supply=supply,
        initial_price=price,
        tier=tier_name,
        milestones=milestones,
        reward_multiplier=multiplier.rewards,
        multipliers={"tier_multiplier": multiplier.to_json(), **displayed_bonuses},
        variant=policy.variant,
        based_on_metrics={**metrics.to_json(), "tier": tier_name},
    )

    log_info(
        f"[TOKENOMICS] Computed tier={tier_name} variant={policy.variant} "
        f"supply={supply} price={price} milestones={len(milestones)}"
    )
    return tokenomics
