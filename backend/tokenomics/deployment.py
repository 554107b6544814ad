import math

from backend.config import DEPLOYMENT_REWARD_SCALE, DEPLOYMENT_DEFAULT_FIRST_TARGET


def scaled_reward(reward: float) -> int:
    """
    Contracts take integer per-mille rewards: 0.039 -> 39.
    The small epsilon keeps float noise (0.05 * 1000 = 49.999...) from losing a unit.
    """
    return math.floor(reward * DEPLOYMENT_REWARD_SCALE + 1e-9)


def deployment_parameters(tokenomics) -> dict:
    """
    Constructor inputs for the on-chain milestone token, derived from a
    tokenomics record. The contract call itself happens elsewhere.
    """
    milestones = sorted(tokenomics.milestones, key=lambda milestone: milestone.index)
    market_cap = tokenomics.total_supply * float(tokenomics.initial_price)

    return {
        "total_supply": str(tokenomics.total_supply),
        "initial_price": tokenomics.initial_price,
        "thresholds": [milestone.holders for milestone in milestones],
        "rewards": [scaled_reward(milestone.reward) for milestone in milestones],
        "reward_multiplier": tokenomics.reward_multiplier,
        "tier": tokenomics.tier,
        "tier_multiplier": (tokenomics.multipliers or {}).get("tier_multiplier"),
        "market_cap": str(market_cap),
        "current_milestone": 0,
        "next_milestone_target": milestones[0].holders if milestones else DEPLOYMENT_DEFAULT_FIRST_TARGET,
    }
