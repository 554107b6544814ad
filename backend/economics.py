import math
import re

from backend.config import (
    ACTIVITY_ACTIVE,
    ACTIVITY_INACTIVE,
    ACTIVITY_UNKNOWN,
)

PRICE_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?")


def bonus_term_bounds(policy) -> dict:
    """
    Largest contribution each weighted bonus can add to the supply multiplier
    (weight x cap). Each must stay <= 1 so no single metric more than doubles it.
    """
    return {
        "follower": policy.follower_weight * policy.follower_cap,
        "engagement": policy.engagement_weight * policy.engagement_cap,
        "influence": policy.influence_weight * policy.influence_cap,
    }


def max_activity_factor(policy) -> float:
    if not policy.use_activity:
        return ACTIVITY_UNKNOWN
    return max(ACTIVITY_ACTIVE, ACTIVITY_INACTIVE, ACTIVITY_UNKNOWN)


def max_supply_factor(policy) -> float:
    """
    Upper bound of total_supply / (base_supply * tier supply multiplier):
    every bonus at its cap, activity at its highest adjustment.
    """
    return (1 + sum(bonus_term_bounds(policy).values())) * max_activity_factor(policy)


def supply_factor(bonuses: dict, policy) -> float:
    return (
        1
        + bonuses["follower_bonus"] * policy.follower_weight
        + bonuses["engagement_bonus"] * policy.engagement_weight
        + bonuses["influence_bonus"] * policy.influence_weight
    )


def total_supply(tier_multiplier, bonuses: dict, policy) -> int:
    """
    floor(base_supply * tier.supply * (1 + weighted bonuses) * activity)
    """
    return math.floor(
        policy.base_supply
        * tier_multiplier.supply
        * supply_factor(bonuses, policy)
        * bonuses["activity_bonus"]
    )


def format_price(value: float, decimals: int) -> str:
    return f"{value:.{decimals}f}"


def parse_price(text):
    """
    Read a plain fixed-point price string ("0.018", "12"). Exponents,
    underscores, signs and nan/inf are not prices; they return None.
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    if not PRICE_PATTERN.fullmatch(text):
        return None
    return float(text)


def initial_price(tier_multiplier, bonuses: dict, policy) -> str:
    """
    base_price * tier.price * (1 + influence bonus * price weight), as a fixed-point string.
    """
    value = (
        policy.base_price
        * tier_multiplier.price
        * (1 + bonuses["influence_bonus"] * policy.price_influence_weight)
    )
    return format_price(value, policy.price_decimals)
