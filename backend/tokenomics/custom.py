import math

from backend.config import (
    CUSTOM_TIER,
    CUSTOM_MIN_SUPPLY,
    CUSTOM_MAX_SUPPLY,
    CUSTOM_MIN_PRICE,
    CUSTOM_MAX_PRICE,
    CUSTOM_MIN_HOLDERS,
    CUSTOM_MIN_REWARD,
    CUSTOM_MAX_REWARD,
    CUSTOM_REWARD_MULTIPLIER,
    MILESTONE_PRICE_DECIMALS,
)
from backend.economics import format_price, parse_price
from backend.tokenomics.errors import (
    TokenomicsError,
    InvalidSupplyError,
    InvalidPriceError,
    InvalidMilestoneError,
)
from backend.tokenomics.milestones import Milestone
from backend.tokenomics.record import Tokenomics
from backend.util.log import log_info


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float)) and math.isfinite(value)


def _validate_supply(value) -> int:
    message = f"Total supply must be between {CUSTOM_MIN_SUPPLY:,} and {CUSTOM_MAX_SUPPLY:,}"
    if not _is_number(value):
        raise InvalidSupplyError(value, message)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidSupplyError(value, "Total supply must be a whole number")
    if not CUSTOM_MIN_SUPPLY <= value <= CUSTOM_MAX_SUPPLY:
        raise InvalidSupplyError(value, message)
    return int(value)


def _validate_price(value, price_decimals) -> str:
    message = f"Initial price must be between {CUSTOM_MIN_PRICE} and {CUSTOM_MAX_PRICE}"
    if isinstance(value, str):
        parsed = parse_price(value)
        if parsed is None:
            raise InvalidPriceError(value, "Initial price must be a plain decimal string such as \"0.02\"")
    elif _is_number(value):
        parsed = float(value)
    else:
        raise InvalidPriceError(value, message)
    if not CUSTOM_MIN_PRICE <= parsed <= CUSTOM_MAX_PRICE:
        raise InvalidPriceError(value, message)
    return format_price(parsed, price_decimals)


def _validate_milestone(index, entry, previous):
    if not isinstance(entry, dict):
        raise InvalidMilestoneError(index, None, "must be an object with holders and reward")

    holders = entry.get("holders")
    if not _is_number(holders) or holders < CUSTOM_MIN_HOLDERS:
        raise InvalidMilestoneError(index, "holders", f"holders must be at least {CUSTOM_MIN_HOLDERS}")
    if isinstance(holders, float) and not holders.is_integer():
        raise InvalidMilestoneError(index, "holders", "holders must be a whole number")

    reward = entry.get("reward")
    if not _is_number(reward) or not CUSTOM_MIN_REWARD <= reward <= CUSTOM_MAX_REWARD:
        raise InvalidMilestoneError(
            index, "reward", f"reward must be between {CUSTOM_MIN_REWARD} and {CUSTOM_MAX_REWARD}"
        )

    if previous is not None:
        if holders <= previous.holders:
            raise InvalidMilestoneError(
                index, "holders", f"holders must be greater than milestone {previous.index}"
            )
        if reward <= previous.reward:
            raise InvalidMilestoneError(
                index, "reward", f"reward must be greater than milestone {previous.index}"
            )

    return Milestone(
        holders=int(holders),
        reward=float(reward),
        index=index,
        description=entry.get("description"),
    )


def validate_custom_tokenomics(data, price_decimals=MILESTONE_PRICE_DECIMALS) -> Tokenomics:
    """
    Accept a creator-supplied supply, price and milestone schedule.

    Tier multipliers are not applied: the schedule is used as given, tagged
    with the "custom" tier and a reward multiplier of 1. Every milestone is
    re-numbered from 1 and starts locked.
    """
    if not isinstance(data, dict):
        raise TokenomicsError("Custom tokenomics must be an object")

    total_supply = _validate_supply(data.get("total_supply"))
    initial_price = _validate_price(data.get("initial_price"), price_decimals)

    raw_milestones = data.get("milestones")
    if not isinstance(raw_milestones, list) or not raw_milestones:
        raise InvalidMilestoneError(None, "milestones", "Milestones array is required")

    milestones = []
    previous = None
    for index, entry in enumerate(raw_milestones, start=1):
        previous = _validate_milestone(index, entry, previous)
        milestones.append(previous)

    log_info(
        f"[CUSTOM] Accepted custom tokenomics supply={total_supply} "
        f"price={initial_price} milestones={len(milestones)}"
    )

    return Tokenomics(
        total_supply=total_supply,
        initial_price=initial_price,
        tier=CUSTOM_TIER,
        milestones=milestones,
        reward_multiplier=CUSTOM_REWARD_MULTIPLIER,
        variant=CUSTOM_TIER,
    )
