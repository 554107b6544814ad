from backend.config import (
    TOKENOMICS_VARIANT,
    BASE_SUPPLY,
    BASE_PRICE,
    TIER_ORDER,
    DEFAULT_TIER,
    MILESTONE_TIER_TABLE,
    VERIFICATION_TIER_TABLE,
    FOLLOWER_LOG_DIVISOR,
    FOLLOWER_LOG_CAP,
    FOLLOWER_LINEAR_DIVISOR,
    FOLLOWER_LINEAR_CAP,
    MILESTONE_ENGAGEMENT_FACTOR,
    MILESTONE_ENGAGEMENT_CAP,
    VERIFICATION_ENGAGEMENT_FACTOR,
    VERIFICATION_ENGAGEMENT_CAP,
    MILESTONE_INFLUENCE_DIVISOR,
    MILESTONE_INFLUENCE_CAP,
    VERIFICATION_INFLUENCE_DIVISOR,
    VERIFICATION_INFLUENCE_CAP,
    MILESTONE_SUPPLY_WEIGHTS,
    MILESTONE_PRICE_INFLUENCE_WEIGHT,
    VERIFICATION_SUPPLY_WEIGHTS,
    VERIFICATION_PRICE_INFLUENCE_WEIGHT,
    MAX_SINGLE_TERM,
    MAX_SUPPLY_FACTOR,
    MILESTONE_PRICE_DECIMALS,
    VERIFICATION_PRICE_DECIMALS,
    MILESTONE_BASE_SCHEDULE,
    VERIFICATION_BASE_SCHEDULE,
)
from backend.economics import bonus_term_bounds, max_supply_factor
from backend.tokenomics.errors import TokenomicsError, TokenomicsConfigError, MonotonicityViolationError

FOLLOWER_SCALINGS = ("log", "linear")

VARIANTS = {
    "milestone": {
        "tier_table": MILESTONE_TIER_TABLE,
        "follower_scaling": "log",
        "engagement_factor": MILESTONE_ENGAGEMENT_FACTOR,
        "engagement_cap": MILESTONE_ENGAGEMENT_CAP,
        "influence_divisor": MILESTONE_INFLUENCE_DIVISOR,
        "influence_cap": MILESTONE_INFLUENCE_CAP,
        "supply_weights": MILESTONE_SUPPLY_WEIGHTS,
        "price_influence_weight": MILESTONE_PRICE_INFLUENCE_WEIGHT,
        "use_activity": True,
        "price_decimals": MILESTONE_PRICE_DECIMALS,
        "base_schedule": MILESTONE_BASE_SCHEDULE,
    },
    "verification": {
        "tier_table": VERIFICATION_TIER_TABLE,
        "follower_scaling": "linear",
        "engagement_factor": VERIFICATION_ENGAGEMENT_FACTOR,
        "engagement_cap": VERIFICATION_ENGAGEMENT_CAP,
        "influence_divisor": VERIFICATION_INFLUENCE_DIVISOR,
        "influence_cap": VERIFICATION_INFLUENCE_CAP,
        "supply_weights": VERIFICATION_SUPPLY_WEIGHTS,
        "price_influence_weight": VERIFICATION_PRICE_INFLUENCE_WEIGHT,
        "use_activity": False,
        "price_decimals": VERIFICATION_PRICE_DECIMALS,
        "base_schedule": VERIFICATION_BASE_SCHEDULE,
    },
}


class TierMultiplier:
    def __init__(self, supply, price, rewards, milestone_bonus=1):
        self.supply = supply
        self.price = price
        self.rewards = rewards
        self.milestone_bonus = milestone_bonus

    def __eq__(self, other):
        return isinstance(other, TierMultiplier) and self.to_json() == other.to_json()

    def __repr__(self):
        return f"TierMultiplier({self.to_json()})"

    def to_json(self):
        return dict(self.__dict__)

    @staticmethod
    def from_json(data):
        if isinstance(data, TierMultiplier):
            return data
        if isinstance(data, (tuple, list)):
            return TierMultiplier(*data)
        return TierMultiplier(**data)


class TokenomicsPolicy:
    """
    One complete set of tokenomics tunables: base supply/price, tier table,
    bonus shapes and weights, price precision and the base milestone schedule.

    A policy validates itself on construction, so a policy object that exists
    is one the engine can run without producing an out-of-bounds record.
    """

    def __init__(
        self,
        variant="custom",
        base_supply=BASE_SUPPLY,
        base_price=BASE_PRICE,
        tier_table=None,
        follower_scaling="log",
        engagement_factor=MILESTONE_ENGAGEMENT_FACTOR,
        engagement_cap=MILESTONE_ENGAGEMENT_CAP,
        influence_divisor=MILESTONE_INFLUENCE_DIVISOR,
        influence_cap=MILESTONE_INFLUENCE_CAP,
        supply_weights=MILESTONE_SUPPLY_WEIGHTS,
        price_influence_weight=MILESTONE_PRICE_INFLUENCE_WEIGHT,
        use_activity=True,
        price_decimals=MILESTONE_PRICE_DECIMALS,
        base_schedule=MILESTONE_BASE_SCHEDULE,
    ):
        self.variant = variant
        self.base_supply = base_supply
        self.base_price = base_price
        self.tier_table = {
            tier: TierMultiplier.from_json(row)
            for tier, row in (tier_table or MILESTONE_TIER_TABLE).items()
        }
        self.follower_scaling = follower_scaling
        self.engagement_factor = engagement_factor
        self.engagement_cap = engagement_cap
        self.influence_divisor = influence_divisor
        self.influence_cap = influence_cap
        self.follower_weight, self.engagement_weight, self.influence_weight = supply_weights
        self.price_influence_weight = price_influence_weight
        self.use_activity = use_activity
        self.price_decimals = price_decimals
        self.base_schedule = tuple((holders, reward) for holders, reward in base_schedule)

        self.validate()

    @classmethod
    def for_variant(cls, variant=None, **overrides):
        variant = variant or TOKENOMICS_VARIANT
        if variant not in VARIANTS:
            raise TokenomicsConfigError(
                f"Unknown tokenomics variant {variant!r}; expected one of {sorted(VARIANTS)}"
            )
        settings = dict(VARIANTS[variant])
        settings.update(overrides)
        return cls(variant=variant, **settings)

    @property
    def follower_cap(self):
        return FOLLOWER_LOG_CAP if self.follower_scaling == "log" else FOLLOWER_LINEAR_CAP

    @property
    def follower_divisor(self):
        return FOLLOWER_LOG_DIVISOR if self.follower_scaling == "log" else FOLLOWER_LINEAR_DIVISOR

    def tiers(self):
        """
        Tier names present in the table, smallest audience first.
        """
        return [tier for tier in TIER_ORDER if tier in self.tier_table]

    def tier_multiplier(self, tier):
        return self.tier_table.get(tier)

    def validate(self):
        if self.base_supply <= 0 or self.base_price <= 0:
            raise TokenomicsConfigError("Base supply and base price must be positive")

        if self.follower_scaling not in FOLLOWER_SCALINGS:
            raise TokenomicsConfigError(f"Unknown follower scaling {self.follower_scaling!r}")

        if self.engagement_factor <= 0 or self.influence_divisor <= 0:
            raise TokenomicsConfigError("Bonus factors and divisors must be positive")

        if DEFAULT_TIER not in self.tier_table:
            raise TokenomicsConfigError(f"Tier table must define the {DEFAULT_TIER!r} fallback row")

        unknown = set(self.tier_table) - set(TIER_ORDER)
        if unknown:
            raise TokenomicsConfigError(f"Tier table has unknown tiers: {sorted(unknown)}")

        self._validate_tier_ordering()

        for term, bound in bonus_term_bounds(self).items():
            if bound > MAX_SINGLE_TERM + 1e-9:
                raise TokenomicsConfigError(
                    f"{term} bonus can contribute {bound:.3f}, more than doubling the base multiplier"
                )

        factor = max_supply_factor(self)
        if factor > MAX_SUPPLY_FACTOR + 1e-9:
            raise TokenomicsConfigError(
                f"Bonuses can scale supply by {factor:.3f}x, above the {MAX_SUPPLY_FACTOR}x limit"
            )

        self._validate_base_schedule()

    def _validate_tier_ordering(self):
        rows = [(tier, self.tier_table[tier]) for tier in self.tiers()]
        for tier, row in rows:
            if min(row.supply, row.price, row.rewards, row.milestone_bonus) <= 0:
                raise TokenomicsConfigError(f"Tier {tier!r} multipliers must be positive")

        for (low_tier, low), (high_tier, high) in zip(rows, rows[1:]):
            for field in ("supply", "price", "rewards"):
                if getattr(high, field) <= getattr(low, field):
                    raise TokenomicsConfigError(
                        f"Tier table not ordered: {high_tier}.{field} must exceed {low_tier}.{field}"
                    )
            if high.milestone_bonus < low.milestone_bonus:
                raise TokenomicsConfigError(
                    f"Tier table not ordered: {high_tier}.milestone_bonus below {low_tier}.milestone_bonus"
                )

    def _validate_base_schedule(self):
        if not self.base_schedule:
            raise TokenomicsConfigError("Base milestone schedule must not be empty")

        previous = None
        for index, (holders, reward) in enumerate(self.base_schedule, start=1):
            if holders <= 0 or not 0 < reward < 1:
                raise TokenomicsConfigError(
                    f"Base milestone {index} needs holders > 0 and 0 < reward < 1"
                )
            if previous is not None:
                if holders <= previous[0]:
                    raise MonotonicityViolationError(index, "holders", previous[0], holders)
                if reward <= previous[1]:
                    raise MonotonicityViolationError(index, "reward", previous[1], reward)
            previous = (holders, reward)

    def to_json(self):
        return {
            "variant": self.variant,
            "base_supply": self.base_supply,
            "base_price": self.base_price,
            "tier_table": {tier: self.tier_table[tier].to_json() for tier in self.tiers()},
            "follower_scaling": self.follower_scaling,
            "follower_divisor": self.follower_divisor,
            "follower_cap": self.follower_cap,
            "engagement_factor": self.engagement_factor,
            "engagement_cap": self.engagement_cap,
            "influence_divisor": self.influence_divisor,
            "influence_cap": self.influence_cap,
            "supply_weights": [self.follower_weight, self.engagement_weight, self.influence_weight],
            "price_influence_weight": self.price_influence_weight,
            "use_activity": self.use_activity,
            "price_decimals": self.price_decimals,
            "base_schedule": [list(entry) for entry in self.base_schedule],
            "max_supply_factor": max_supply_factor(self),
        }


def get_policy(policy=None):
    """
    Return the given policy, or the one selected by TOKENOMICS_VARIANT.
    """
    if policy is None:
        return TokenomicsPolicy.for_variant()
    if isinstance(policy, str):
        return TokenomicsPolicy.for_variant(policy)
    if not isinstance(policy, TokenomicsPolicy):
        raise TokenomicsError(f"Tokenomics variant must be a name, got {policy!r}")
    return policy
