import time

from backend.economics import parse_price
from backend.tokenomics.errors import TokenomicsError, InvalidSupplyError, InvalidPriceError, InvalidMilestoneError
from backend.tokenomics.milestones import Milestone
from backend.util.crypto_hash import record_fingerprint


class Tokenomics:
    """
    The derived supply, price and milestone schedule of one creator token.

    Records are recomputed when fresh metrics arrive, never patched; the only
    field that changes after creation is each milestone's `unlocked` flag, and
    that change belongs to the persistence layer.
    """

    def __init__(
        self,
        total_supply,
        initial_price,
        tier,
        milestones,
        reward_multiplier,
        multipliers=None,
        variant=None,
        based_on_metrics=None,
        calculated_at=None,
    ):
        self.total_supply = total_supply
        self.initial_price = initial_price
        self.tier = tier
        self.multipliers = multipliers
        self.milestones = list(milestones)
        self.reward_multiplier = reward_multiplier
        self.variant = variant
        self.based_on_metrics = based_on_metrics
        self.calculated_at = time.time_ns() if calculated_at is None else calculated_at
        self.fingerprint = None
        self.fingerprint = record_fingerprint(self.to_json())

    def __repr__(self):
        return f"Tokenomics({self.tier} supply={self.total_supply} price={self.initial_price})"

    def to_json(self):
        """
        Serialize the record, milestones included.
        """
        return {
            "total_supply": self.total_supply,
            "initial_price": self.initial_price,
            "tier": self.tier,
            "multipliers": self.multipliers,
            "milestones": [milestone.to_json() for milestone in self.milestones],
            "reward_multiplier": self.reward_multiplier,
            "variant": self.variant,
            "based_on_metrics": self.based_on_metrics,
            "calculated_at": self.calculated_at,
            "fingerprint": self.fingerprint,
        }

    @staticmethod
    def from_json(tokenomics_json):
        if isinstance(tokenomics_json, Tokenomics):
            return tokenomics_json
        if not isinstance(tokenomics_json, dict):
            raise TokenomicsError("Tokenomics record must be an object")
        for field in ("total_supply", "initial_price", "tier"):
            if field not in tokenomics_json:
                raise TokenomicsError(f"Tokenomics record is missing {field}")

        total_supply = tokenomics_json["total_supply"]
        if isinstance(total_supply, bool) or not isinstance(total_supply, int) or total_supply <= 0:
            raise InvalidSupplyError(total_supply, f"Stored total supply {total_supply!r} is not a positive integer")
        initial_price = tokenomics_json["initial_price"]
        if parse_price(initial_price) is None:
            raise InvalidPriceError(initial_price, f"Stored initial price {initial_price!r} is not a decimal string")

        raw_milestones = tokenomics_json.get("milestones") or []
        if not isinstance(raw_milestones, list):
            raise InvalidMilestoneError(None, "milestones", "Stored milestones must be a list")
        milestones = [Milestone.from_json(m) for m in raw_milestones]

        return Tokenomics(
            total_supply=total_supply,
            initial_price=initial_price,
            tier=tokenomics_json["tier"],
            milestones=milestones,
            reward_multiplier=tokenomics_json.get("reward_multiplier", 1),
            multipliers=tokenomics_json.get("multipliers"),
            variant=tokenomics_json.get("variant"),
            based_on_metrics=tokenomics_json.get("based_on_metrics"),
            calculated_at=tokenomics_json.get("calculated_at"),
        )
