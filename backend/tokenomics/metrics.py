import math

from backend.tokenomics.errors import InvalidMetricsError

REQUIRED_FIELDS = ("followers", "engagement_rate", "influence_score")


def _check_number(field, value, integer=False):
    # bool is an int subclass; a True follower count is garbage input
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMetricsError(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidMetricsError(field, value, "must be finite")
    if value < 0:
        raise InvalidMetricsError(field, value, "must not be negative")
    if integer:
        if isinstance(value, float) and not value.is_integer():
            raise InvalidMetricsError(field, value, "must be a whole number")
        return int(value)
    return value


class CreatorMetrics:
    """
    Audience metrics for one creator, as delivered by the verification provider.
    engagement_rate is a fraction (0.05 == 5%), influence_score is 0-100.
    """

    def __init__(self, followers, engagement_rate, influence_score, is_active=None, authenticity_score=None):
        self.followers = _check_number("followers", followers, integer=True)
        self.engagement_rate = _check_number("engagement_rate", engagement_rate)
        self.influence_score = _check_number("influence_score", influence_score)

        if is_active is not None and not isinstance(is_active, bool):
            raise InvalidMetricsError("is_active", is_active, "must be true, false or null")
        self.is_active = is_active

        if authenticity_score is not None:
            authenticity_score = _check_number("authenticity_score", authenticity_score)
        self.authenticity_score = authenticity_score

    def __eq__(self, other):
        return isinstance(other, CreatorMetrics) and self.to_json() == other.to_json()

    def __repr__(self):
        return f"CreatorMetrics({self.to_json()})"

    def to_json(self):
        return dict(self.__dict__)

    @staticmethod
    def from_json(data):
        if isinstance(data, CreatorMetrics):
            return data
        if not isinstance(data, dict):
            raise InvalidMetricsError("metrics", data, "must be an object")

        for field in REQUIRED_FIELDS:
            if data.get(field) is None:
                raise InvalidMetricsError(field, None, "is required")

        return CreatorMetrics(
            followers=data["followers"],
            engagement_rate=data["engagement_rate"],
            influence_score=data["influence_score"],
            is_active=data.get("is_active"),
            authenticity_score=data.get("authenticity_score"),
        )
