class TokenomicsError(Exception):
    """
    Base class for every failure raised by the tokenomics engine.
    None of them are retryable: the same input always fails the same way.
    """


class InvalidMetricsError(TokenomicsError):
    def __init__(self, field, value, reason="must be a finite number >= 0"):
        self.field = field
        self.value = value
        super().__init__(f"Invalid metric {field}={value!r}: {reason}")


class InvalidSupplyError(TokenomicsError):
    def __init__(self, value, message):
        self.field = "total_supply"
        self.value = value
        super().__init__(message)


class InvalidPriceError(TokenomicsError):
    def __init__(self, value, message):
        self.field = "initial_price"
        self.value = value
        super().__init__(message)


class InvalidMilestoneError(TokenomicsError):
    def __init__(self, index, field, message):
        self.index = index
        self.field = field
        if index is None:
            super().__init__(message)
        else:
            super().__init__(f"Milestone {index}: {message}")


class TokenomicsConfigError(TokenomicsError):
    """
    The configured policy (tier table, weights, schedule) is inconsistent.
    """


class MonotonicityViolationError(TokenomicsConfigError):
    def __init__(self, index, field, previous, current):
        self.index = index
        self.field = field
        super().__init__(
            f"Milestone {index}: {field} must be strictly increasing "
            f"(got {current} after {previous})"
        )
