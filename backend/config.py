import os

# HTTP defaults
API_HOST = "0.0.0.0"
API_PORT = int(os.environ.get("API_PORT", 5000))

# Logging: debug < info < warn < error
LOG_LEVEL = os.environ.get("LOG_LEVEL", "info").lower()

# Which tokenomics variant the engine runs by default ("milestone" or "verification")
TOKENOMICS_VARIANT = os.environ.get("TOKENOMICS_VARIANT", "milestone")

# Base token parameters
BASE_SUPPLY = 1_000_000
BASE_PRICE = 0.01

# Tiers, smallest audience first
TIER_ORDER = ("nano", "micro", "macro", "mega", "celebrity")
DEFAULT_TIER = "nano"
CUSTOM_TIER = "custom"

# Tier tables: tier -> (supply, price, rewards, milestone_bonus)
MILESTONE_TIER_TABLE = {
    "nano": (1, 1, 1, 1),
    "micro": (2.5, 1.5, 1.3, 1.2),
    "macro": (6, 2.5, 1.7, 1.5),
    "mega": (12, 4, 2.5, 2),
    "celebrity": (20, 5, 3, 2.5),
}
VERIFICATION_TIER_TABLE = {
    "nano": (1, 1, 1, 1),
    "micro": (2, 1.5, 1.2, 1),
    "macro": (5, 2, 1.5, 1),
    "mega": (10, 3, 2, 1),
    "celebrity": (16, 4, 2.5, 1),
}

# Follower bonus
# Logarithmic: min(log10(followers + 1) / FOLLOWER_LOG_DIVISOR, FOLLOWER_LOG_CAP)
FOLLOWER_LOG_DIVISOR = 5
FOLLOWER_LOG_CAP = 3
# Linear: min(followers / FOLLOWER_LINEAR_DIVISOR, FOLLOWER_LINEAR_CAP)
FOLLOWER_LINEAR_DIVISOR = 10_000
FOLLOWER_LINEAR_CAP = 10

# Engagement bonus: min(engagement_rate * factor, cap)
MILESTONE_ENGAGEMENT_FACTOR = 50
MILESTONE_ENGAGEMENT_CAP = 2
VERIFICATION_ENGAGEMENT_FACTOR = 100
VERIFICATION_ENGAGEMENT_CAP = 5

# Influence bonus: min(influence_score / divisor, cap)
MILESTONE_INFLUENCE_DIVISOR = 30
MILESTONE_INFLUENCE_CAP = 3
VERIFICATION_INFLUENCE_DIVISOR = 20
VERIFICATION_INFLUENCE_CAP = 5

# Activity adjustment (+/-10%)
ACTIVITY_ACTIVE = 1.1
ACTIVITY_INACTIVE = 0.9
ACTIVITY_UNKNOWN = 1.0

# Supply weights (follower, engagement, influence) and price weight (influence)
MILESTONE_SUPPLY_WEIGHTS = (0.15, 0.2, 0.15)
MILESTONE_PRICE_INFLUENCE_WEIGHT = 0.1
VERIFICATION_SUPPLY_WEIGHTS = (0.1, 0.1, 0.1)
VERIFICATION_PRICE_INFLUENCE_WEIGHT = 0

# A single weighted bonus term may at most double the base multiplier,
# and all of them together (with activity) may not exceed 3x the tier-base supply.
MAX_SINGLE_TERM = 1.0
MAX_SUPPLY_FACTOR = 3.0

# Decimal places of the initial price string
MILESTONE_PRICE_DECIMALS = 6
VERIFICATION_PRICE_DECIMALS = 4

# Base milestone schedules: (holders, reward)
MILESTONE_BASE_SCHEDULE = (
    (50, 0.03),
    (100, 0.05),
    (250, 0.08),
    (500, 0.12),
    (1000, 0.15),
    (2500, 0.18),
    (5000, 0.22),
    (10000, 0.25),
)
VERIFICATION_BASE_SCHEDULE = (
    (100, 0.05),
    (500, 0.1),
    (1000, 0.15),
    (5000, 0.2),
    (10000, 0.25),
)

# Bonus rounding on the stored record
BONUS_DECIMALS = 2

# Custom tokenomics bounds
CUSTOM_MIN_SUPPLY = 1_000
CUSTOM_MAX_SUPPLY = 100_000_000
CUSTOM_MIN_PRICE = 0.001
CUSTOM_MAX_PRICE = 100
CUSTOM_MIN_HOLDERS = 10
CUSTOM_MIN_REWARD = 0.01
CUSTOM_MAX_REWARD = 0.5
CUSTOM_REWARD_MULTIPLIER = 1

# Tier classification by follower count
TIER_FOLLOWER_THRESHOLDS = (
    ("mega", 1_000_000),
    ("macro", 100_000),
    ("micro", 10_000),
)
# Cross-platform classification: (tier, min total followers, min score)
CROSS_PLATFORM_TIER_THRESHOLDS = (
    ("celebrity", 10_000_000, 90),
    ("mega", 1_000_000, 80),
    ("macro", 100_000, 70),
    ("micro", 10_000, 60),
)
# Each linked platform lifts the averaged influence score by 20%, up to double
CROSS_PLATFORM_BONUS_PER_PLATFORM = 0.2
CROSS_PLATFORM_MAX_BONUS = 1.0

# Creator verification criteria
VERIFICATION_MIN_FOLLOWERS = 1000
VERIFICATION_MIN_ENGAGEMENT_RATE = 0.01
VERIFICATION_MIN_INFLUENCE_SCORE = 50

# Cross-platform verification is stricter
CROSS_PLATFORM_MIN_FOLLOWERS = 5000
CROSS_PLATFORM_MIN_ENGAGEMENT_RATE = 0.02
CROSS_PLATFORM_MIN_SCORE = 60

# On-chain deployment: rewards are sent as integer per-mille values
DEPLOYMENT_REWARD_SCALE = 1000
DEPLOYMENT_DEFAULT_FIRST_TARGET = 100
