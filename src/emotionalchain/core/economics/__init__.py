"""
EMO economics: emission schedule, validator tiers and tiered rewards.
"""

from emotionalchain.core.economics.constants import *  # noqa: F401,F403
from emotionalchain.core.economics.emission import EmissionSchedule, ValidatorROI
from emotionalchain.core.economics.rewards import TieredRewardCalculation, TierRewardCalculator
from emotionalchain.core.economics.tiers import (
    TIER_REQUIREMENTS,
    TIER_REWARDS,
    TierRequirements,
    ValidatorTier,
    calculate_appropriate_tier,
    get_bandwidth_requirements,
    get_tier_name,
)
