"""
Hierarchical Validator Tiers

Validators are organized into three tiers to bound bandwidth:
- PRIMARY: 21 validators with full consensus participation (high bandwidth)
- SECONDARY: 100 validators with checkpoint validation every 10 minutes
- LIGHT: unlimited validators doing transaction validation only

Tier membership and its reward multiplier are configuration, not computed
from rewards. Lower enum value = higher tier.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional

from emotionalchain.exceptions import TierRequirementError


class ValidatorTier(IntEnum):
    PRIMARY = 1     # Full consensus participation
    SECONDARY = 2   # Checkpoint validation
    LIGHT = 3       # Transaction validation only


@dataclass(frozen=True)
class TierRequirements:
    min_bandwidth: float            # KB/s
    min_uptime: float               # percent
    min_stake: int                  # EMO
    requires_biometric: bool
    max_validators: Optional[int] = None    # None = unlimited

    def is_met_by(self, bandwidth: float, uptime: float, stake: float) -> bool:
        return (
            bandwidth >= self.min_bandwidth and
            uptime >= self.min_uptime and
            stake >= self.min_stake
        )


TIER_REQUIREMENTS: Dict[ValidatorTier, TierRequirements] = {
    ValidatorTier.PRIMARY: TierRequirements(
        min_bandwidth=1000,         # 1 Mbps
        min_uptime=99.9,
        min_stake=50_000,
        requires_biometric=True,
        max_validators=21,
    ),
    ValidatorTier.SECONDARY: TierRequirements(
        min_bandwidth=100,          # 100 Kbps
        min_uptime=95.0,
        min_stake=20_000,
        requires_biometric=True,
        max_validators=100,
    ),
    ValidatorTier.LIGHT: TierRequirements(
        min_bandwidth=10,           # 10 Kbps
        min_uptime=80.0,
        min_stake=10_000,
        requires_biometric=False,
    ),
}

# Share of the base block reward paid per tier
TIER_REWARDS: Dict[ValidatorTier, float] = {
    ValidatorTier.PRIMARY: 1.0,
    ValidatorTier.SECONDARY: 0.5,
    ValidatorTier.LIGHT: 0.1,
}


def get_tier_name(tier: ValidatorTier) -> str:
    return ValidatorTier(tier).name


def get_bandwidth_requirements() -> Dict[ValidatorTier, str]:
    return {
        ValidatorTier.PRIMARY: "1 Mbps (continuous biometric + consensus)",
        ValidatorTier.SECONDARY: "100 Kbps (10-min checkpoints)",
        ValidatorTier.LIGHT: "10 Kbps (tx validation only)",
    }


def calculate_appropriate_tier(bandwidth: float, uptime: float, stake: float) -> ValidatorTier:
    """
    Highest tier whose requirements the metrics satisfy.

    Raises:
        TierRequirementError: metrics fall below even the LIGHT tier.
    """
    for tier in sorted(ValidatorTier):
        if TIER_REQUIREMENTS[tier].is_met_by(bandwidth, uptime, stake):
            return tier

    raise TierRequirementError(
        f"Validator does not meet minimum requirements for any tier "
        f"(bandwidth={bandwidth}KB/s, uptime={uptime}%, stake={stake})"
    )
