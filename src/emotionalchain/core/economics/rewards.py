"""
Tiered Reward Calculator

    final_reward = base_emission(block_height) * TIER_REWARDS[tier] * emotional_score

base_emission is the emission-schedule collaborator. The calculation is pure
and deterministic: identical inputs always give identical output, and nothing
is persisted.

emotional_score is nominally in [0, 1] but is NOT clamped here. Bounding it is
the job of the message schemas upstream (see ValidatorGateway).
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from emotionalchain.core.economics.emission import EmissionSchedule
from emotionalchain.core.economics.tiers import TIER_REWARDS, ValidatorTier


@dataclass(frozen=True)
class TieredRewardCalculation:
    base_reward: float
    tier_multiplier: float
    final_reward: float
    tier: ValidatorTier
    validator_id: str

    def to_dict(self) -> dict:
        return {
            "baseReward": self.base_reward,
            "tierMultiplier": self.tier_multiplier,
            "finalReward": self.final_reward,
            "tier": self.tier.name,
            "validatorId": self.validator_id,
        }


class TierRewardCalculator:
    """
    Computes tier-weighted block rewards.

    Usage:
        calculator = TierRewardCalculator(EmissionSchedule().calculate_block_reward)
        calc = calculator.calculate_tiered_reward("V1", ValidatorTier.PRIMARY, 1000)
        calc.final_reward  # 50.0
    """

    def __init__(
        self,
        base_emission: Optional[Callable[[int], float]] = None,
        tier_multipliers: Optional[Dict[ValidatorTier, float]] = None,
    ):
        self._base_emission = base_emission or EmissionSchedule().calculate_block_reward
        self._tier_multipliers = dict(tier_multipliers or TIER_REWARDS)

    def get_reward_multiplier(self, tier: ValidatorTier) -> float:
        return self._tier_multipliers[ValidatorTier(tier)]

    def calculate_tiered_reward(
        self,
        validator_id: str,
        tier: ValidatorTier,
        block_height: int,
        emotional_score: float = 1.0,
    ) -> TieredRewardCalculation:
        tier = ValidatorTier(tier)
        base_reward = self._base_emission(block_height)
        tier_multiplier = self._tier_multipliers[tier]
        final_reward = base_reward * tier_multiplier * emotional_score

        return TieredRewardCalculation(
            base_reward=base_reward,
            tier_multiplier=tier_multiplier,
            final_reward=final_reward,
            tier=tier,
            validator_id=validator_id,
        )

    def demonstrate_tier_rewards(self, block_height: int) -> Dict[str, TieredRewardCalculation]:
        """Full-score reward for one example validator per tier."""
        return {
            "primary": self.calculate_tiered_reward("PrimaryValidator", ValidatorTier.PRIMARY, block_height),
            "secondary": self.calculate_tiered_reward("SecondaryValidator", ValidatorTier.SECONDARY, block_height),
            "light": self.calculate_tiered_reward("LightValidator", ValidatorTier.LIGHT, block_height),
        }
