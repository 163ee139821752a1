"""
Emission Schedule

Maps block height to the base block reward and derives supply, ROI, vesting
and stake-lock figures from it. The reward calculator consumes
calculate_block_reward() as its emission-schedule collaborator.
"""

import math
from dataclasses import dataclass

from emotionalchain.core.economics.constants import (
    BLOCKS_PER_DAY,
    DEFAULT_VALIDATOR_COUNT,
    HALVING_INTERVAL,
    INITIAL_BLOCK_REWARD,
    MINIMUM_BLOCK_REWARD,
    STAKE_LOCK_PERIOD_SECONDS,
    VESTING_CLIFF_SECONDS,
    VESTING_PERIOD_SECONDS,
)

# Beyond this many halvings any float reward has underflowed to zero
MAX_HALVINGS = 2048


@dataclass
class ValidatorROI:
    """Profitability projection for one validator."""
    daily_reward: float
    monthly_reward: float
    break_even_months: float    # math.inf when costs exceed revenue
    annual_roi: float           # percent

    def to_dict(self) -> dict:
        return {
            "dailyReward": self.daily_reward,
            "monthlyReward": self.monthly_reward,
            "breakEvenMonths": self.break_even_months,
            "annualROI": self.annual_roi,
        }


class EmissionSchedule:
    """
    Halving emission schedule.

    Pure: every method depends only on its arguments and the constants module.
    """

    def __init__(
        self,
        initial_reward: float = INITIAL_BLOCK_REWARD,
        halving_interval: int = HALVING_INTERVAL,
        minimum_reward: float = MINIMUM_BLOCK_REWARD,
    ):
        self.initial_reward = initial_reward
        self.halving_interval = halving_interval
        self.minimum_reward = minimum_reward

    def calculate_block_reward(self, block_height: int) -> float:
        """
        Block reward at a height: halves every halving_interval blocks, floored.

        Examples:
            >>> EmissionSchedule().calculate_block_reward(1000)
            50.0
            >>> EmissionSchedule().calculate_block_reward(2_100_000)
            25.0
        """
        halvings = max(0, block_height) // self.halving_interval
        # ldexp stays finite for any halving count; 2 ** halvings overflows float
        reward = math.ldexp(self.initial_reward, -min(halvings, MAX_HALVINGS))
        return max(reward, self.minimum_reward)

    def __call__(self, block_height: int) -> float:
        return self.calculate_block_reward(block_height)

    def calculate_total_supply(self, block_height: int) -> float:
        """Total EMO minted by blocks [0, block_height)."""
        total_minted = 0.0
        current_block = 0

        while current_block < block_height:
            blocks_in_era = min(self.halving_interval, block_height - current_block)
            total_minted += blocks_in_era * self.calculate_block_reward(current_block)
            current_block += blocks_in_era

        return total_minted

    def calculate_validator_roi(
        self,
        block_height: int,
        staked_amount: float,
        device_cost: float,
        monthly_cost: float,
        token_price: float,
        validator_count: int = DEFAULT_VALIDATOR_COUNT,
    ) -> ValidatorROI:
        """
        Project validator profitability at the current emission rate.

        Args:
            block_height: Current height (sets the reward via halving)
            staked_amount: EMO staked by the validator
            device_cost: Up-front biometric device cost (USD)
            monthly_cost: Operating cost per month (USD)
            token_price: EMO price (USD)
            validator_count: Active validators sharing the blocks
        """
        block_reward = self.calculate_block_reward(block_height)

        blocks_per_validator = BLOCKS_PER_DAY / validator_count
        daily_reward = blocks_per_validator * block_reward
        monthly_reward = daily_reward * 30
        monthly_value = monthly_reward * token_price

        initial_investment = staked_amount * token_price + device_cost

        monthly_profit = monthly_value - monthly_cost
        break_even_months = initial_investment / monthly_profit if monthly_profit > 0 else math.inf

        annual_profit = (monthly_value - monthly_cost) * 12
        annual_roi = (annual_profit / initial_investment) * 100 if initial_investment > 0 else 0.0

        return ValidatorROI(
            daily_reward=daily_reward,
            monthly_reward=monthly_reward,
            break_even_months=break_even_months,
            annual_roi=annual_roi,
        )

    @staticmethod
    def calculate_vested_amount(total_allocation: float, start_timestamp: float, current_timestamp: float) -> float:
        """Linear vesting over 4 years with a 1-year cliff (timestamps in seconds)."""
        elapsed = current_timestamp - start_timestamp

        if elapsed < VESTING_CLIFF_SECONDS:
            return 0.0
        if elapsed >= VESTING_PERIOD_SECONDS:
            return total_allocation
        return (total_allocation * elapsed) / VESTING_PERIOD_SECONDS

    @staticmethod
    def can_unstake(staking_timestamp: float, current_timestamp: float) -> bool:
        return current_timestamp - staking_timestamp >= STAKE_LOCK_PERIOD_SECONDS

    @staticmethod
    def get_remaining_lock_time(staking_timestamp: float, current_timestamp: float) -> float:
        elapsed = current_timestamp - staking_timestamp
        return max(0, STAKE_LOCK_PERIOD_SECONDS - elapsed)
