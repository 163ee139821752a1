"""
Test EMO economics: emission schedule, tier assignment and tiered rewards.
"""

import math

import pytest

from emotionalchain.core.economics import (
    BLOCKS_PER_DAY,
    HALVING_INTERVAL,
    STAKE_LOCK_PERIOD_SECONDS,
    TIER_REWARDS,
    TOTAL_SUPPLY,
    VESTING_CLIFF_SECONDS,
    VESTING_PERIOD_SECONDS,
    EmissionSchedule,
    TierRewardCalculator,
    ValidatorTier,
    calculate_appropriate_tier,
    get_bandwidth_requirements,
    get_tier_name,
)
from emotionalchain.core.economics.constants import get_tokenomics_summary
from emotionalchain.exceptions import TierRequirementError


@pytest.fixture
def emission():
    return EmissionSchedule()


@pytest.fixture
def calculator(emission):
    return TierRewardCalculator(base_emission=emission.calculate_block_reward)


class TestBlockReward:

    @pytest.mark.parametrize("height,expected", [
        (0, 50.0),
        (1000, 50.0),
        (HALVING_INTERVAL - 1, 50.0),
        (HALVING_INTERVAL, 25.0),
        (2 * HALVING_INTERVAL, 12.5),
        (5 * HALVING_INTERVAL, 1.5625),
    ])
    def test_halving(self, emission, height, expected):
        assert emission.calculate_block_reward(height) == expected

    def test_floor(self, emission):
        assert emission.calculate_block_reward(6 * HALVING_INTERVAL) == 1.0
        assert emission.calculate_block_reward(10 ** 12) == 1.0

    @pytest.mark.parametrize("height", [3_000_000_000, 2 ** 64, 10 ** 30])
    def test_floor_at_extreme_heights(self, emission, height):
        assert emission.calculate_block_reward(height) == 1.0

    def test_extreme_height_tiered_reward(self, calculator):
        calc = calculator.calculate_tiered_reward("V1", ValidatorTier.PRIMARY, 3_000_000_000)
        assert calc.base_reward == 1.0
        assert calc.final_reward == 1.0

    def test_negative_height_treated_as_genesis(self, emission):
        assert emission.calculate_block_reward(-5) == 50.0

    def test_callable(self, emission):
        assert emission(1000) == emission.calculate_block_reward(1000)

    def test_custom_schedule(self):
        schedule = EmissionSchedule(initial_reward=8.0, halving_interval=10, minimum_reward=2.0)
        assert [schedule(h) for h in (0, 10, 20, 30)] == [8.0, 4.0, 2.0, 2.0]


class TestSupply:

    def test_first_era(self, emission):
        assert emission.calculate_total_supply(HALVING_INTERVAL) == 105_000_000

    def test_two_eras(self, emission):
        assert emission.calculate_total_supply(2 * HALVING_INTERVAL) == 157_500_000

    def test_empty_chain(self, emission):
        assert emission.calculate_total_supply(0) == 0.0

    def test_partial_era(self, emission):
        assert emission.calculate_total_supply(100) == 5000.0


class TestValidatorROI:

    def test_profitable(self, emission):
        roi = emission.calculate_validator_roi(
            block_height=1000,
            staked_amount=10_000,
            device_cost=300,
            monthly_cost=100,
            token_price=0.01,
        )
        daily = BLOCKS_PER_DAY / 21 * 50.0
        monthly_value = daily * 30 * 0.01

        assert roi.daily_reward == pytest.approx(daily)
        assert roi.monthly_reward == pytest.approx(daily * 30)
        assert roi.break_even_months == pytest.approx(400 / (monthly_value - 100))
        assert roi.annual_roi == pytest.approx((monthly_value - 100) * 12 / 400 * 100)

    def test_costs_exceed_revenue(self, emission):
        roi = emission.calculate_validator_roi(
            block_height=1000,
            staked_amount=10_000,
            device_cost=300,
            monthly_cost=100,
            token_price=0.0,
        )
        assert roi.break_even_months == math.inf
        assert roi.annual_roi == pytest.approx(-400.0)

    def test_zero_investment(self, emission):
        roi = emission.calculate_validator_roi(1000, 0, 0, 0, 0.0)
        assert roi.annual_roi == 0.0

    def test_to_dict(self, emission):
        data = emission.calculate_validator_roi(1000, 10_000, 300, 100, 0.01).to_dict()
        assert set(data) == {"dailyReward", "monthlyReward", "breakEvenMonths", "annualROI"}


class TestVestingAndLock:

    def test_before_cliff(self):
        assert EmissionSchedule.calculate_vested_amount(1000.0, 0, VESTING_CLIFF_SECONDS - 1) == 0.0

    def test_at_cliff(self):
        assert EmissionSchedule.calculate_vested_amount(1000.0, 0, VESTING_CLIFF_SECONDS) == pytest.approx(250.0)

    def test_linear(self):
        assert EmissionSchedule.calculate_vested_amount(1000.0, 0, VESTING_PERIOD_SECONDS / 2) == pytest.approx(500.0)

    def test_fully_vested(self):
        assert EmissionSchedule.calculate_vested_amount(1000.0, 0, VESTING_PERIOD_SECONDS * 2) == 1000.0

    def test_can_unstake(self):
        assert not EmissionSchedule.can_unstake(0, STAKE_LOCK_PERIOD_SECONDS - 1)
        assert EmissionSchedule.can_unstake(0, STAKE_LOCK_PERIOD_SECONDS)

    def test_remaining_lock_time(self):
        assert EmissionSchedule.get_remaining_lock_time(100, 100) == STAKE_LOCK_PERIOD_SECONDS
        assert EmissionSchedule.get_remaining_lock_time(0, STAKE_LOCK_PERIOD_SECONDS + 50) == 0


class TestTiers:

    def test_multipliers(self):
        assert TIER_REWARDS == {
            ValidatorTier.PRIMARY: 1.0,
            ValidatorTier.SECONDARY: 0.5,
            ValidatorTier.LIGHT: 0.1,
        }

    def test_names(self):
        assert get_tier_name(ValidatorTier.PRIMARY) == "PRIMARY"
        assert get_tier_name(3) == "LIGHT"

    def test_bandwidth_requirements_cover_every_tier(self):
        assert set(get_bandwidth_requirements()) == set(ValidatorTier)

    @pytest.mark.parametrize("bandwidth,uptime,stake,expected", [
        (1000, 99.9, 50_000, ValidatorTier.PRIMARY),
        (5000, 99.99, 1_000_000, ValidatorTier.PRIMARY),
        (500, 99.9, 50_000, ValidatorTier.SECONDARY),
        (1000, 99.0, 50_000, ValidatorTier.SECONDARY),
        (50, 90.0, 15_000, ValidatorTier.LIGHT),
        (1000, 99.9, 10_000, ValidatorTier.LIGHT),
    ])
    def test_appropriate_tier(self, bandwidth, uptime, stake, expected):
        assert calculate_appropriate_tier(bandwidth, uptime, stake) == expected

    def test_below_every_tier(self):
        with pytest.raises(TierRequirementError):
            calculate_appropriate_tier(5, 99.0, 100_000)
        with pytest.raises(ValueError):
            calculate_appropriate_tier(1000, 99.9, 9_999)


class TestTieredReward:

    def test_primary_full_score(self, calculator, emission):
        calc = calculator.calculate_tiered_reward("V1", ValidatorTier.PRIMARY, 1000, 1.0)
        assert calc.final_reward == emission.calculate_block_reward(1000) * 1.0
        assert calc.base_reward == 50.0
        assert calc.tier_multiplier == 1.0
        assert calc.tier == ValidatorTier.PRIMARY
        assert calc.validator_id == "V1"

    def test_tier_and_score_scale_reward(self, calculator):
        calc = calculator.calculate_tiered_reward("V2", ValidatorTier.SECONDARY, 1000, 0.8)
        assert calc.final_reward == pytest.approx(50.0 * 0.5 * 0.8)

    def test_after_halving(self, calculator):
        calc = calculator.calculate_tiered_reward("V3", ValidatorTier.LIGHT, HALVING_INTERVAL)
        assert calc.final_reward == pytest.approx(25.0 * 0.1)

    def test_deterministic(self, calculator):
        first = calculator.calculate_tiered_reward("V1", ValidatorTier.SECONDARY, 123_456, 0.37)
        second = calculator.calculate_tiered_reward("V1", ValidatorTier.SECONDARY, 123_456, 0.37)
        assert first == second

    def test_score_not_clamped(self, calculator):
        calc = calculator.calculate_tiered_reward("V1", ValidatorTier.PRIMARY, 1000, 1.5)
        assert calc.final_reward == pytest.approx(75.0)

    def test_tier_accepts_int(self, calculator):
        calc = calculator.calculate_tiered_reward("V1", 2, 1000)
        assert calc.tier is ValidatorTier.SECONDARY

    def test_injected_emission(self):
        calculator = TierRewardCalculator(base_emission=lambda height: 10.0)
        assert calculator.calculate_tiered_reward("V1", ValidatorTier.PRIMARY, 5).final_reward == 10.0

    def test_custom_multipliers(self):
        calculator = TierRewardCalculator(tier_multipliers={
            ValidatorTier.PRIMARY: 2.0,
            ValidatorTier.SECONDARY: 1.0,
            ValidatorTier.LIGHT: 0.0,
        })
        assert calculator.get_reward_multiplier(ValidatorTier.PRIMARY) == 2.0
        assert calculator.get_reward_multiplier(ValidatorTier.LIGHT) == 0.0

    def test_to_dict(self, calculator):
        data = calculator.calculate_tiered_reward("V1", ValidatorTier.LIGHT, 1000).to_dict()
        assert data["tier"] == "LIGHT"
        assert data["validatorId"] == "V1"

    def test_demonstrate(self, calculator):
        demo = calculator.demonstrate_tier_rewards(1000)
        assert list(demo) == ["primary", "secondary", "light"]
        assert demo["primary"].final_reward == 50.0
        assert demo["secondary"].final_reward == 25.0
        assert demo["light"].final_reward == pytest.approx(5.0)


def test_tokenomics_summary():
    summary = get_tokenomics_summary()
    assert summary["totalSupply"] == TOTAL_SUPPLY
    assert sum(summary["distribution"].values()) == TOTAL_SUPPLY
    assert summary["blockReward"]["initial"] == 50.0
    assert summary["blockReward"]["halvingInterval"] == HALVING_INTERVAL
