"""
EMO Token Economics - Centralized Configuration

This module defines the economic constants for the EmotionalChain network.
All values should be referenced from here, not hardcoded elsewhere.

=============================================================================
DESIGN PRINCIPLES
=============================================================================

1. FIXED SUPPLY: 100M EMO total, half of it paid to validators over ~10 years.

2. HALVING: The block reward halves every 2.1M blocks (~2 years at 30s
   blocks) and never drops below a floor of 1 EMO.

3. TIERED PARTICIPATION: Reward share depends on the validator tier
   (see tiers.py), not on stake size.

=============================================================================
"""

# =============================================================================
# SUPPLY & DISTRIBUTION
# =============================================================================

TOTAL_SUPPLY = 100_000_000              # 100M EMO

VALIDATOR_REWARDS_ALLOCATION = 50_000_000   # 50% over 10 years
ECOSYSTEM_ALLOCATION = 30_000_000           # 30% grants/development
TEAM_ALLOCATION = 15_000_000                # 15% with 4-year vesting
INVESTOR_ALLOCATION = 5_000_000             # 5% with 4-year vesting

# =============================================================================
# BLOCK REWARD (HALVING)
# =============================================================================

INITIAL_BLOCK_REWARD = 50.0             # EMO per block
HALVING_INTERVAL = 2_100_000            # blocks (~2 years at 30s blocks)
MINIMUM_BLOCK_REWARD = 1.0              # floor after repeated halvings

BLOCK_TIME_SECONDS = 30
BLOCKS_PER_DAY = (24 * 60 * 60) // BLOCK_TIME_SECONDS   # 2,880
DEFAULT_VALIDATOR_COUNT = 21

# =============================================================================
# STAKING
# =============================================================================

MINIMUM_STAKE = 10_000                  # EMO
STAKE_LOCK_PERIOD_SECONDS = 30 * 24 * 60 * 60   # 30 days

# =============================================================================
# VESTING (team / investors)
# =============================================================================

VESTING_CLIFF_SECONDS = 365 * 24 * 60 * 60          # 1 year
VESTING_PERIOD_SECONDS = 4 * 365 * 24 * 60 * 60     # 4 years


def get_tokenomics_summary() -> dict:
    """Constants grouped the way dashboards and the API layer consume them."""
    return {
        "totalSupply": TOTAL_SUPPLY,
        "distribution": {
            "validatorRewards": VALIDATOR_REWARDS_ALLOCATION,
            "ecosystem": ECOSYSTEM_ALLOCATION,
            "team": TEAM_ALLOCATION,
            "investors": INVESTOR_ALLOCATION,
        },
        "blockReward": {
            "initial": INITIAL_BLOCK_REWARD,
            "halvingInterval": HALVING_INTERVAL,
            "minimumReward": MINIMUM_BLOCK_REWARD,
        },
        "stakingRequirements": {
            "minimumStake": MINIMUM_STAKE,
            "lockPeriod": STAKE_LOCK_PERIOD_SECONDS,
        },
    }
