"""
Network topology reference data.

- DistributionRegistry: geography of the 21 core validators
"""

from emotionalchain.core.network.distribution import (
    EARTH_RADIUS_KM,
    VALIDATOR_DISTRIBUTION,
    DistributionRegistry,
    ValidatorLocation,
    haversine_km,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "VALIDATOR_DISTRIBUTION",
    "DistributionRegistry",
    "ValidatorLocation",
    "haversine_km",
]
