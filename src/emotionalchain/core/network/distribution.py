"""
Global Validator Distribution

Fixed geography of the 21 core validators: 7 region groups (six continents
plus a "Middle East" grouping), one city each. Read-only reference data used
by network-topology logic; nothing here mutates after import.

Unknown validator ids return None rather than raising. Callers treat this as a
lookup, unlike the consent registry's stateful operations.
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class ValidatorLocation:
    """Where a core validator runs."""
    validator_id: str
    city: str
    continent: str
    latitude: float
    longitude: float
    timezone: str

    def to_dict(self) -> dict:
        return asdict(self)


# 21 validators, declaration order is the canonical order
VALIDATOR_DISTRIBUTION: Tuple[ValidatorLocation, ...] = (
    # NORTH AMERICA (5)
    ValidatorLocation("StellarNode", "New York", "North America", 40.7128, -74.0060, "America/New_York"),
    ValidatorLocation("NebulaForge", "San Francisco", "North America", 37.7749, -122.4194, "America/Los_Angeles"),
    ValidatorLocation("QuantumReach", "Chicago", "North America", 41.8781, -87.6298, "America/Chicago"),
    ValidatorLocation("OrionPulse", "Austin", "North America", 30.2672, -97.7431, "America/Chicago"),
    ValidatorLocation("DarkMatterLabs", "Los Angeles", "North America", 34.0522, -118.2437, "America/Los_Angeles"),

    # EUROPE (5)
    ValidatorLocation("GravityCore", "Berlin", "Europe", 52.5200, 13.4050, "Europe/Berlin"),
    ValidatorLocation("AstroSentinel", "London", "Europe", 51.5074, -0.1278, "Europe/London"),
    ValidatorLocation("ByteGuardians", "Paris", "Europe", 48.8566, 2.3522, "Europe/Paris"),
    ValidatorLocation("ZeroLagOps", "Amsterdam", "Europe", 52.3676, 4.9041, "Europe/Amsterdam"),
    ValidatorLocation("ChainFlux", "Zurich", "Europe", 47.3769, 8.5417, "Europe/Zurich"),

    # ASIA (4)
    ValidatorLocation("BlockNerve", "Singapore", "Asia", 1.3521, 103.8198, "Asia/Singapore"),
    ValidatorLocation("ValidatorX", "Hong Kong", "Asia", 22.3193, 114.1694, "Asia/Hong_Kong"),
    ValidatorLocation("NovaSync", "Seoul", "Asia", 37.5665, 126.9780, "Asia/Seoul"),
    ValidatorLocation("IronNode", "Tokyo", "Asia", 35.6762, 139.6503, "Asia/Tokyo"),

    # SOUTH AMERICA (2)
    ValidatorLocation("SentinelTrust", "São Paulo", "South America", -23.5505, -46.6333, "America/Sao_Paulo"),
    ValidatorLocation("VaultProof", "Buenos Aires", "South America", -34.6037, -58.3816, "America/Argentina/Buenos_Aires"),

    # AFRICA (2)
    ValidatorLocation("SecureMesh", "Lagos", "Africa", 6.5244, 3.3792, "Africa/Lagos"),
    ValidatorLocation("WatchtowerOne", "Cape Town", "Africa", -33.9249, 18.4241, "Africa/Johannesburg"),

    # OCEANIA (2)
    ValidatorLocation("AetherRunes", "Sydney", "Oceania", -33.8688, 151.2093, "Australia/Sydney"),
    ValidatorLocation("ChronoKeep", "Auckland", "Oceania", -37.0742, 174.8859, "Pacific/Auckland"),

    # MIDDLE EAST (1)
    ValidatorLocation("SolForge", "Dubai", "Middle East", 25.2048, 55.2708, "Asia/Dubai"),
)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two lat/lon points in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2 +
        math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
        math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


class DistributionRegistry:
    """
    Read-only queries over the validator geography.

    Safe for unrestricted concurrent use: the seed data is an immutable tuple
    of frozen dataclasses and no method mutates state.

    Usage:
        registry = DistributionRegistry()
        registry.get_validator_distance("StellarNode", "AstroSentinel")  # ~5570 km
    """

    def __init__(self, locations: Tuple[ValidatorLocation, ...] = VALIDATOR_DISTRIBUTION):
        self._locations = tuple(locations)
        self._by_id: Dict[str, ValidatorLocation] = {loc.validator_id: loc for loc in self._locations}

    def get_validator_location(self, validator_id: str) -> Optional[ValidatorLocation]:
        return self._by_id.get(validator_id)

    def get_all_validator_locations(self) -> List[ValidatorLocation]:
        """All locations in declaration order."""
        return list(self._locations)

    def get_validators_by_continent(self) -> Dict[str, List[ValidatorLocation]]:
        """
        Group validators by region.

        Groups appear in first-seen order and keep declaration order inside.
        """
        grouped: Dict[str, List[ValidatorLocation]] = {}
        for location in self._locations:
            grouped.setdefault(location.continent, []).append(location)
        return grouped

    def get_distribution_stats(self) -> dict:
        continents = {loc.continent for loc in self._locations}
        cities = {loc.city for loc in self._locations}
        return {
            "totalValidators": len(self._locations),
            "continents": len(continents),
            "cities": len(cities),
            "distribution": self.get_validators_by_continent(),
        }

    def get_validator_distance(self, validator_a: str, validator_b: str) -> Optional[float]:
        """
        Haversine distance in km between two validators.

        Returns None if either id is unknown.
        """
        loc_a = self.get_validator_location(validator_a)
        loc_b = self.get_validator_location(validator_b)
        if loc_a is None or loc_b is None:
            return None
        if loc_a.validator_id == loc_b.validator_id:
            return 0.0
        return haversine_km(loc_a.latitude, loc_a.longitude, loc_b.latitude, loc_b.longitude)

    def export_distribution_json(self) -> List[dict]:
        return [loc.to_dict() for loc in self._locations]

    def __len__(self) -> int:
        return len(self._locations)
