"""
EmotionalChain Core

Eligibility, classification and reward computation for validators in the
Proof-of-Emotion network:

1. **MessageValidator**: the single entry gate for untrusted payloads
2. **ConsentRegistry**: GDPR consent lifecycle + append-only audit log
3. **DistributionRegistry**: fixed geography of the 21 core validators
4. **TierRewardCalculator**: tier-weighted block rewards
"""

from emotionalchain.version import __version__

__all__ = ["__version__"]
