# emotionalchain/core/__init__.py
"""
Core components of the EmotionalChain validator subsystem.

- consent: ConsentRegistry (consent lifecycle + audit log)
- network: DistributionRegistry (validator geography)
- economics: EmissionSchedule, ValidatorTier, TierRewardCalculator
- validation: MessageValidator (entry gate for untrusted payloads)
- gateway: ValidatorGateway (validated path into consent and rewards)
"""
