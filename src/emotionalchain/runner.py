"""
EmotionalChain Core Runner

Composition root for the validator subsystem. Builds exactly one instance of
each component and wires them together; consumers receive these instances
explicitly rather than reaching for module-level singletons.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from emotionalchain.config import CoreConfig, setup_logging
from emotionalchain.core.consent.registry import ConsentRegistry
from emotionalchain.core.economics.emission import EmissionSchedule
from emotionalchain.core.economics.rewards import TierRewardCalculator
from emotionalchain.core.gateway import ValidatorGateway
from emotionalchain.core.network.distribution import DistributionRegistry
from emotionalchain.core.validation.validator import MessageValidator
from emotionalchain.exceptions import InvalidStateError
from emotionalchain.version import __version__

logger = logging.getLogger(__name__)


@dataclass
class CoreServices:
    """The wired component graph handed to the consensus engine / API layer."""
    config: CoreConfig
    validator: MessageValidator
    consents: ConsentRegistry
    distribution: DistributionRegistry
    emission: EmissionSchedule
    rewards: TierRewardCalculator
    gateway: ValidatorGateway


def build_core(
    config: Optional[CoreConfig] = None,
    unstake_hook: Optional[Callable[[str], None]] = None,
    emission_schedule: Optional[EmissionSchedule] = None,
) -> CoreServices:
    """
    Construct and wire every component once.

    Args:
        config: Settings (default: CoreConfig.from_env())
        unstake_hook: Validator-lifecycle callback fired on consent revoke
        emission_schedule: Base-reward collaborator (default: halving schedule)
    """
    config = config or CoreConfig.from_env()
    emission = emission_schedule or EmissionSchedule()

    validator = MessageValidator()
    consents = ConsentRegistry(
        owner=config.registry_owner,
        consent_version=config.consent_version,
        consent_text_hash=config.consent_text_hash,
        unstake_hook=unstake_hook,
    )
    distribution = DistributionRegistry()
    rewards = TierRewardCalculator(base_emission=emission.calculate_block_reward)
    gateway = ValidatorGateway(validator, consents, rewards)

    return CoreServices(
        config=config,
        validator=validator,
        consents=consents,
        distribution=distribution,
        emission=emission,
        rewards=rewards,
        gateway=gateway,
    )


def load_consent_state(consents: ConsentRegistry, path: str) -> bool:
    """Restore consent state from a JSON snapshot. Returns False if the file is absent."""
    if not os.path.exists(path):
        logger.info(f"No consent state at {path}, starting empty")
        return False
    with open(path, encoding="utf-8") as f:
        consents.import_state(json.load(f))
    return True


def save_consent_state(consents: ConsentRegistry, path: str):
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    tmp_path = path + ".tmp"
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(consents.export_state(), f, indent=2)
    os.replace(tmp_path, path)
    logger.info(f"Consent state written to {path}")


def log_summary(core: CoreServices):
    stats = core.distribution.get_distribution_stats()
    consent_stats = core.consents.get_stats()

    logger.info("=" * 50)
    logger.info(f"EmotionalChain Core v{__version__}")
    logger.info(f"   Validators: {stats['totalValidators']} across "
                f"{stats['continents']} regions / {stats['cities']} cities")
    for continent, locations in stats["distribution"].items():
        logger.info(f"   {continent}: {', '.join(loc.validator_id for loc in locations)}")
    logger.info(f"   Consent version: {consent_stats['current_consent_version']}")
    logger.info(f"   Active consents: {consent_stats['active_consents']} / {consent_stats['total_records']}")
    logger.info(f"   Message kinds: {len(core.validator.kinds)}")
    logger.info("=" * 50)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="EmotionalChain Core - consent, distribution and rewards")
    parser.add_argument("--version", action="version",
                        version=f"EmotionalChain Core {__version__}")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: EMOTIONALCHAIN_LOG_LEVEL or INFO)")
    parser.add_argument("--state-file", type=str, default=None,
                        help="Consent state JSON to restore on startup")
    parser.add_argument("--export-state", type=str, default=None,
                        help="Write the consent state JSON here before exiting")
    args = parser.parse_args(argv)

    config = CoreConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.state_file:
        config.state_file = args.state_file

    setup_logging(config.log_level)
    core = build_core(config)

    if config.state_file:
        try:
            load_consent_state(core.consents, config.state_file)
        except (InvalidStateError, json.JSONDecodeError) as e:
            logger.error(f"Could not restore consent state from {config.state_file}: {e}")
            return 1

    log_summary(core)

    if args.export_state:
        save_consent_state(core.consents, args.export_state)

    return 0


if __name__ == "__main__":
    sys.exit(main())
