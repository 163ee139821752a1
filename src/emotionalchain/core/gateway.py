"""
Validator Gateway

The validated path from untrusted payloads into the consent registry and the
reward calculator:

    payload -> MessageValidator -> consent check -> {registration | reward | vote}

Every method validates first; nothing reaches ConsentRegistry or
TierRewardCalculator unchecked. Biometric-bearing messages additionally
require an active consent for the sending validator.
"""

import logging
from typing import Any

from emotionalchain.core.consent.registry import ConsentRegistry
from emotionalchain.core.economics.rewards import TieredRewardCalculation, TierRewardCalculator
from emotionalchain.core.economics.tiers import ValidatorTier
from emotionalchain.core.validation.schemas import BlockProposal, ConsensusVote, ValidatorRegistration
from emotionalchain.core.validation.validator import MessageKind, MessageValidator
from emotionalchain.exceptions import ConsentRequiredError

logger = logging.getLogger(__name__)

# Block proposals carry the emotional score as a percentage
EMOTIONAL_SCORE_SCALE = 100.0


class ValidatorGateway:
    """
    Entry point used by the consensus engine and API layer.

    Usage:
        gateway = ValidatorGateway(validator, consents, rewards)
        calc = gateway.reward_block_proposal(payload, ValidatorTier.PRIMARY)
    """

    def __init__(
        self,
        validator: MessageValidator,
        consents: ConsentRegistry,
        rewards: TierRewardCalculator,
    ):
        self.validator = validator
        self.consents = consents
        self.rewards = rewards

    def _require_consent(self, address: str):
        if not self.consents.has_valid_consent(address):
            logger.warning(f"Refused biometric processing for {address[:12]}...: no active consent")
            raise ConsentRequiredError(address)

    def register_validator(self, payload: Any) -> ValidatorRegistration:
        """
        Validate a registration. The address must already hold active consent.

        Raises:
            ValidationError, ConsentRequiredError
        """
        registration = self.validator.validate(MessageKind.VALIDATOR_REGISTRATION, payload)
        self._require_consent(registration.address)

        logger.info(f"Validator registration accepted: {registration.address[:12]}... "
                    f"(stake={registration.stake:.2f}, device={registration.metadata.device_type})")
        return registration

    def reward_block_proposal(self, payload: Any, tier: ValidatorTier) -> TieredRewardCalculation:
        """
        Validate a block proposal and compute the proposer's tiered reward.

        The schema bounds emotionalScore to [0, 100]; it is scaled to [0, 1]
        before it reaches the calculator.

        Raises:
            ValidationError, ConsentRequiredError
        """
        proposal: BlockProposal = self.validator.validate(MessageKind.BLOCK_PROPOSAL, payload)
        self._require_consent(proposal.proposer)

        calculation = self.rewards.calculate_tiered_reward(
            validator_id=proposal.proposer,
            tier=tier,
            block_height=proposal.height,
            emotional_score=proposal.emotional_score / EMOTIONAL_SCORE_SCALE,
        )
        logger.info(f"Block {proposal.height} reward for {proposal.proposer[:12]}...: "
                    f"{calculation.final_reward:.4f} EMO ({ValidatorTier(tier).name})")
        return calculation

    def record_consensus_vote(self, payload: Any) -> ConsensusVote:
        """
        Validate a consensus vote. Votes carry emotional state, so the voter
        must hold active consent.

        Raises:
            ValidationError, ConsentRequiredError
        """
        vote: ConsensusVote = self.validator.validate(MessageKind.CONSENSUS_VOTE, payload)
        self._require_consent(vote.voter)

        logger.debug(f"Vote {vote.vote} on {vote.block_hash[:16]}... from {vote.voter[:12]}...")
        return vote
