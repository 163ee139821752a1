"""
Message Validator

The mandatory entry gate for untrusted data. Every inbound payload is checked
against the schema of its declared kind before any registry or calculator sees
it. A rejection reports ALL violated constraints, not just the first one.

The set of kinds is closed: MESSAGE_SCHEMAS must cover every MessageKind, and
the module refuses to import if a kind is added without a schema.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from emotionalchain.core.validation.schemas import (
    ApiRequest,
    BiometricUpdate,
    BlockProposal,
    ConfigUpdate,
    ConsensusVote,
    NetworkMessage,
    TerminalCommand,
    Transaction,
    ValidatorRegistration,
    WebsocketMessage,
)
from emotionalchain.exceptions import ValidationError, ValidationIssue

logger = logging.getLogger(__name__)


class MessageKind(Enum):
    """Every message shape the network accepts."""
    VALIDATOR_REGISTRATION = "validator_registration"
    TRANSACTION = "transaction"
    BIOMETRIC_UPDATE = "biometric_update"
    BLOCK_PROPOSAL = "block_proposal"
    NETWORK_MESSAGE = "network_message"
    CONSENSUS_VOTE = "consensus_vote"
    API_REQUEST = "api_request"
    WEBSOCKET_MESSAGE = "websocket_message"
    TERMINAL_COMMAND = "terminal_command"
    CONFIG_UPDATE = "config_update"


MESSAGE_SCHEMAS: Dict[MessageKind, Type[BaseModel]] = {
    MessageKind.VALIDATOR_REGISTRATION: ValidatorRegistration,
    MessageKind.TRANSACTION: Transaction,
    MessageKind.BIOMETRIC_UPDATE: BiometricUpdate,
    MessageKind.BLOCK_PROPOSAL: BlockProposal,
    MessageKind.NETWORK_MESSAGE: NetworkMessage,
    MessageKind.CONSENSUS_VOTE: ConsensusVote,
    MessageKind.API_REQUEST: ApiRequest,
    MessageKind.WEBSOCKET_MESSAGE: WebsocketMessage,
    MessageKind.TERMINAL_COMMAND: TerminalCommand,
    MessageKind.CONFIG_UPDATE: ConfigUpdate,
}

_missing = [k.value for k in MessageKind if k not in MESSAGE_SCHEMAS]
if _missing:
    raise RuntimeError(f"Message kinds without a schema: {', '.join(_missing)}")


def _format_location(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) if loc else "payload"


def _to_issues(error: PydanticValidationError) -> List[ValidationIssue]:
    return [
        ValidationIssue(
            field=_format_location(err.get("loc", ())),
            message=err.get("msg", "invalid value"),
            code=err.get("type", "invalid"),
        )
        for err in error.errors()
    ]


class MessageValidator:
    """
    Validates payloads against the closed set of message schemas.

    Stateless and safe to share between threads.

    Usage:
        validator = MessageValidator()
        vote = validator.validate(MessageKind.CONSENSUS_VOTE, payload)
        vote.emotional_state.focus
    """

    def __init__(self, schemas: Dict[MessageKind, Type[BaseModel]] = None):
        self._schemas = dict(schemas or MESSAGE_SCHEMAS)

    @staticmethod
    def resolve_kind(kind: Union[MessageKind, str]) -> MessageKind:
        """Accept a MessageKind or its string value."""
        if isinstance(kind, MessageKind):
            return kind
        try:
            return MessageKind(kind)
        except ValueError:
            raise ValidationError(
                str(kind),
                [ValidationIssue("kind", f"Unknown message kind: {kind!r}", "unknown_kind")],
            ) from None

    def validate(self, kind: Union[MessageKind, str], payload: Any) -> BaseModel:
        """
        Validate a payload and return the typed message.

        Raises:
            ValidationError: listing every violated constraint.
        """
        message_kind = self.resolve_kind(kind)
        schema = self._schemas[message_kind]

        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            issues = _to_issues(e)
            logger.debug(f"Rejected {message_kind.value} payload: {len(issues)} issue(s)")
            raise ValidationError(message_kind.value, issues) from None

    def is_valid(self, kind: Union[MessageKind, str], payload: Any) -> bool:
        try:
            self.validate(kind, payload)
        except ValidationError:
            return False
        return True

    @property
    def kinds(self) -> List[MessageKind]:
        return list(self._schemas)
