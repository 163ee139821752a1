"""
Message Schemas

One pydantic model per inbound message kind. Wire payloads use camelCase keys
(``publicKey``, ``parentHash``); the models expose snake_case attributes.

Shapes are closed: unknown keys are rejected everywhere except API request
headers, which pass arbitrary extra headers through.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

# =============================================================================
# FORMAT PATTERNS - cryptographic material
# =============================================================================

BLOCKCHAIN_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
HASH_PATTERN = r"^[a-fA-F0-9]{64}$"
PUBLIC_KEY_PATTERN = r"^[a-fA-F0-9]{66}$"
SIGNATURE_PATTERN = r"^[a-fA-F0-9]{128}$"
NONCE_PATTERN = r"^[a-fA-F0-9]{24}$"

# =============================================================================
# NUMERIC BOUNDS
# =============================================================================

MAX_AMOUNT = 1_000_000          # stake / transfer amount ceiling
MAX_FEE = 1000
MIN_HEART_RATE = 30
MAX_HEART_RATE = 220
MAX_BLOCK_TRANSACTIONS = 1000
MAX_CONSENSUS_VALIDATORS = 10_000
MAX_TERMINAL_ARGS = 10

Address = Annotated[str, Field(pattern=BLOCKCHAIN_ADDRESS_PATTERN)]
Hash = Annotated[str, Field(pattern=HASH_PATTERN)]
PublicKey = Annotated[str, Field(pattern=PUBLIC_KEY_PATTERN)]
Signature = Annotated[str, Field(pattern=SIGNATURE_PATTERN)]
Nonce = Annotated[str, Field(pattern=NONCE_PATTERN)]

# Strict numerics: JSON booleans are not numbers (ints still pass as floats)
Timestamp = Annotated[int, Field(strict=True, gt=0)]
Percentage = Annotated[float, Field(strict=True, ge=0, le=100)]
Amount = Annotated[float, Field(strict=True, gt=0, le=MAX_AMOUNT)]
DeviceId = Annotated[str, Field(max_length=100)]


class MessageModel(BaseModel):
    """Base for every message shape: camelCase on the wire, no unknown keys."""
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# VALIDATOR REGISTRATION
# =============================================================================

class DeviceMetadata(MessageModel):
    device_type: Literal["heartRate", "focus", "stress"]
    device_model: Annotated[str, Field(max_length=100)]
    calibration_data: Optional[Dict[str, Any]] = None


class ValidatorRegistration(MessageModel):
    address: Address
    public_key: PublicKey
    stake: Amount
    biometric_hash: Hash
    device_signature: Signature
    metadata: DeviceMetadata


# =============================================================================
# TRANSACTION
# =============================================================================

class BiometricProof(MessageModel):
    authenticity: Percentage
    timestamp: Timestamp
    device_id: DeviceId


class Transaction(MessageModel):
    from_: Address = Field(alias="from")
    to: Address
    amount: Amount
    fee: Annotated[float, Field(strict=True, gt=0, le=MAX_FEE)]
    nonce: Nonce
    signature: Signature
    biometric_proof: Optional[BiometricProof] = None


# =============================================================================
# BIOMETRIC UPDATE
# =============================================================================

class BiometricReadings(MessageModel):
    heart_rate: Optional[Annotated[int, Field(strict=True, ge=MIN_HEART_RATE, le=MAX_HEART_RATE)]] = None
    stress: Optional[Percentage] = None
    focus: Optional[Percentage] = None
    authenticity: Percentage


class BiometricUpdate(MessageModel):
    validator_id: Address
    device_id: DeviceId
    timestamp: Timestamp
    data: BiometricReadings
    signature: Signature
    quality: Percentage


# =============================================================================
# BLOCK PROPOSAL
# =============================================================================

class ConsensusData(MessageModel):
    validators: List[Address] = Field(min_length=1, max_length=MAX_CONSENSUS_VALIDATORS)
    signatures: List[Signature]


class BlockProposal(MessageModel):
    proposer: Address
    height: Annotated[int, Field(strict=True, gt=0)]
    parent_hash: Hash
    transactions: List[Hash] = Field(max_length=MAX_BLOCK_TRANSACTIONS)
    timestamp: Timestamp
    emotional_score: Percentage
    consensus_data: ConsensusData
    signature: Signature


# =============================================================================
# NETWORK MESSAGE
# =============================================================================

NetworkMessageType = Literal[
    "block_proposal",
    "block_vote",
    "transaction_broadcast",
    "validator_announcement",
    "consensus_message",
    "biometric_update",
]


class NetworkMessage(MessageModel):
    type: NetworkMessageType
    sender: Address
    timestamp: Timestamp
    nonce: Nonce
    payload: Dict[str, Any]
    signature: Signature


# =============================================================================
# CONSENSUS VOTE
# =============================================================================

class EmotionalState(MessageModel):
    stress: Percentage
    focus: Percentage
    authenticity: Percentage


class ConsensusVote(MessageModel):
    voter: Address
    block_hash: Hash
    vote: Literal["approve", "reject", "abstain"]
    emotional_state: EmotionalState
    timestamp: Timestamp
    signature: Signature


# =============================================================================
# API REQUEST / WEBSOCKET MESSAGE
# =============================================================================

class ApiRequestHeaders(BaseModel):
    # Arbitrary extra headers are allowed; the known ones are constrained
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    x_signature: Optional[Signature] = Field(None, alias="x-signature")
    x_nonce: Optional[Nonce] = Field(None, alias="x-nonce")
    content_type: Optional[Annotated[str, Field(max_length=100)]] = Field(None, alias="content-type")
    user_agent: Optional[Annotated[str, Field(max_length=500)]] = Field(None, alias="user-agent")


class ApiRequest(MessageModel):
    method: Literal["GET", "POST", "PUT", "DELETE"]
    endpoint: Annotated[str, Field(max_length=500)]
    headers: Optional[ApiRequestHeaders] = None
    body: Optional[Dict[str, Any]] = None


class WebsocketMessage(MessageModel):
    type: Literal["ping", "pong", "command", "subscription", "update", "error"]
    id: Optional[Annotated[str, Field(max_length=100)]] = None
    payload: Optional[Dict[str, Any]] = None
    timestamp: Timestamp


# =============================================================================
# TERMINAL COMMAND / CONFIG UPDATE
# =============================================================================

FlagValue = Union[StrictBool, float, Annotated[str, Field(max_length=200)]]


class TerminalCommand(MessageModel):
    command: Literal["status", "mine", "wallet", "network", "history", "validators", "help", "clear"]
    args: Optional[Annotated[List[Annotated[str, Field(max_length=100)]], Field(max_length=MAX_TERMINAL_ARGS)]] = None
    flags: Optional[Dict[Annotated[str, Field(max_length=50)], FlagValue]] = None


ConfigValue = Union[StrictBool, float, Annotated[str, Field(max_length=1000)], Dict[str, Any]]


class ConfigUpdate(MessageModel):
    section: Literal["consensus", "network", "biometric", "security", "database"]
    key: Annotated[str, Field(max_length=100)]
    value: ConfigValue
    signature: Signature
    timestamp: Timestamp
