"""
Shared pytest fixtures for test suite.

Provides:
- A controllable clock for deterministic consent timestamps
- Fresh ConsentRegistry / MessageValidator instances per test
- Valid payload factories for every message kind
"""

import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from emotionalchain.core.consent.registry import ConsentRegistry
from emotionalchain.core.validation.validator import MessageValidator


# =============================================================================
# WELL-FORMED CRYPTOGRAPHIC MATERIAL
# =============================================================================

ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "B" * 40
ADDRESS_C = "0x" + "0123456789" * 4
HASH = "b" * 64
PUBLIC_KEY = "c" * 66
SIGNATURE = "d" * 128
NONCE = "e" * 24
TIMESTAMP = 1_700_000_000_000


# =============================================================================
# CLOCK
# =============================================================================

class FakeClock:
    """Returns a fixed time in seconds; advance() moves it forward."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return ConsentRegistry(owner="system", clock=clock)


@pytest.fixture
def validator():
    return MessageValidator()


# =============================================================================
# PAYLOAD FACTORIES
# =============================================================================

def make_registration(**overrides) -> dict:
    payload = {
        "address": ADDRESS_A,
        "publicKey": PUBLIC_KEY,
        "stake": 50_000,
        "biometricHash": HASH,
        "deviceSignature": SIGNATURE,
        "metadata": {"deviceType": "heartRate", "deviceModel": "Polar H10"},
    }
    payload.update(overrides)
    return payload


def make_transaction(**overrides) -> dict:
    payload = {
        "from": ADDRESS_A,
        "to": ADDRESS_B,
        "amount": 125.5,
        "fee": 0.5,
        "nonce": NONCE,
        "signature": SIGNATURE,
    }
    payload.update(overrides)
    return payload


def make_biometric_update(**overrides) -> dict:
    payload = {
        "validatorId": ADDRESS_A,
        "deviceId": "polar-h10-001",
        "timestamp": TIMESTAMP,
        "data": {"heartRate": 72, "stress": 20, "focus": 85, "authenticity": 97},
        "signature": SIGNATURE,
        "quality": 92,
    }
    payload.update(overrides)
    return payload


def make_block_proposal(**overrides) -> dict:
    payload = {
        "proposer": ADDRESS_A,
        "height": 1000,
        "parentHash": HASH,
        "transactions": [HASH, "f" * 64],
        "timestamp": TIMESTAMP,
        "emotionalScore": 80,
        "consensusData": {"validators": [ADDRESS_A, ADDRESS_B], "signatures": [SIGNATURE]},
        "signature": SIGNATURE,
    }
    payload.update(overrides)
    return payload


def make_network_message(**overrides) -> dict:
    payload = {
        "type": "block_proposal",
        "sender": ADDRESS_A,
        "timestamp": TIMESTAMP,
        "nonce": NONCE,
        "payload": {"height": 1000},
        "signature": SIGNATURE,
    }
    payload.update(overrides)
    return payload


def make_consensus_vote(**overrides) -> dict:
    payload = {
        "voter": ADDRESS_A,
        "blockHash": HASH,
        "vote": "approve",
        "emotionalState": {"stress": 15, "focus": 88, "authenticity": 95},
        "timestamp": TIMESTAMP,
        "signature": SIGNATURE,
    }
    payload.update(overrides)
    return payload


def make_api_request(**overrides) -> dict:
    payload = {
        "method": "POST",
        "endpoint": "/api/validators/register",
        "headers": {"x-signature": SIGNATURE, "x-nonce": NONCE, "content-type": "application/json"},
        "body": {"address": ADDRESS_A},
    }
    payload.update(overrides)
    return payload


def make_websocket_message(**overrides) -> dict:
    payload = {"type": "ping", "id": "msg-1", "timestamp": TIMESTAMP}
    payload.update(overrides)
    return payload


def make_terminal_command(**overrides) -> dict:
    payload = {
        "command": "validators",
        "args": ["--region", "Europe"],
        "flags": {"verbose": True, "limit": 10, "sort": "stake"},
    }
    payload.update(overrides)
    return payload


def make_config_update(**overrides) -> dict:
    payload = {
        "section": "consensus",
        "key": "blockTime",
        "value": 30,
        "signature": SIGNATURE,
        "timestamp": TIMESTAMP,
    }
    payload.update(overrides)
    return payload
