"""
Biometric consent management.

- ConsentRegistry: lifecycle (give / revoke / update) and persistence
- ConsentEventLog: append-only audit trail
- GDPR_CONSENT_TEXT_V1 / generate_consent_hash: the consent text and its hash
"""

from emotionalchain.core.consent.registry import (
    ConsentEvent,
    ConsentEventLog,
    ConsentEventType,
    ConsentRecord,
    ConsentRegistry,
    ConsentStore,
)
from emotionalchain.core.consent.text import (
    GDPR_CONSENT_HASH_V1,
    GDPR_CONSENT_TEXT_V1,
    GDPR_CONSENT_VERSION_V1,
    generate_consent_hash,
)

__all__ = [
    "ConsentEvent",
    "ConsentEventLog",
    "ConsentEventType",
    "ConsentRecord",
    "ConsentRegistry",
    "ConsentStore",
    "GDPR_CONSENT_HASH_V1",
    "GDPR_CONSENT_TEXT_V1",
    "GDPR_CONSENT_VERSION_V1",
    "generate_consent_hash",
]
