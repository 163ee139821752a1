"""
Standard GDPR consent text for biometric processing, and its content hash.

The hash pins the exact wording a validator agreed to; publishing a new text
means publishing a new (version, hash) pair to the ConsentRegistry.
"""

import hashlib


def generate_consent_hash(consent_text: str) -> str:
    """SHA-256 of the consent text, hex encoded with a 0x prefix."""
    return "0x" + hashlib.sha256(consent_text.encode("utf-8")).hexdigest()


GDPR_CONSENT_VERSION_V1 = "v1.0"

GDPR_CONSENT_TEXT_V1 = """
EmotionalChain Biometric Data Processing Consent (v1.0)

By accepting this consent, you authorize EmotionalChain to:

1. COLLECT: Process biometric data from your registered devices (heart rate, stress levels, EEG, etc.)
2. PROCESS: Compute emotional fitness scores locally on your device
3. STORE: Store only cryptographic commitments (hashes) of your scores, NOT raw biometric data
4. USE: Use commitment proofs for consensus participation and network validation

Data Minimization:
- Raw biometric data NEVER leaves your device
- Only cryptographic hashes stored on-chain
- Personal information stored separately and can be deleted

Your Rights (GDPR):
- Right to Access: Export all your data at any time
- Right to Erasure: Request deletion of personal data
- Right to Portability: Receive your data in machine-readable format
- Right to Revoke: Withdraw consent at any time (triggers unstaking)

Data Processing Purpose:
- Network consensus validation
- Emotional fitness verification
- Anti-spoofing and fraud prevention

Data Retention:
- Personal data: Deleted upon request
- Blockchain commitments: Retained (pseudonymous, cannot reveal personal data)

Contact Data Protection Officer: dpo@emotionalchain.io

By clicking "I Accept", you confirm that you:
1. Understand how your biometric data will be processed
2. Consent to the processing described above
3. Can withdraw consent at any time
"""

GDPR_CONSENT_HASH_V1 = generate_consent_hash(GDPR_CONSENT_TEXT_V1)
