"""
Biometric Consent Registry

Owns the GDPR consent lifecycle for every validator and the audit trail of
every transition.

CONSENT LIFECYCLE:
==================
    NO_CONSENT --give--> ACTIVE --revoke--> REVOKED --give--> ACTIVE
                           |  ^
                           +--+ update (re-stamps version/hash)

- One current record per address, overwritten in place on each transition.
- History lives only in the event log, which is append-only.
- Revoking triggers automatic unstaking. The registry does not unstake itself;
  it notifies the validator-lifecycle manager through the unstake hook.

CONCURRENCY:
============
- Per-address locks serialize revoke/update on the same validator.
- A registry-wide state lock makes "write record + append event" atomic and
  gives export_state/import_state an exclusive window.
"""

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from emotionalchain.config import DEFAULT_CONSENT_TEXT_HASH, DEFAULT_CONSENT_VERSION, DEFAULT_REGISTRY_OWNER
from emotionalchain.exceptions import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


class ConsentEventType(Enum):
    """Kinds of consent transitions recorded in the audit log."""
    GIVEN = "consent_given"
    REVOKED = "consent_revoked"
    UPDATED = "consent_updated"


@dataclass(frozen=True)
class ConsentRecord:
    """Current consent state of one validator."""
    validator_address: str
    consent_version: str
    consent_hash: str           # hash of the consent text agreed to
    timestamp: int              # ms since epoch of the last give/update
    is_active: bool
    data_processing_purpose: str

    def to_dict(self) -> dict:
        return {
            "validatorAddress": self.validator_address,
            "consentVersion": self.consent_version,
            "consentHash": self.consent_hash,
            "timestamp": self.timestamp,
            "isActive": self.is_active,
            "dataProcessingPurpose": self.data_processing_purpose,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsentRecord":
        return cls(
            validator_address=data["validatorAddress"],
            consent_version=data["consentVersion"],
            consent_hash=data["consentHash"],
            timestamp=int(data["timestamp"]),
            is_active=bool(data["isActive"]),
            data_processing_purpose=data["dataProcessingPurpose"],
        )


@dataclass(frozen=True)
class ConsentEvent:
    """One immutable entry of the consent audit trail."""
    event_type: ConsentEventType
    validator_address: str
    timestamp: int
    consent_version: str

    def to_dict(self) -> dict:
        return {
            "eventType": self.event_type.value,
            "validatorAddress": self.validator_address,
            "timestamp": self.timestamp,
            "consentVersion": self.consent_version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsentEvent":
        return cls(
            event_type=ConsentEventType(data["eventType"]),
            validator_address=data["validatorAddress"],
            timestamp=int(data["timestamp"]),
            consent_version=data["consentVersion"],
        )


class ConsentEventLog:
    """
    Strictly-growing, indexed sequence of consent events.

    Only append() mutates it. There is no way to update or remove an entry;
    readers get tuples, so a snapshot can never be altered after the fact.
    """

    def __init__(self, events: Tuple[ConsentEvent, ...] = ()):
        self._events: List[ConsentEvent] = list(events)
        self._lock = threading.Lock()

    def append(self, event: ConsentEvent) -> int:
        """Append an event and return its index."""
        with self._lock:
            self._events.append(event)
            return len(self._events) - 1

    def snapshot(self) -> Tuple[ConsentEvent, ...]:
        with self._lock:
            return tuple(self._events)

    def for_address(self, address: str) -> Tuple[ConsentEvent, ...]:
        with self._lock:
            return tuple(e for e in self._events if e.validator_address == address)

    def __getitem__(self, index: int) -> ConsentEvent:
        with self._lock:
            return self._events[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __iter__(self) -> Iterator[ConsentEvent]:
        return iter(self.snapshot())


class ConsentStore:
    """
    Owned map of validator address -> current ConsentRecord.

    put() is the single writer path. Records are never deleted: a revoked
    consent stays in the store with is_active=False. Iteration follows
    first-insertion order of addresses.
    """

    def __init__(self, records: Optional[List[Tuple[str, ConsentRecord]]] = None):
        self._records: Dict[str, ConsentRecord] = dict(records or [])

    def put(self, record: ConsentRecord, address: Optional[str] = None):
        self._records[address or record.validator_address] = record

    def get(self, address: str) -> Optional[ConsentRecord]:
        return self._records.get(address)

    def items(self) -> List[Tuple[str, ConsentRecord]]:
        return list(self._records.items())

    def values(self) -> List[ConsentRecord]:
        return list(self._records.values())

    def __contains__(self, address: str) -> bool:
        return address in self._records

    def __len__(self) -> int:
        return len(self._records)


class ConsentRegistry:
    """
    Consent lifecycle for biometric data processing.

    Construct exactly one per process (at the composition root) and pass it to
    every consumer.

    Usage:
        registry = ConsentRegistry(owner="system", unstake_hook=lifecycle.unstake)

        registry.give_consent(address, "consensus")
        registry.has_valid_consent(address)   # True
        registry.revoke_consent(address)      # unstake_hook(address) fires
    """

    def __init__(
        self,
        owner: str = DEFAULT_REGISTRY_OWNER,
        consent_version: str = DEFAULT_CONSENT_VERSION,
        consent_text_hash: str = DEFAULT_CONSENT_TEXT_HASH,
        unstake_hook: Optional[Callable[[str], None]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            owner: Identity allowed to publish new consent versions
            consent_version: Version stamped on new consents
            consent_text_hash: Hash of the consent text for that version
            unstake_hook: Called with the address after every revoke
            clock: Returns seconds since epoch (injectable for tests)
        """
        self.owner = owner
        self._current_consent_version = consent_version
        self._consent_text_hash = consent_text_hash
        self._unstake_hook = unstake_hook
        self._clock = clock

        self._store = ConsentStore()
        self._events = ConsentEventLog()
        self._state_lock = threading.RLock()

        # address -> [lock, holders]; entries are dropped when no caller holds or waits on them
        self._address_locks: Dict[str, list] = {}
        self._address_locks_lock = threading.Lock()

        logger.info(f"ConsentRegistry initialized: owner={owner}, version={consent_version}")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @contextmanager
    def _address_lock(self, address: str):
        """Serialize lifecycle operations on one address."""
        with self._address_locks_lock:
            entry = self._address_locks.get(address)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._address_locks[address] = entry
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._address_locks_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._address_locks[address]

    def _notify_unstake(self, address: str):
        if not self._unstake_hook:
            return
        try:
            self._unstake_hook(address)
        except Exception as e:
            # The revoke is already committed and logged; it is not rolled back
            logger.error(f"Unstake hook failed for {address[:12]}...: {e}")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def give_consent(
        self,
        address: str,
        purpose: str,
        version: Optional[str] = None,
    ) -> ConsentRecord:
        """
        Give (or re-give) consent. Always succeeds and overwrites any prior record.

        Args:
            address: Validator address
            purpose: Data processing purpose
            version: Consent version; defaults to the current global version
        """
        with self._address_lock(address):
            with self._state_lock:
                version = version or self._current_consent_version
                record = ConsentRecord(
                    validator_address=address,
                    consent_version=version,
                    consent_hash=self._consent_text_hash,
                    timestamp=self._now_ms(),
                    is_active=True,
                    data_processing_purpose=purpose,
                )
                self._store.put(record)
                self._events.append(ConsentEvent(
                    event_type=ConsentEventType.GIVEN,
                    validator_address=address,
                    timestamp=record.timestamp,
                    consent_version=version,
                ))

        logger.info(f"Consent given: {address[:12]}... (version={version}, purpose={purpose})")
        return record

    def revoke_consent(self, address: str) -> bool:
        """
        Revoke an active consent and signal the unstaking hook.

        Raises:
            NotFoundError: no active consent record exists for the address
                (never given, or already revoked).
        """
        with self._address_lock(address):
            with self._state_lock:
                existing = self._store.get(address)
                if existing is None or not existing.is_active:
                    logger.warning(f"Revoke rejected: no active consent for {address[:12]}...")
                    raise NotFoundError(address, f"No active consent record found for {address}")

                self._store.put(replace(existing, is_active=False))
                self._events.append(ConsentEvent(
                    event_type=ConsentEventType.REVOKED,
                    validator_address=address,
                    timestamp=self._now_ms(),
                    consent_version=existing.consent_version,
                ))

        # Outside the address lock so the hook may call back into the registry
        logger.info(f"Consent revoked: {address[:12]}... (triggering unstake)")
        self._notify_unstake(address)

        return True

    def update_consent(self, address: str, new_purpose: Optional[str] = None) -> ConsentRecord:
        """
        Re-stamp an existing consent with the current version and hash.

        is_active is carried over unchanged: updating a revoked consent leaves
        it revoked.

        Raises:
            NotFoundError: no consent record exists for the address.
        """
        with self._address_lock(address):
            with self._state_lock:
                existing = self._store.get(address)
                if existing is None:
                    logger.warning(f"Update rejected: no consent for {address[:12]}...")
                    raise NotFoundError(address, f"No existing consent to update for {address}")

                updated = replace(
                    existing,
                    consent_version=self._current_consent_version,
                    consent_hash=self._consent_text_hash,
                    timestamp=self._now_ms(),
                    data_processing_purpose=new_purpose or existing.data_processing_purpose,
                )
                self._store.put(updated)
                self._events.append(ConsentEvent(
                    event_type=ConsentEventType.UPDATED,
                    validator_address=address,
                    timestamp=updated.timestamp,
                    consent_version=updated.consent_version,
                ))

        logger.info(f"Consent updated: {address[:12]}... (version={updated.consent_version})")
        return updated

    # =========================================================================
    # QUERIES
    # =========================================================================

    def has_valid_consent(self, address: str) -> bool:
        with self._state_lock:
            record = self._store.get(address)
        return record is not None and record.is_active is True

    def get_consent(self, address: str) -> Optional[ConsentRecord]:
        with self._state_lock:
            return self._store.get(address)

    def get_all_active_consents(self) -> List[ConsentRecord]:
        with self._state_lock:
            return [r for r in self._store.values() if r.is_active]

    def get_event_log(self) -> List[ConsentEvent]:
        """Copy of the full audit trail in emission order."""
        return list(self._events.snapshot())

    def get_validator_events(self, address: str) -> List[ConsentEvent]:
        return list(self._events.for_address(address))

    @property
    def current_consent_version(self) -> str:
        return self._current_consent_version

    @property
    def consent_text_hash(self) -> str:
        return self._consent_text_hash

    # =========================================================================
    # ADMIN
    # =========================================================================

    def update_consent_version(self, new_version: str, new_hash: str, caller: Optional[str] = None):
        """
        Publish a new consent text version. Only future give/update calls use it.

        Raises:
            PermissionError: caller is given and is not the registry owner.
        """
        if caller is not None and caller != self.owner:
            raise PermissionError(f"Only {self.owner} can update the consent version")

        with self._state_lock:
            old_version = self._current_consent_version
            self._current_consent_version = new_version
            self._consent_text_hash = new_hash

        logger.info(f"Consent version updated: {old_version} -> {new_version}")

    def set_unstake_hook(self, callback: Callable[[str], None]):
        """Set the validator-lifecycle callback fired after each revoke."""
        self._unstake_hook = callback

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def export_state(self) -> dict:
        """
        Snapshot the full state.

        Layout: {consents: [[address, record], ...], eventLog: [event, ...],
        currentConsentVersion, consentTextHash}
        """
        with self._state_lock:
            return {
                "consents": [[address, record.to_dict()] for address, record in self._store.items()],
                "eventLog": [event.to_dict() for event in self._events.snapshot()],
                "currentConsentVersion": self._current_consent_version,
                "consentTextHash": self._consent_text_hash,
            }

    def import_state(self, state: dict):
        """
        Replace the full state with a snapshot produced by export_state().

        The snapshot is parsed completely before anything is swapped in, so a
        malformed snapshot leaves the registry untouched.

        Raises:
            InvalidStateError: snapshot does not match the persisted layout.
        """
        try:
            records = [(address, ConsentRecord.from_dict(data)) for address, data in state["consents"]]
            events = tuple(ConsentEvent.from_dict(data) for data in state["eventLog"])
            version = str(state["currentConsentVersion"])
            text_hash = str(state["consentTextHash"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidStateError(f"Malformed consent state: {e}") from e

        with self._state_lock:
            self._store = ConsentStore(records)
            self._events = ConsentEventLog(events)
            self._current_consent_version = version
            self._consent_text_hash = text_hash

        logger.info(f"Consent state imported: {len(records)} records, {len(events)} events")

    # =========================================================================
    # STATISTICS
    # =========================================================================

    def get_stats(self) -> dict:
        with self._state_lock:
            records = self._store.values()
            total_events = len(self._events)
        active = sum(1 for r in records if r.is_active)
        return {
            "total_records": len(records),
            "active_consents": active,
            "revoked_consents": len(records) - active,
            "total_events": total_events,
            "current_consent_version": self._current_consent_version,
        }
