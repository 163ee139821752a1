"""
Runtime configuration and logging setup for an EmotionalChain core process.

Values come from environment variables with constant fallbacks. Library modules
only ever call logging.getLogger(__name__); handlers are attached here, once,
by the composition root.
"""

import logging
import logging.handlers  # For RotatingFileHandler
import os
import sys
from dataclasses import dataclass
from typing import Optional

# Consent text version/hash used until an admin publishes a new one
DEFAULT_CONSENT_VERSION = "v1.0"
DEFAULT_CONSENT_TEXT_HASH = "0x" + "a" * 64
DEFAULT_REGISTRY_OWNER = "system"
DEFAULT_LOG_LEVEL = "INFO"

EMOTIONALCHAIN_DIR = os.path.expanduser("~/.emotionalchain")
LOG_FORMAT = "[CORE] %(message)s"


@dataclass
class CoreConfig:
    """Settings consumed by runner.build_core()."""
    consent_version: str = DEFAULT_CONSENT_VERSION
    consent_text_hash: str = DEFAULT_CONSENT_TEXT_HASH
    registry_owner: str = DEFAULT_REGISTRY_OWNER
    log_level: str = DEFAULT_LOG_LEVEL
    state_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "CoreConfig":
        """Build a config, letting EMOTIONALCHAIN_* environment variables override defaults."""
        return cls(
            consent_version=os.getenv("EMOTIONALCHAIN_CONSENT_VERSION", DEFAULT_CONSENT_VERSION),
            consent_text_hash=os.getenv("EMOTIONALCHAIN_CONSENT_HASH", DEFAULT_CONSENT_TEXT_HASH),
            registry_owner=os.getenv("EMOTIONALCHAIN_REGISTRY_OWNER", DEFAULT_REGISTRY_OWNER),
            log_level=os.getenv("EMOTIONALCHAIN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            state_file=os.getenv("EMOTIONALCHAIN_STATE_FILE") or None,
        )


def _create_safe_handler() -> logging.Handler:
    """Stream to stdout when it is usable, otherwise to a rotating file."""
    if sys.stdout is not None and hasattr(sys.stdout, 'write'):
        try:
            sys.stdout.write('')
            sys.stdout.flush()
            return logging.StreamHandler(sys.stdout)
        except (AttributeError, OSError, ValueError):
            pass

    os.makedirs(EMOTIONALCHAIN_DIR, exist_ok=True)
    log_file = os.path.join(EMOTIONALCHAIN_DIR, "core.log")
    return logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding='utf-8'
    )


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """
    Configure the root logger for a core process.

    Existing handlers are cleared first so repeated calls never duplicate output.
    """
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    handler = _create_safe_handler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    return root_logger
