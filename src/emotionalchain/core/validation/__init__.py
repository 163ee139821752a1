"""
Inbound message validation.

- schemas: one pydantic model per message kind
- validator: MessageKind, MESSAGE_SCHEMAS, MessageValidator
"""

from emotionalchain.core.validation.validator import (
    MESSAGE_SCHEMAS,
    MessageKind,
    MessageValidator,
)

__all__ = [
    "MESSAGE_SCHEMAS",
    "MessageKind",
    "MessageValidator",
]
