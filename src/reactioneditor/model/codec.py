"""
Transport Encoding
Converts records to and from the bytes exchanged with the remote service.
"""
from __future__ import annotations

from typing import TypeVar

from reactioneditor.model import schema
from reactioneditor.model.schema import Message

M = TypeVar("M", bound=Message)

# Message types the validator knows, by name.
MESSAGE_TYPES: dict[str, type[Message]] = {
    name: cls
    for name, cls in vars(schema).items()
    if isinstance(cls, type) and issubclass(cls, Message) and cls is not Message
}


def encode(message: Message) -> bytes:
    # Unset optionals are left out, so presence survives the round trip.
    return message.model_dump_json(exclude_none=True).encode("utf-8")


def decode(cls: type[M], payload: bytes) -> M:
    return cls.model_validate_json(payload)


def message_type(type_name: str) -> type[Message]:
    try:
        return MESSAGE_TYPES[type_name]
    except KeyError:
        raise KeyError(f"Unknown message type '{type_name}'") from None
