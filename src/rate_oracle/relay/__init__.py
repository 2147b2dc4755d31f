"""Relay — транспортный конверт RateState и отправляющая сторона."""

from .codec import (
    INDEX_BITS,
    MESSAGE_SIZE,
    RATE_BITS,
    TIMESTAMP_BITS,
    MalformedMessage,
    RelayMessage,
    decode,
    encode,
)
from .forwarder import RelayForwarder, Transport

__all__ = [
    "INDEX_BITS",
    "MESSAGE_SIZE",
    "RATE_BITS",
    "TIMESTAMP_BITS",
    "MalformedMessage",
    "RelayMessage",
    "decode",
    "encode",
    "RelayForwarder",
    "Transport",
]
