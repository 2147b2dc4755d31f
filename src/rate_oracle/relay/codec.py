"""
RelayMessage — транспортный конверт RateState и wire-кодек.

Wire-формат (фиксированная ширина, 96 байт):
    word 0 (32 байта, big-endian): rate       — uint96
    word 1 (32 байта, big-endian): index      — uint120
    word 2 (32 байта, big-endian): timestamp  — uint40

Ширины полей: uint120 для index вмещает ~1.3e9 RAY, uint40 для timestamp —
до ~34800 года; многодесятилетнее компаундирование не переполняет.

decode не выполняет семантическую валидацию (это задача acceptance state
machine на стороне получателя), только структурную: длина и ширина полей.
"""

from dataclasses import dataclass
from typing import Any, Dict, Final

from jsonschema import ValidationError

from rate_oracle.core.contracts import validate_relay_message
from rate_oracle.core.domain.rate_state import RateState
from rate_oracle.core.math.fixed_point import fits_bits, require_bits

# =============================================================================
# WIRE LAYOUT
# =============================================================================

WORD_SIZE: Final[int] = 32

RATE_BITS: Final[int] = 96
INDEX_BITS: Final[int] = 120
TIMESTAMP_BITS: Final[int] = 40

# (имя поля, ширина в битах) в порядке следования слов
FIELDS: Final[tuple] = (
    ("rate", RATE_BITS),
    ("index", INDEX_BITS),
    ("timestamp", TIMESTAMP_BITS),
)

MESSAGE_SIZE: Final[int] = WORD_SIZE * len(FIELDS)

PAYLOAD_SCHEMA_VERSION: Final[str] = "1"


class MalformedMessage(ValueError):
    """Байты/payload не являются корректным RelayMessage (transport fault)."""
    pass


# =============================================================================
# MESSAGE
# =============================================================================


@dataclass(frozen=True)
class RelayMessage:
    """Immutable копия RateState для транспорта между доменами."""

    rate: int
    index: int
    timestamp: int

    @classmethod
    def from_state(cls, state: RateState) -> "RelayMessage":
        return cls(rate=state.rate, index=state.index, timestamp=state.timestamp)

    def to_state(self) -> RateState:
        return RateState(rate=self.rate, index=self.index, timestamp=self.timestamp)

    def to_payload(self) -> Dict[str, str]:
        """JSON-форма, соответствующая контракту relay_message."""
        payload = {
            "schema_version": PAYLOAD_SCHEMA_VERSION,
            "rate": str(self.rate),
            "index": str(self.index),
            "timestamp": str(self.timestamp),
        }
        validate_relay_message(payload)
        return payload

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RelayMessage":
        """
        Raises:
            MalformedMessage: нарушение контракта или ширины поля
        """
        try:
            validate_relay_message(payload)
        except ValidationError as e:
            raise MalformedMessage(f"Relay payload violates contract: {e.message}") from e

        values = {}
        for name, bits in FIELDS:
            value = int(payload[name])
            if not fits_bits(value, bits):
                raise MalformedMessage(f"{name}={value} does not fit in uint{bits}")
            values[name] = value
        return cls(**values)


# =============================================================================
# ENCODE / DECODE
# =============================================================================


def encode(message: RelayMessage) -> bytes:
    """
    Упаковка RelayMessage в 96 байт.

    Raises:
        TypeError: поле не int
        ValueError: поле не помещается в свою ширину
    """
    chunks = []
    for name, bits in FIELDS:
        value = require_bits(getattr(message, name), bits, name)
        chunks.append(value.to_bytes(WORD_SIZE, "big"))
    return b"".join(chunks)


def decode(data: bytes) -> RelayMessage:
    """
    Распаковка 96 байт в RelayMessage.

    Raises:
        MalformedMessage: неверный тип, длина или значение вне ширины поля
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise MalformedMessage(f"Expected bytes, got {type(data).__name__}")

    data = bytes(data)
    if len(data) != MESSAGE_SIZE:
        raise MalformedMessage(
            f"Expected {MESSAGE_SIZE} bytes, got {len(data)}"
        )

    values = {}
    for position, (name, bits) in enumerate(FIELDS):
        word = data[position * WORD_SIZE:(position + 1) * WORD_SIZE]
        value = int.from_bytes(word, "big")
        if not fits_bits(value, bits):
            raise MalformedMessage(f"{name}={value} does not fit in uint{bits}")
        values[name] = value
    return RelayMessage(**values)
