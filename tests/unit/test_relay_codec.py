"""Тесты RelayMessage wire-кодека и JSON payload.

Coverage:
- Фиксированная раскладка (96 байт, big-endian слова)
- Round-trip (property-based)
- MalformedMessage: длина, тип, ширина поля
- Encode: значения вне ширины
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rate_oracle.core.domain import RateState
from rate_oracle.core.math.fixed_point import RAY
from rate_oracle.relay import (
    INDEX_BITS,
    MESSAGE_SIZE,
    RATE_BITS,
    TIMESTAMP_BITS,
    MalformedMessage,
    RelayMessage,
    decode,
    encode,
)

FIVE_PCT_RATE = 1_000000001_547125957_863212448


@pytest.fixture
def message():
    return RelayMessage(rate=FIVE_PCT_RATE, index=1_030000000_000000000_000000000, timestamp=1_700_000_000)


# =============================================================================
# LAYOUT
# =============================================================================


class TestLayout:
    """Раскладка wire-формата."""

    def test_size(self, message):
        assert MESSAGE_SIZE == 96
        assert len(encode(message)) == MESSAGE_SIZE

    def test_words_big_endian(self, message):
        data = encode(message)
        assert int.from_bytes(data[0:32], "big") == message.rate
        assert int.from_bytes(data[32:64], "big") == message.index
        assert int.from_bytes(data[64:96], "big") == message.timestamp

    def test_deterministic(self, message):
        assert encode(message) == encode(RelayMessage(**vars(message)))

    def test_field_widths_hold_decades_of_compounding(self):
        # 100 лет при 5% APY: index ≈ 131.5 RAY
        assert 132 * RAY < 2**INDEX_BITS
        assert 2 * RAY < 2**RATE_BITS
        assert 4_102_444_800 < 2**TIMESTAMP_BITS  # 2100-01-01


# =============================================================================
# ROUND TRIP
# =============================================================================


class TestRoundTrip:
    """decode(encode(m)) == m."""

    def test_example(self, message):
        assert decode(encode(message)) == message

    def test_state_conversion(self, message):
        state = message.to_state()
        assert isinstance(state, RateState)
        assert RelayMessage.from_state(state) == message

    @given(
        rate=st.integers(min_value=0, max_value=2**RATE_BITS - 1),
        index=st.integers(min_value=0, max_value=2**INDEX_BITS - 1),
        timestamp=st.integers(min_value=0, max_value=2**TIMESTAMP_BITS - 1),
    )
    def test_round_trip_property(self, rate, index, timestamp):
        message = RelayMessage(rate=rate, index=index, timestamp=timestamp)
        assert decode(encode(message)) == message

    def test_accepts_bytearray_and_memoryview(self, message):
        data = encode(message)
        assert decode(bytearray(data)) == message
        assert decode(memoryview(data)) == message


# =============================================================================
# MALFORMED INPUT
# =============================================================================


class TestMalformed:
    """Недоверенные байты."""

    @pytest.mark.parametrize("size", [0, 1, 64, 95, 97, 128])
    def test_wrong_length(self, size):
        with pytest.raises(MalformedMessage, match="Expected 96 bytes"):
            decode(b"\x00" * size)

    def test_not_bytes(self):
        with pytest.raises(MalformedMessage):
            decode("0" * 96)

    @pytest.mark.parametrize(
        "position,bits", [(0, RATE_BITS), (1, INDEX_BITS), (2, TIMESTAMP_BITS)]
    )
    def test_out_of_range_field(self, message, position, bits):
        data = bytearray(encode(message))
        data[position * 32:(position + 1) * 32] = (2**bits).to_bytes(32, "big")
        with pytest.raises(MalformedMessage, match=f"uint{bits}"):
            decode(bytes(data))

    def test_malformed_is_value_error(self):
        assert issubclass(MalformedMessage, ValueError)


class TestEncodeValidation:
    """Encode отвергает значения вне ширины."""

    def test_rate_too_wide(self):
        with pytest.raises(ValueError, match="uint96"):
            encode(RelayMessage(rate=2**96, index=0, timestamp=0))

    def test_negative(self):
        with pytest.raises(ValueError):
            encode(RelayMessage(rate=RAY, index=-1, timestamp=0))


# =============================================================================
# JSON PAYLOAD
# =============================================================================


class TestPayload:
    """JSON форма relay_message."""

    def test_round_trip(self, message):
        payload = message.to_payload()
        assert payload["schema_version"] == "1"
        assert RelayMessage.from_payload(payload) == message

    def test_contract_violation(self):
        with pytest.raises(MalformedMessage, match="contract"):
            RelayMessage.from_payload({"rate": "1"})

    def test_width_violation(self):
        payload = {
            "schema_version": "1",
            "rate": str(2**96),
            "index": "0",
            "timestamp": "0",
        }
        with pytest.raises(MalformedMessage, match="uint96"):
            RelayMessage.from_payload(payload)
