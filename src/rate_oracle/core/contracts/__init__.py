"""
Contract Validation Module

Валидация JSON контрактов rate oracle (снапшоты и relay-сообщения).
"""

from .validators import (
    ContractValidator,
    RateStateValidator,
    RelayMessageValidator,
    SchemaLoader,
    validate_rate_state,
    validate_relay_message,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RateStateValidator",
    "RelayMessageValidator",
    # Functions
    "validate_rate_state",
    "validate_relay_message",
]
