"""
rate_oracle — accumulation factor oracle.

Fixed-point RateEngine, локальный оракул над source ledger, валидирующий
удалённый оракул для relay-снапшотов и wire-кодек RelayMessage.
"""

from rate_oracle.core.domain import RateState
from rate_oracle.core.math import RAY, SECONDS_PER_YEAR, RateDomainError
from rate_oracle.oracle import (
    AccessPolicy,
    AuthContext,
    AuthorizationError,
    LocalOracle,
    ProposalResult,
    RateSource,
    RejectReason,
    Role,
    UpdateRejected,
    ValidatedRemoteOracle,
)
from rate_oracle.relay import MalformedMessage, RelayForwarder, RelayMessage, decode, encode

__version__ = "0.1.0"

__all__ = [
    "RAY",
    "SECONDS_PER_YEAR",
    "RateDomainError",
    "RateState",
    "AccessPolicy",
    "AuthContext",
    "AuthorizationError",
    "LocalOracle",
    "ProposalResult",
    "RateSource",
    "RejectReason",
    "Role",
    "UpdateRejected",
    "ValidatedRemoteOracle",
    "MalformedMessage",
    "RelayForwarder",
    "RelayMessage",
    "decode",
    "encode",
]
