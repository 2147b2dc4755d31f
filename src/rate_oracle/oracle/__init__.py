"""Oracle — локальный и удалённый (валидирующий) оракулы accumulation factor.

- LocalOracle: чтение source ledger на его домене
- ValidatedRemoteOracle: приём relay-снапшотов через acceptance state machine
"""

from .acceptance import (
    AcceptanceState,
    ProposalResult,
    RejectReason,
    UpdateRejected,
    evaluate_proposal,
)
from .access import AccessPolicy, AuthContext, AuthorizationError, Role
from .base import RateOracleBase, system_clock
from .local import LocalOracle, RateSource
from .remote import ValidatedRemoteOracle

__all__ = [
    "AcceptanceState",
    "ProposalResult",
    "RejectReason",
    "UpdateRejected",
    "evaluate_proposal",
    "AccessPolicy",
    "AuthContext",
    "AuthorizationError",
    "Role",
    "RateOracleBase",
    "system_clock",
    "LocalOracle",
    "RateSource",
    "ValidatedRemoteOracle",
]
