"""
ValidatedRemoteOracle — оракул на домене-получателе.

Принимает кандидатов RateState от недоверенного транспорта (relay: доставка
at-least-once, без гарантии порядка, с произвольной задержкой) и применяет
acceptance state machine перед фиксацией.

Capabilities:
- propose_update: Role.DATA_PROVIDER
- set_cap: Role.ADMIN

Конкурентность: read-validate-write в propose_update атомарен относительно
других вызовов на том же экземпляре (threading.Lock).
"""

import logging
import threading
from typing import Optional

from rate_oracle.config.settings import OracleSettings
from rate_oracle.core.domain.rate_state import RateState
from rate_oracle.core.math.fixed_point import RAY
from rate_oracle.oracle.acceptance import (
    AcceptanceState,
    ProposalResult,
    evaluate_proposal,
)
from rate_oracle.oracle.access import AccessPolicy, AuthContext, Role
from rate_oracle.oracle.base import Clock, RateOracleBase

logger = logging.getLogger(__name__)


class ValidatedRemoteOracle(RateOracleBase):
    """Оракул с валидацией входящих снапшотов и опциональным cap на rate."""

    def __init__(
        self,
        policy: AccessPolicy,
        cap: int = 0,
        strict_same_timestamp: bool = False,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            policy: карта ролей для авторизации мутирующих вызовов
            cap: начальный cap на rate (0 — без ограничения)
            strict_same_timestamp: отвергать конфликтующие снапшоты с равным timestamp
            clock: источник текущего времени (секунды)
        """
        super().__init__(clock=clock)
        self.policy = policy
        self.strict_same_timestamp = strict_same_timestamp
        self._lock = threading.Lock()
        self._cap = self._check_cap(cap)

    @classmethod
    def from_settings(
        cls,
        policy: AccessPolicy,
        settings: Optional[OracleSettings] = None,
        clock: Optional[Clock] = None,
    ) -> "ValidatedRemoteOracle":
        """Конструирование из OracleSettings (окружение по умолчанию)."""
        settings = settings or OracleSettings()
        return cls(
            policy=policy,
            cap=settings.max_rate_cap,
            strict_same_timestamp=settings.strict_same_timestamp,
            clock=clock,
        )

    @staticmethod
    def _check_cap(value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"cap must be int, got {type(value).__name__}")
        if value != 0 and value < RAY:
            raise ValueError(f"cap must be 0 or >= RAY, got {value}")
        return value

    @property
    def acceptance_state(self) -> AcceptanceState:
        return AcceptanceState.of(self._state)

    def get_cap(self) -> int:
        return self._cap

    def set_cap(self, ctx: AuthContext, value: int) -> None:
        """
        Установка cap (только ADMIN). 0 отключает cap.

        Raises:
            AuthorizationError: ctx без роли ADMIN
            ValueError: value не 0 и меньше RAY
        """
        self.policy.require(ctx, Role.ADMIN)
        value = self._check_cap(value)
        with self._lock:
            previous = self._cap
            self._cap = value
        logger.info("Cap updated: %d → %d by=%s", previous, value, ctx.principal)

    def propose_update(self, ctx: AuthContext, candidate: RateState) -> ProposalResult:
        """
        Предложить новый снапшот (только DATA_PROVIDER).

        Returns:
            ProposalResult; при отказе состояние не меняется

        Raises:
            AuthorizationError: ctx без роли DATA_PROVIDER
        """
        self.policy.require(ctx, Role.DATA_PROVIDER)

        with self._lock:
            result = evaluate_proposal(
                current=self._state,
                candidate=candidate,
                now=self.now(),
                cap=self._cap,
                strict_same_timestamp=self.strict_same_timestamp,
            )
            if result.accepted:
                self._state = result.new_state

        if result.accepted:
            logger.info(
                "Snapshot accepted: rate=%d index=%d timestamp=%d (%s)",
                candidate.rate, candidate.index, candidate.timestamp, result.details,
            )
        else:
            logger.warning(
                "Snapshot rejected: reason=%s %s",
                result.reject_reason.value, result.details,
            )
        return result
