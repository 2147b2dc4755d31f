"""Acceptance State Machine — решение о применении relay-снапшота.

Состояния:
- UNINITIALIZED (timestamp == 0): первый снапшот принимается безусловно
- INITIALIZED (timestamp > 0): кандидат проходит цепочку проверок

Переход UNINITIALIZED → INITIALIZED однонаправленный и постоянный.

Порядок проверок (fail fast, первое нарушение определяет причину):
1. candidate.timestamp >= current.timestamp      → REORDERED_TIMESTAMP
2. candidate.timestamp <= now                    → FUTURE_TIMESTAMP
3. candidate.rate >= RAY                         → INVALID_RATE
4. candidate.index >= current.index              → DECREASING_INDEX
5. cap != 0: candidate.rate <= cap               → RATE_EXCEEDS_CAP
6. cap != 0: candidate.index <= compound(cap, current.index, Δt)
                                                 → INDEX_EXCEEDS_CAP_BOUND

Strict same-timestamp режим (опционально): кандидат с тем же timestamp, но
другими rate/index отвергается с CONFLICTING_SNAPSHOT.

Модуль чистый: evaluate_proposal не мутирует состояние, только решает.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rate_oracle.core.domain.rate_state import RateState
from rate_oracle.core.math.fixed_point import RAY
from rate_oracle.core.math.rate_engine import compound


class AcceptanceState(str, Enum):
    """Состояние оракула относительно bootstrap."""

    UNINITIALIZED = "UNINITIALIZED"
    INITIALIZED = "INITIALIZED"

    @classmethod
    def of(cls, state: RateState) -> "AcceptanceState":
        return cls.INITIALIZED if state.is_initialized else cls.UNINITIALIZED


class RejectReason(str, Enum):
    """Причина отказа. Различима для мониторинга: stale relay / bad data / cap."""

    REORDERED_TIMESTAMP = "REORDERED_TIMESTAMP"
    FUTURE_TIMESTAMP = "FUTURE_TIMESTAMP"
    INVALID_RATE = "INVALID_RATE"
    DECREASING_INDEX = "DECREASING_INDEX"
    RATE_EXCEEDS_CAP = "RATE_EXCEEDS_CAP"
    INDEX_EXCEEDS_CAP_BOUND = "INDEX_EXCEEDS_CAP_BOUND"
    CONFLICTING_SNAPSHOT = "CONFLICTING_SNAPSHOT"


class UpdateRejected(Exception):
    """Снапшот отвергнут; состояние оракула не изменилось."""

    def __init__(self, reason: RejectReason, details: str = ""):
        self.reason = reason
        self.details = details
        super().__init__(f"{reason.value}: {details}" if details else reason.value)


@dataclass(frozen=True)
class ProposalResult:
    """Результат оценки кандидата."""

    accepted: bool
    reject_reason: Optional[RejectReason]

    previous_state: RateState
    # При отказе совпадает с previous_state
    new_state: RateState

    details: str

    @property
    def transition_occurred(self) -> bool:
        return AcceptanceState.of(self.previous_state) != AcceptanceState.of(self.new_state)

    def raise_for_rejection(self) -> None:
        """
        Raises:
            UpdateRejected: если кандидат отвергнут
        """
        if not self.accepted:
            raise UpdateRejected(self.reject_reason, self.details)


def _accept(current: RateState, candidate: RateState, details: str) -> ProposalResult:
    return ProposalResult(
        accepted=True,
        reject_reason=None,
        previous_state=current,
        new_state=candidate,
        details=details,
    )


def _reject(current: RateState, reason: RejectReason, details: str) -> ProposalResult:
    return ProposalResult(
        accepted=False,
        reject_reason=reason,
        previous_state=current,
        new_state=current,
        details=details,
    )


def evaluate_proposal(
    current: RateState,
    candidate: RateState,
    now: int,
    cap: int = 0,
    strict_same_timestamp: bool = False,
) -> ProposalResult:
    """Оценка кандидата против текущего состояния.

    Args:
        current: текущее принятое состояние (может быть sentinel)
        candidate: предлагаемый снапшот
        now: текущее время (секунды)
        cap: максимальный допустимый rate (0 — без ограничения)
        strict_same_timestamp: требовать совпадения rate/index при равном timestamp

    Returns:
        ProposalResult с решением и новым состоянием
    """
    # 1. Bootstrap: сравнивать не с чем
    if not current.is_initialized:
        return _accept(current, candidate, "bootstrap: first snapshot accepted")

    # 2. Упорядоченность по времени
    if candidate.timestamp < current.timestamp:
        return _reject(
            current,
            RejectReason.REORDERED_TIMESTAMP,
            f"candidate.timestamp={candidate.timestamp} < current.timestamp={current.timestamp}",
        )

    if candidate.timestamp > now:
        return _reject(
            current,
            RejectReason.FUTURE_TIMESTAMP,
            f"candidate.timestamp={candidate.timestamp} > now={now}",
        )

    if (
        strict_same_timestamp
        and candidate.timestamp == current.timestamp
        and (candidate.rate != current.rate or candidate.index != current.index)
    ):
        return _reject(
            current,
            RejectReason.CONFLICTING_SNAPSHOT,
            f"timestamp={candidate.timestamp} already accepted with different rate/index",
        )

    # 3. Валидность значений
    if candidate.rate < RAY:
        return _reject(
            current,
            RejectReason.INVALID_RATE,
            f"candidate.rate={candidate.rate} < RAY",
        )

    if candidate.index < current.index:
        return _reject(
            current,
            RejectReason.DECREASING_INDEX,
            f"candidate.index={candidate.index} < current.index={current.index}",
        )

    # 4. Cap: ограничение правдоподобного роста index за интервал
    if cap:
        if candidate.rate > cap:
            return _reject(
                current,
                RejectReason.RATE_EXCEEDS_CAP,
                f"candidate.rate={candidate.rate} > cap={cap}",
            )

        duration = candidate.timestamp - current.timestamp
        max_index = compound(cap, current.index, duration)
        if candidate.index > max_index:
            return _reject(
                current,
                RejectReason.INDEX_EXCEEDS_CAP_BOUND,
                f"candidate.index={candidate.index} > bound={max_index} over {duration}s",
            )

    return _accept(
        current,
        candidate,
        f"accepted: timestamp {current.timestamp} → {candidate.timestamp}",
    )
