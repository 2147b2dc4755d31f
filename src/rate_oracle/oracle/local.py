"""
LocalOracle — оракул на домене источника.

Читает RateState напрямую из source ledger по запросу. Граница доверия
отсутствует: значения источника не валидируются (кроме структурных
проверок RateState — неотрицательные int).
"""

import logging
from typing import Optional, Protocol

from rate_oracle.core.domain.rate_state import RateState
from rate_oracle.oracle.base import Clock, RateOracleBase

logger = logging.getLogger(__name__)


class RateSource(Protocol):
    """Read-only контракт source ledger."""

    def rate(self) -> int: ...

    def index(self) -> int: ...

    def last_update(self) -> int: ...


class LocalOracle(RateOracleBase):
    """
    Оракул, синхронизируемый с источником только через refresh().

    Состояние создаётся при конструировании (первое чтение источника) и
    заменяется целиком при каждом refresh(); история не хранится.
    """

    def __init__(self, source: RateSource, clock: Optional[Clock] = None):
        super().__init__(clock=clock)
        self._source = source
        self.refresh()

    @property
    def source(self) -> RateSource:
        return self._source

    def refresh(self) -> RateState:
        """
        Перечитать источник и атомарно заменить состояние.

        Returns:
            Новое состояние
        """
        state = RateState(
            rate=self._source.rate(),
            index=self._source.index(),
            timestamp=self._source.last_update(),
        )
        # Одно присваивание: читатели видят либо старый, либо новый снапшот
        self._state = state
        logger.debug(
            "Local oracle refreshed: rate=%d index=%d timestamp=%d",
            state.rate, state.index, state.timestamp,
        )
        return state
