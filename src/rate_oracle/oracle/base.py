"""
RateOracleBase — общий query-интерфейс обоих вариантов оракула.

Все запросы conversion factor маршрутизируются через RateEngine
(методы RateState). at=None означает "сейчас" по инжектированным часам.
"""

import time
from typing import Callable, Optional

from rate_oracle.core.domain.rate_state import RateState

Clock = Callable[[], int]


def system_clock() -> int:
    """Текущее unix-время в целых секундах."""
    return int(time.time())


class RateOracleBase:
    """Query-интерфейс поверх текущего RateState."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or system_clock
        self._state: RateState = RateState.uninitialized()

    def now(self) -> int:
        return self._clock()

    def _resolve(self, at: Optional[int]) -> int:
        return self.now() if at is None else at

    def get_state(self) -> RateState:
        return self._state

    def get_rate(self) -> int:
        return self._state.rate

    def get_index(self) -> int:
        return self._state.index

    def get_last_update(self) -> int:
        return self._state.timestamp

    def get_conversion_rate(self, at: Optional[int] = None) -> int:
        return self._state.conversion_rate(self._resolve(at))

    def get_conversion_rate_binomial_approx(self, at: Optional[int] = None) -> int:
        return self._state.conversion_rate_binomial_approx(self._resolve(at))

    def get_conversion_rate_linear_approx(self, at: Optional[int] = None) -> int:
        return self._state.conversion_rate_linear_approx(self._resolve(at))

    def get_apr(self) -> int:
        return self._state.apr()
