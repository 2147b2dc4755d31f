"""
RateState — Снапшот accumulation factor

Immutable Pydantic модель: {rate, index, timestamp}.
- rate: посекундный множитель (RAY-scale), RAY == 0% роста
- index: накопленный conversion factor на момент timestamp (RAY-scale)
- timestamp: время наблюдения index (секунды); 0 — sentinel "uninitialized"

Производные запросы (conversion factor в момент at, APR) делегируются RateEngine.
JSON-форма хранит целые как десятичные строки (RAY-значения не помещаются в
double без потери точности) и совместима с контрактом rate_state.json.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, StrictInt

from rate_oracle.core.contracts import validate_rate_state
from rate_oracle.core.math import rate_engine


class RateState(BaseModel):
    """
    Снапшот состояния ставки.

    Замена состояния — только целиком (frozen=True), частичных обновлений нет.
    """

    rate: StrictInt = Field(..., ge=0, description="Посекундный множитель (RAY)")
    index: StrictInt = Field(..., ge=0, description="Conversion factor на timestamp (RAY)")
    timestamp: StrictInt = Field(..., ge=0, description="Время наблюдения (секунды)")

    model_config = {"frozen": True}

    @classmethod
    def uninitialized(cls) -> "RateState":
        """Sentinel-состояние: все поля нулевые."""
        return cls(rate=0, index=0, timestamp=0)

    @property
    def is_initialized(self) -> bool:
        return self.timestamp > 0

    # -------------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------------

    def conversion_rate(self, at: int) -> int:
        return rate_engine.conversion_rate(self.rate, self.index, self.timestamp, at)

    def conversion_rate_binomial_approx(self, at: int) -> int:
        return rate_engine.conversion_rate_binomial_approx(
            self.rate, self.index, self.timestamp, at
        )

    def conversion_rate_linear_approx(self, at: int) -> int:
        return rate_engine.conversion_rate_linear_approx(
            self.rate, self.index, self.timestamp, at
        )

    def apr(self) -> int:
        return rate_engine.apr(self.rate)

    # -------------------------------------------------------------------------
    # JSON form
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, str]:
        """
        JSON-совместимое представление (целые как десятичные строки).

        Examples:
            >>> RateState(rate=1, index=2, timestamp=3).to_dict()
            {'rate': '1', 'index': '2', 'timestamp': '3'}
        """
        return {
            "rate": str(self.rate),
            "index": str(self.index),
            "timestamp": str(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateState":
        """
        Восстановление из JSON-формы с проверкой контракта rate_state.

        Raises:
            jsonschema.ValidationError: если data не соответствует контракту
        """
        validate_rate_state(data)
        return cls(
            rate=int(data["rate"]),
            index=int(data["index"]),
            timestamp=int(data["timestamp"]),
        )
