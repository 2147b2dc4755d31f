"""
RelayForwarder — отправляющая сторона relay.

Обновляет LocalOracle, запоминает последний увиденный снапшот (passive cache)
и передаёт закодированное сообщение транспортному hook'у. Сам транспорт
(bridge, кодирование вызова, комиссии) — внешний коллаборатор.
"""

import logging
from typing import Callable, Optional

from rate_oracle.oracle.local import LocalOracle
from rate_oracle.relay.codec import RelayMessage, encode

logger = logging.getLogger(__name__)

Transport = Callable[[bytes], None]


class RelayForwarder:
    """Источник relay-сообщений поверх LocalOracle."""

    def __init__(self, oracle: LocalOracle, send: Transport):
        self._oracle = oracle
        self._send = send
        self._last_seen: Optional[RelayMessage] = None

    @property
    def last_seen(self) -> RelayMessage:
        """Последний отправленный снапшот (нулевой до первого refresh)."""
        if self._last_seen is None:
            return RelayMessage(rate=0, index=0, timestamp=0)
        return self._last_seen

    def refresh(self) -> RelayMessage:
        """
        Перечитать источник, закэшировать и отправить снапшот.

        Ошибки транспорта пробрасываются; last_seen обновляется только
        после успешной отправки.
        """
        message = RelayMessage.from_state(self._oracle.refresh())
        self._send(encode(message))
        self._last_seen = message
        logger.info(
            "Relay message sent: rate=%d index=%d timestamp=%d",
            message.rate, message.index, message.timestamp,
        )
        return message
