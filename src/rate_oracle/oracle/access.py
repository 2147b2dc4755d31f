"""
Access Control — capability-проверки для мутирующих операций

Каждая мутирующая точка входа принимает явный AuthContext и сверяет его
с AccessPolicy (principal → roles). Глобальной "текущей identity" нет.

Роли:
- ADMIN: управление cap и выдача/отзыв ролей
- DATA_PROVIDER: propose_update (relay/transport слой)
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Set

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Capability, требуемая для мутирующей операции."""

    ADMIN = "ADMIN"
    DATA_PROVIDER = "DATA_PROVIDER"


class AuthorizationError(PermissionError):
    """Вызывающий не обладает требуемой ролью. Операция не выполнена."""

    def __init__(self, principal: str, role: Role):
        self.principal = principal
        self.role = role
        super().__init__(f"principal={principal!r} lacks role {role.value}")


@dataclass(frozen=True)
class AuthContext:
    """Контекст авторизации вызова."""

    principal: str


class AccessPolicy:
    """
    Карта principal → roles.

    Изначально содержит только admin_principal с ролью ADMIN.
    """

    def __init__(self, admin_principal: str, data_providers: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._roles: Dict[str, Set[Role]] = {admin_principal: {Role.ADMIN}}
        for principal in data_providers:
            self._roles.setdefault(principal, set()).add(Role.DATA_PROVIDER)

    def has_role(self, principal: str, role: Role) -> bool:
        with self._lock:
            return role in self._roles.get(principal, ())

    def roles_of(self, principal: str) -> FrozenSet[Role]:
        with self._lock:
            return frozenset(self._roles.get(principal, ()))

    def require(self, ctx: AuthContext, role: Role) -> None:
        """
        Raises:
            AuthorizationError: если ctx.principal не имеет role
        """
        if not self.has_role(ctx.principal, role):
            logger.warning(
                "Authorization denied: principal=%s role=%s", ctx.principal, role.value
            )
            raise AuthorizationError(ctx.principal, role)

    def grant(self, ctx: AuthContext, principal: str, role: Role) -> None:
        """Выдача роли (только ADMIN)."""
        self.require(ctx, Role.ADMIN)
        with self._lock:
            self._roles.setdefault(principal, set()).add(role)
        logger.info(
            "Role granted: principal=%s role=%s by=%s", principal, role.value, ctx.principal
        )

    def revoke(self, ctx: AuthContext, principal: str, role: Role) -> None:
        """Отзыв роли (только ADMIN)."""
        self.require(ctx, Role.ADMIN)
        with self._lock:
            self._roles.get(principal, set()).discard(role)
        logger.info(
            "Role revoked: principal=%s role=%s by=%s", principal, role.value, ctx.principal
        )
