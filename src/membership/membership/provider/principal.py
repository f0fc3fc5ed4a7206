from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from flask import g, has_request_context

_PRINCIPAL_ATTR = "principal"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity of the request plus its role names."""

    identity: Any
    roles: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.identity.name

    def is_in_role(self, role: str) -> bool:
        return role in self.roles


def get_principal() -> Optional[Principal]:
    if not has_request_context():
        return None
    return g.get(_PRINCIPAL_ATTR)


def attach_principal(principal: Principal) -> None:
    setattr(g, _PRINCIPAL_ATTR, principal)
