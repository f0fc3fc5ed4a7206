from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from flask_login import UserMixin

from ..roles.model import Role


@dataclass(eq=False)
class User(UserMixin):
    """Domain entity: User.

    Note: Plain data object (no DB access). ``password`` holds the at-rest
    digest once the user has been registered. ``roles`` is filled by the
    service layer and is not a column.
    """

    user_id: int
    name: str
    password: str
    display_name: str = ""
    role_id: int = 0
    role_ids: Tuple[int, ...] = ()
    enabled: bool = True
    online: bool = False
    logins: int = 0
    last_login: Optional[datetime] = None
    last_login_ip: Optional[str] = None
    registered_at: Optional[datetime] = None
    roles: Tuple[Role, ...] = field(default=(), repr=False)

    @property
    def is_active(self) -> bool:
        return self.enabled

    def get_id(self) -> str:
        return str(self.user_id)

    def all_role_ids(self) -> Tuple[int, ...]:
        """Primary role first, then the extra ones, without zeros or repeats."""
        out: list[int] = []
        for rid in (self.role_id, *self.role_ids):
            if rid and rid not in out:
                out.append(int(rid))
        return tuple(out)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "display_name": self.display_name or self.name,
            "role_id": self.role_id,
            "roles": [str(r) for r in self.roles],
            "enabled": self.enabled,
            "online": self.online,
            "logins": self.logins,
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }

    def __str__(self) -> str:
        return self.display_name or self.name
