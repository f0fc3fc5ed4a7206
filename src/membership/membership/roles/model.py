from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Role:
    role_id: int
    name: str
    enabled: bool = True
    is_system: bool = False
    remark: Optional[str] = None

    def __str__(self) -> str:
        return self.name
