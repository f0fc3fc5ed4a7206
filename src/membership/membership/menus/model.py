from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Menu:
    """Navigation entry; ``parent_id`` 0 marks a root menu."""

    menu_id: int
    name: str
    display_name: Optional[str] = None
    url: Optional[str] = None
    parent_id: int = 0
    sort: int = 0
    visible: bool = True

    def __str__(self) -> str:
        return self.display_name or self.name
