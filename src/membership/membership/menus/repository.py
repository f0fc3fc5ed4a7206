from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Menu


class MenuRepository(Protocol):
    def get_by_id(self, menu_id: int) -> Optional[Menu]:
        raise NotImplementedError

    def list_children(self, parent_id: int = 0, *, visible_only: bool = True) -> Sequence[Menu]:
        raise NotImplementedError
