from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import Role


class RoleRepository(Protocol):
    def get_by_id(self, role_id: int) -> Optional[Role]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Role]:
        raise NotImplementedError

    def list_by_ids(self, role_ids: Iterable[int]) -> Sequence[Role]:
        raise NotImplementedError
