from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

import pytest

from membership.container import build_container
from membership.core.registry import ServiceRegistry
from membership.logs.model import LogEntry
from membership.logs.repository import LogRepository
from membership.logs.service import LogProvider
from membership.main import create_app
from membership.menus.model import Menu
from membership.menus.repository import MenuRepository
from membership.roles.model import Role
from membership.roles.repository import RoleRepository
from membership.users.model import User
from membership.users.repository import UserRepository
from membership.users.service import UserService

FIXED_NOW = datetime(2026, 1, 5, 9, 0, 0)


@dataclass
class InMemoryUsers:
    """Returns copies, like a real store: changes only stick after ``save``."""

    by_id: dict[int, User] = field(default_factory=dict)
    saved: list[int] = field(default_factory=list)

    def get_by_id(self, user_id: int) -> Optional[User]:
        user = self.by_id.get(user_id)
        return dataclasses.replace(user) if user else None

    def get_by_name(self, name: str) -> Optional[User]:
        for user in self.by_id.values():
            if user.name == name:
                return dataclasses.replace(user)
        return None

    def create_user(self, user: User) -> int:
        user_id = max(self.by_id, default=0) + 1
        self.by_id[user_id] = dataclasses.replace(user, user_id=user_id, roles=())
        return user_id

    def save(self, user: User) -> bool:
        if user.user_id not in self.by_id:
            return False
        self.by_id[user.user_id] = dataclasses.replace(user, roles=())
        self.saved.append(user.user_id)
        return True


@dataclass
class InMemoryRoles:
    roles: dict[int, Role] = field(default_factory=dict)

    def get_by_id(self, role_id: int) -> Optional[Role]:
        return self.roles.get(role_id)

    def get_by_name(self, name: str) -> Optional[Role]:
        return next((r for r in self.roles.values() if r.name == name), None)

    def list_by_ids(self, role_ids: Iterable[int]):
        return [self.roles[i] for i in role_ids if i in self.roles]


@dataclass
class InMemoryMenus:
    menus: dict[int, Menu] = field(default_factory=dict)

    def get_by_id(self, menu_id: int) -> Optional[Menu]:
        return self.menus.get(menu_id)

    def list_children(self, parent_id: int = 0, *, visible_only: bool = True):
        return [m for m in self.menus.values() if m.parent_id == parent_id and (m.visible or not visible_only)]


@dataclass
class InMemoryLogs:
    entries: list[LogEntry] = field(default_factory=list)

    def create_log(self, *, category, action, subject, subject_id, detail, ip, created_at) -> int:
        log_id = len(self.entries) + 1
        self.entries.append(LogEntry(log_id, category, action, subject, subject_id, detail, ip, created_at))
        return log_id

    def list_recent(self, *, category=None, limit=50):
        items = [e for e in reversed(self.entries) if category is None or e.category == category]
        return items[:limit]

    def actions(self) -> list[str]:
        return [e.action for e in self.entries]


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def roles_repo() -> InMemoryRoles:
    return InMemoryRoles(
        {
            1: Role(role_id=1, name="Administrator", is_system=True),
            2: Role(role_id=2, name="Staff"),
        }
    )


@pytest.fixture
def logs_repo() -> InMemoryLogs:
    return InMemoryLogs()


@pytest.fixture
def registry(users_repo, roles_repo, logs_repo, fixed_now) -> ServiceRegistry:
    registry = ServiceRegistry()
    registry.register_instance(UserRepository, users_repo)
    registry.register_instance(RoleRepository, roles_repo)
    registry.register_instance(MenuRepository, InMemoryMenus())
    registry.register_instance(LogRepository, logs_repo)
    registry.register(LogProvider, lambda r: LogProvider(r.resolve(LogRepository), clock=lambda: fixed_now))
    registry.register(
        UserService,
        lambda r: UserService(
            r.resolve(UserRepository), r.resolve(RoleRepository), r.resolve(LogProvider), clock=lambda: fixed_now
        ),
    )
    return registry


@pytest.fixture
def container(registry):
    return build_container(registry=registry)


@pytest.fixture
def provider(container):
    return container.manage_provider


@pytest.fixture
def app(container):
    app = create_app(container, settings_module="config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def alice(provider) -> User:
    return provider.register("alice", "secret", 0, True)
