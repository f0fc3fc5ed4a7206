from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_COOKIE_KEY, DEFAULT_REMEMBER_ME_DAYS
from .core.registry import ServiceRegistry
from .database.connection import DBConfig, DatabaseConnection
from .logs.mysql_log_repository import MySQLLogRepository
from .logs.repository import LogRepository
from .logs.service import LogProvider
from .menus.mysql_menu_repository import MySQLMenuRepository
from .menus.repository import MenuRepository
from .provider.base import ManageProvider
from .provider.session_provider import DefaultManageProvider
from .roles.mysql_role_repository import MySQLRoleRepository
from .roles.repository import RoleRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    registry: ServiceRegistry

    users_repo: UserRepository
    roles_repo: RoleRepository
    menus_repo: MenuRepository
    logs_repo: LogRepository

    log_provider: LogProvider
    user_service: UserService
    manage_provider: ManageProvider


def build_container(
    *,
    db_config: Optional[dict] = None,
    registry: Optional[ServiceRegistry] = None,
    cookie_key: str = DEFAULT_COOKIE_KEY,
    remember_days: int = DEFAULT_REMEMBER_ME_DAYS,
    audit_log_enabled: bool = True,
) -> Container:
    """Wire default bindings into ``registry`` and resolve them.

    Bindings already present in ``registry`` are kept, so tests and custom
    providers register theirs first.
    """
    registry = registry or ServiceRegistry()
    if db_config is not None:
        registry.auto_register(DatabaseConnection, lambda r: DatabaseConnection(DBConfig.from_mapping(db_config)))

    (
        registry.auto_register(RoleRepository, lambda r: MySQLRoleRepository(r.resolve(DatabaseConnection)))
        .auto_register(MenuRepository, lambda r: MySQLMenuRepository(r.resolve(DatabaseConnection)))
        .auto_register(LogRepository, lambda r: MySQLLogRepository(r.resolve(DatabaseConnection)))
        .auto_register(UserRepository, lambda r: MySQLUserRepository(r.resolve(DatabaseConnection)))
    )
    registry.auto_register(LogProvider, lambda r: LogProvider(r.resolve(LogRepository), enabled=audit_log_enabled))
    registry.auto_register(
        UserService,
        lambda r: UserService(r.resolve(UserRepository), r.resolve(RoleRepository), r.resolve(LogProvider)),
    )
    registry.auto_register(
        ManageProvider,
        lambda r: DefaultManageProvider(
            r.resolve(UserService), r, cookie_key=cookie_key, remember_days=remember_days
        ),
    )

    return Container(
        registry=registry,
        users_repo=registry.resolve(UserRepository),
        roles_repo=registry.resolve(RoleRepository),
        menus_repo=registry.resolve(MenuRepository),
        logs_repo=registry.resolve(LogRepository),
        log_provider=registry.resolve(LogProvider),
        user_service=registry.resolve(UserService),
        manage_provider=registry.resolve(ManageProvider),
    )
