"""Example: use the service layer without Flask.

Controllers stay thin; lookups, registration and credential checks live in
``UserService`` and can be driven directly, e.g. from a maintenance shell.
"""

import importlib

from config import get_settings_module

from membership.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    user = container.user_service.find_by_name("admin")
    print(user.to_dict() if user else "no admin account, run scripts/seed_db.py")
    for entry in container.log_provider.recent(limit=5):
        print(entry.created_at, entry.category, entry.action, entry.subject)


if __name__ == "__main__":
    main()
